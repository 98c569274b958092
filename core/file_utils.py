"""
File utilities shared by the indexer and the fast importance scorer.

This module provides file type detection, the "fast" importance heuristic,
built-in ignore rules, language lookup and path normalization. All checks are
pure functions of the path (content is accepted but not inspected), driven by
the FAST_* tables in `constants.py`.
"""

import re
from typing import Optional, Protocol

from constants import (
    ASSET_FILE_PATTERN,
    DATA_FILE_PATTERN,
    FAST_CONFIG_FILE_PATTERNS,
    FAST_DOC_SUFFIXES,
    FAST_ENTRY_POINT_FILES,
    FAST_INFRA_NAME_MARKERS,
    FAST_PACKAGE_FILES,
    FAST_SCORES,
    FAST_TEST_DIRS,
    FAST_TEST_FLOOR,
    FAST_TEST_NAME_MARKERS,
    FAST_TEST_PENALTY,
    FAST_THRESHOLDS,
    IGNORED_DIRS,
    IGNORED_FILE_NAMES,
    IGNORED_SUFFIXES,
    LANGUAGE_BY_EXTENSION,
    MAX_SCORE,
    MIN_SCORE,
    SCHEMA_NAME_MARKERS,
    SOURCE_FILE_PATTERN,
)
from core.models import ImportanceScore, PathInfo
from models import FileType


class FileUtils(Protocol):
    """
    Protocol defining the file utility operations used by the indexer.

    This protocol allows the indexer to run against alternative implementations
    (e.g., stubs in tests, or stricter ignore rules).
    """

    def get_file_type(self, path: str, content: Optional[str] = None) -> FileType:
        """Detect the coarse type of a file from its path."""

    def calculate_importance_score(
        self, path: str, content: Optional[str] = None
    ) -> ImportanceScore:
        """Score a file with the fast heuristic."""

    def should_ignore_file(self, path: str) -> bool:
        """Return True if the file matches a built-in ignore rule."""

    def get_language_from_path(self, path: str) -> Optional[str]:
        """Return the programming language of a file, or None if unknown."""

    def normalize_path(self, path: str) -> str:
        """Return the path with "/" separators and no repeated slashes."""


class DefaultFileUtils:
    """Path-based implementation of FileUtils."""

    def get_file_type(self, path: str, content: Optional[str] = None) -> FileType:
        """
        Detect the coarse type of a file.

        Checks are evaluated in order and the first match wins: package
        manifests, configuration patterns, entry points (source), test markers,
        documentation, assets, source extensions, data extensions (config).
        Anything else falls back to source.

        Args:
            path: Normalized file path.
            content: Accepted for interface compatibility; not inspected.

        Returns:
            The detected FileType.
        """
        info = PathInfo(path)
        name = info.name

        if name in FAST_PACKAGE_FILES:
            return FileType.PACKAGE
        if _matches_any(FAST_CONFIG_FILE_PATTERNS, name):
            return FileType.CONFIG
        if name in FAST_ENTRY_POINT_FILES:
            return FileType.SOURCE
        if info.name_contains(FAST_TEST_NAME_MARKERS) or info.in_dir(FAST_TEST_DIRS):
            return FileType.TEST
        if name.endswith(FAST_DOC_SUFFIXES):
            return FileType.DOCUMENTATION
        if ASSET_FILE_PATTERN.search(name):
            return FileType.ASSET
        if SOURCE_FILE_PATTERN.search(name):
            return FileType.SOURCE
        if DATA_FILE_PATTERN.search(name):
            return FileType.CONFIG
        return FileType.SOURCE

    def calculate_importance_score(
        self, path: str, content: Optional[str] = None
    ) -> ImportanceScore:
        """
        Score a file with the fast heuristic.

        Every matching rule adds its points: package +100, entry point +80,
        configuration +60, infrastructure +70, schema +50, source +30. Test
        files are then lowered by 20 points, but never below 10.

        Args:
            path: Normalized file path.
            content: Accepted for interface compatibility; not inspected.

        Returns:
            ImportanceScore categorized with FAST_THRESHOLDS (80/50/20).
        """
        info = PathInfo(path)
        name = info.name
        score = 0
        reasons: list[str] = []

        if name in FAST_PACKAGE_FILES:
            score += FAST_SCORES["package"]
            reasons.append("Package/dependency file")

        if name in FAST_ENTRY_POINT_FILES:
            score += FAST_SCORES["entry_point"]
            reasons.append("Application entry point")

        if _matches_any(FAST_CONFIG_FILE_PATTERNS, name):
            score += FAST_SCORES["config"]
            reasons.append("Configuration file")

        if info.name_contains(FAST_INFRA_NAME_MARKERS):
            score += FAST_SCORES["infrastructure"]
            reasons.append("Infrastructure configuration")

        if info.name_contains(SCHEMA_NAME_MARKERS):
            score += FAST_SCORES["schema"]
            reasons.append("API schema definition")

        file_type = self.get_file_type(path)
        if file_type == FileType.SOURCE:
            score += FAST_SCORES["source"]
            reasons.append("Source code file")

        if file_type == FileType.TEST:
            score = max(score - FAST_TEST_PENALTY, FAST_TEST_FLOOR)
            reasons.append("Test file (lower priority)")

        score = min(max(score, MIN_SCORE), MAX_SCORE)

        return ImportanceScore(
            score=score,
            reasons=tuple(reasons),
            category=FAST_THRESHOLDS.categorize(score),
        )

    def should_ignore_file(self, path: str) -> bool:
        info = PathInfo(path)
        return (
            info.in_dir(IGNORED_DIRS)
            or info.name.endswith(IGNORED_SUFFIXES)
            or info.name in IGNORED_FILE_NAMES
        )

    def get_language_from_path(self, path: str) -> Optional[str]:
        return LANGUAGE_BY_EXTENSION.get(PathInfo(path).extension)

    def normalize_path(self, path: str) -> str:
        return re.sub(r"/+", "/", path.replace("\\", "/"))


def _matches_any(patterns: tuple[re.Pattern[str], ...], value: str) -> bool:
    return any(pattern.search(value) for pattern in patterns)
