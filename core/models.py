"""
Core data models for the indexing and classification pipeline.

This module defines the data structures used to represent file entries handed
to the indexer, the classification of a single file, and the codebase index
produced by an indexing run.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from models import (
    ArchitecturalRole,
    FileType,
    ImportanceCategory,
    RecommendationPriority,
    RecommendationType,
)


@dataclass(frozen=True)
class FileEntry:
    """
    A single file of an uploaded codebase, as supplied by the caller.

    Attributes:
        path: Path of the file relative to the codebase root. Must be non-empty.
        content: Text content of the file. May be empty.
        size: Size of the file in bytes. Must be non-negative.
        type: Optional declared file type. When absent, the indexer detects it.
    """

    path: str
    content: str = ""
    size: int = 0
    type: FileType | None = None


@dataclass
class PathInfo:
    """
    Derived attributes of a normalized, "/"-separated file path.

    Attributes:
        path: The path the attributes were computed from.

    Computed Attributes (set in __post_init__):
        name: The last path segment, including its extension (e.g., "index.ts").
            Case is preserved because several heuristics are case-sensitive
            (e.g., "Dockerfile", "Main.java").
        extension: Lowercase text after the last "." of the name, without the
            dot (e.g., "ts"). Empty when the name has no ".".
        parents: Set of parent directory names with their case preserved, used
            for directory checks (e.g., {"src", "Api"} for "src/Api/routes.ts").
            Directory checks are case-sensitive unless `in_dir` is asked to
            ignore case.
    """

    path: str

    def __post_init__(self):
        """Compute derived attributes from the path."""
        segments = self.path.split("/")
        self.name = segments[-1]
        self.extension = (
            self.name.rsplit(".", 1)[1].lower() if "." in self.name else ""
        )
        self.parents = {s for s in segments[:-1] if s}

    def name_contains(self, markers: tuple[str, ...]) -> bool:
        return any(marker in self.name for marker in markers)

    def in_dir(self, dirs: frozenset[str], ignore_case: bool = False) -> bool:
        if ignore_case:
            return any(parent.lower() in dirs for parent in self.parents)
        return not self.parents.isdisjoint(dirs)


@dataclass(frozen=True)
class ImportanceScore:
    """
    Importance of a file, with the reasons that produced it.

    Attributes:
        score: Numeric importance, clamped to [0, 200].
        reasons: Ordered, human-readable explanations of the score.
        category: Bucket derived from `score` by a threshold table.
    """

    score: int
    reasons: tuple[str, ...]
    category: ImportanceCategory


@dataclass(frozen=True)
class FileCharacteristics:
    is_entry_point: bool = False
    is_configuration: bool = False
    is_package_definition: bool = False
    is_schema: bool = False
    is_infrastructure: bool = False
    is_test: bool = False
    is_documentation: bool = False
    is_generated: bool = False
    has_complex_logic: bool = False
    has_external_dependencies: bool = False
    is_public_interface: bool = False
    architectural_role: ArchitecturalRole = ArchitecturalRole.UNKNOWN


@dataclass(frozen=True)
class ClassificationRecommendation:
    type: RecommendationType
    priority: RecommendationPriority
    description: str
    action: str


@dataclass(frozen=True)
class FileClassification:
    """The complete output of classifying one file."""

    importance: ImportanceScore
    characteristics: FileCharacteristics
    recommendations: tuple[ClassificationRecommendation, ...] = ()


@dataclass(frozen=True)
class ScoringRule:
    """
    Caller-supplied score adjustment for paths matching a pattern.

    Attributes:
        pattern: A plain string (matched as a substring of the path) or a
            compiled regular expression (matched with `search`).
        score_adjustment: Points added (or subtracted, if negative) on a match.
        reason: Explanation appended to the score's reasons on a match.
        category: Optional informational category the rule is aimed at.
    """

    pattern: str | re.Pattern[str]
    score_adjustment: int
    reason: str
    category: ImportanceCategory | None = None

    def matches(self, path: str) -> bool:
        if isinstance(self.pattern, str):
            return self.pattern in path
        return self.pattern.search(path) is not None


@dataclass(frozen=True)
class CategoryThresholds:
    """Lower score bounds of each importance category."""

    critical: int
    important: int
    normal: int

    def categorize(self, score: int) -> ImportanceCategory:
        if score >= self.critical:
            return ImportanceCategory.CRITICAL
        if score >= self.important:
            return ImportanceCategory.IMPORTANT
        if score >= self.normal:
            return ImportanceCategory.NORMAL
        return ImportanceCategory.IGNORE


@dataclass(frozen=True)
class FileIndexEntry:
    path: str
    type: FileType
    size: int
    importance: ImportanceScore
    language: str | None
    last_modified: datetime


@dataclass
class PriorityFileMap:
    package_files: list[str] = field(default_factory=list)
    config_files: list[str] = field(default_factory=list)
    entry_points: list[str] = field(default_factory=list)
    schemas: list[str] = field(default_factory=list)
    docker_files: list[str] = field(default_factory=list)
    cicd_files: list[str] = field(default_factory=list)

    def all_paths(self) -> set[str]:
        """Every path that appears in at least one list."""
        return {
            *self.package_files,
            *self.config_files,
            *self.entry_points,
            *self.schemas,
            *self.docker_files,
            *self.cicd_files,
        }


@dataclass
class CodebaseStatistics:
    total_files: int
    total_size: int
    language_distribution: dict[str, int]
    file_type_distribution: dict[FileType, int]
    complexity_score: int


@dataclass(frozen=True)
class AST:
    """Simplified syntax tree placeholder stored by the cache collaborator."""

    type: str
    body: tuple[Any, ...] = ()
    source_type: str = "module"


@dataclass(frozen=True)
class DependencyNode:
    id: str
    type: str
    name: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DependencyEdge:
    source: str
    target: str
    type: str
    weight: float = 1.0


@dataclass
class DependencyGraph:
    nodes: list[DependencyNode] = field(default_factory=list)
    edges: list[DependencyEdge] = field(default_factory=list)


@dataclass
class CodebaseIndex:
    """
    The full output of an indexing run.

    Attributes:
        file_index: Indexed files, sorted by importance score (descending).
            Files with equal scores keep their input order.
        priority_files: Paths grouped by priority category.
        ast_cache: Always empty; reserved for parsed syntax trees.
        dependency_graph: Always empty; reserved for dependency analysis.
        statistics: Aggregate statistics over `file_index`.
    """

    file_index: list[FileIndexEntry]
    priority_files: PriorityFileMap
    ast_cache: dict[str, AST]
    dependency_graph: DependencyGraph
    statistics: CodebaseStatistics


@dataclass(frozen=True)
class CodebaseMetadata:
    name: str
    description: str | None = None


@dataclass
class CodebaseInput:
    files: list[FileEntry]
    metadata: CodebaseMetadata = field(
        default_factory=lambda: CodebaseMetadata(name="codebase")
    )


@dataclass
class IndexingStatistics:
    """Diagnostics of one indexing run."""

    total_files_scanned: int
    files_indexed: int
    files_ignored: int
    total_size_bytes: int
    processing_time_ms: int
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class IndexingResult:
    index: CodebaseIndex
    statistics: IndexingStatistics
