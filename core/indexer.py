"""
Codebase indexing.

This module turns a flat list of file entries into a CodebaseIndex: entries are
validated, filtered by ignore rules and size bounds, scored with the configured
scoring strategy, sorted by importance and aggregated into a priority file map
and statistics.

Per-file problems never abort a run. They are reported in the run's errors and
warnings, and the affected file is left out of the index. The only fatal
failure is an empty input, which raises FileIndexingError.
"""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
import logging
import re
import time
from typing import Mapping, Optional

from constants import (
    CONFIG_FILE_PATTERNS,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_FILES,
    DEFAULT_TOP_PRIORITY_LIMIT,
    ENTRY_POINT_FILES,
    PACKAGE_FILES,
    PRIORITY_MAP_CICD_DIRS,
    PRIORITY_MAP_CICD_NAME_MARKERS,
    PRIORITY_MAP_DOCKER_DIRS,
    PRIORITY_MAP_DOCKER_FILE_NAMES,
    PRIORITY_MAP_DOCKER_NAME_MARKERS,
    PRIORITY_MAP_SCHEMA_DIRS,
    PRIORITY_MAP_SCHEMA_SUFFIXES,
    SCHEMA_NAME_MARKERS,
)
from core.classifier import FilePriorityClassifier
from core.classifier import get_top_priority_files as select_top_priority_files
from core.exceptions import FileIndexingError
from core.file_utils import DefaultFileUtils, FileUtils
from core.log import get_logger
from core.models import (
    CodebaseIndex,
    CodebaseInput,
    CodebaseStatistics,
    DependencyGraph,
    FileEntry,
    FileIndexEntry,
    IndexingResult,
    IndexingStatistics,
    PathInfo,
    PriorityFileMap,
)
from core.scoring import ImportanceScorer, create_scorer
from models import FileType, ScoringStrategy
from ui.progress_display import NoOpProgressDisplay, ProgressDisplay

INDEXING_SUGGESTIONS = [
    "Check file permissions",
    "Verify file structure",
    "Reduce file count or size",
]


@dataclass(frozen=True)
class IndexerOptions:
    """
    Options controlling an indexing run.

    Attributes:
        max_files: Maximum number of entries in the index. Indexing stops once
            the index reaches this size.
        max_file_size: Files larger than this many bytes are skipped with a
            warning.
        custom_ignore_patterns: Extra ignore patterns. Patterns containing "*"
            are glob-star patterns matched anywhere in the path; others are
            plain substrings.
        custom_file_type_rules: Exact normalized path to FileType overrides.
        include_content: Reserved; has no effect.
        calculate_hashes: Reserved; has no effect.
        scoring_strategy: Which importance scorer to use.
    """

    max_files: int = DEFAULT_MAX_FILES
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    custom_ignore_patterns: tuple[str, ...] = ()
    custom_file_type_rules: Mapping[str, FileType] = field(default_factory=dict)
    include_content: bool = False
    calculate_hashes: bool = False
    scoring_strategy: ScoringStrategy = ScoringStrategy.FAST


class FileIndexer:
    """
    Builds a prioritized index of a codebase.

    Attributes:
        file_utils: File utilities used for normalization, ignore rules, type
            and language detection.
        options: The indexing options.
        scorer: The importance scorer selected by `options.scoring_strategy`.
        progress_display: Progress reporter. Defaults to a no-op display.
        logger: Logger for warnings and per-file debug output.
    """

    def __init__(
        self,
        file_utils: Optional[FileUtils] = None,
        options: Optional[IndexerOptions] = None,
        classifier: Optional[FilePriorityClassifier] = None,
        progress_display: Optional[ProgressDisplay] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.file_utils = file_utils or DefaultFileUtils()
        self.options = options or IndexerOptions()
        self.logger = logger or get_logger("indexer")
        self.progress_display = (
            progress_display if progress_display is not None else NoOpProgressDisplay()
        )
        self.scorer: ImportanceScorer = create_scorer(
            self.options.scoring_strategy,
            file_utils=self.file_utils,
            classifier=classifier,
        )
        self._ignore_matchers = [
            _compile_ignore_pattern(p) for p in self.options.custom_ignore_patterns
        ]

    def index_codebase(self, codebase_input: CodebaseInput) -> IndexingResult:
        """
        Index a codebase.

        Files are processed strictly in input order, so the `max_files` cutoff
        depends on that order. The input entries are never modified.

        Args:
            codebase_input: The files to index and their codebase metadata.

        Returns:
            IndexingResult with the index and the run's diagnostics.

        Raises:
            FileIndexingError: If no files are provided, or if post-processing
                fails unexpectedly.
        """
        start = time.perf_counter()
        total_files = len(codebase_input.files)

        if total_files == 0:
            raise self._indexing_error(
                "No files provided for indexing", total_files, start
            )

        try:
            return self._index(codebase_input, start)
        except FileIndexingError:
            raise
        except Exception as e:
            raise self._indexing_error(str(e), total_files, start) from e

    def get_files_by_type(
        self, index: CodebaseIndex, file_type: FileType
    ) -> list[FileIndexEntry]:
        return [entry for entry in index.file_index if entry.type == file_type]

    def get_files_by_language(
        self, index: CodebaseIndex, language: str
    ) -> list[FileIndexEntry]:
        return [entry for entry in index.file_index if entry.language == language]

    def search_files(
        self, index: CodebaseIndex, pattern: str | re.Pattern[str]
    ) -> list[FileIndexEntry]:
        """
        Find entries whose path matches a pattern.

        Args:
            index: The index to search.
            pattern: A string, compiled as a case-insensitive regular
                expression, or an already compiled pattern used as is.

        Returns:
            Matching entries, in index order.
        """
        regex = re.compile(pattern, re.IGNORECASE) if isinstance(pattern, str) else pattern
        return [entry for entry in index.file_index if regex.search(entry.path)]

    def get_top_priority_files(
        self, index: CodebaseIndex, limit: int = DEFAULT_TOP_PRIORITY_LIMIT
    ) -> list[FileIndexEntry]:
        return select_top_priority_files(index.file_index, limit)

    def _index(self, codebase_input: CodebaseInput, start: float) -> IndexingResult:
        files = codebase_input.files
        errors: list[str] = []
        warnings: list[str] = []

        valid_files = self._filter_files(files)
        if not valid_files:
            warnings.append("No files remaining after filtering")

        file_index: list[FileIndexEntry] = []
        files_ignored = 0
        total_size = 0

        total = len(valid_files)
        # Report progress in 10% increments, but at least 1
        advance = max(1, int(total * 0.1))
        items_processed = 0

        with self.progress_display as display:
            display.on_start(f"Indexing {total} files...", total=total)

            for file in valid_files:
                items_processed += 1
                if items_processed % advance == 0:
                    display.on_update(advance=advance)

                try:
                    if self._should_ignore_file(file.path):
                        self.logger.debug("Ignoring %s", file.path)
                        files_ignored += 1
                        continue

                    if file.size > self.options.max_file_size:
                        warnings.append(
                            f"File {file.path} exceeds maximum size limit ({file.size} bytes)"
                        )
                        files_ignored += 1
                        continue

                    file_index.append(self._create_index_entry(file))
                    total_size += file.size
                except Exception as e:
                    errors.append(f"Error processing file {file.path}: {e}")
                    continue

                if len(file_index) >= self.options.max_files:
                    warnings.append(
                        f"Reached maximum file limit ({self.options.max_files}), stopping indexing"
                    )
                    break

            display.on_complete(f"Indexed {len(file_index)} files.", completed=total)

        # sorted() is stable, so equal scores keep their input order
        file_index = sorted(file_index, key=lambda e: e.importance.score, reverse=True)

        index = CodebaseIndex(
            file_index=file_index,
            priority_files=self._create_priority_file_map(file_index),
            ast_cache={},
            dependency_graph=DependencyGraph(),
            statistics=self._calculate_statistics(file_index),
        )

        for warning in warnings:
            self.logger.warning(warning)
        for error in errors:
            self.logger.error(error)

        return IndexingResult(
            index=index,
            statistics=IndexingStatistics(
                total_files_scanned=len(files),
                files_indexed=len(file_index),
                files_ignored=files_ignored,
                total_size_bytes=total_size,
                processing_time_ms=_elapsed_ms(start),
                errors=errors,
                warnings=warnings,
            ),
        )

    def _filter_files(self, files: list[FileEntry]) -> list[FileEntry]:
        """Drop invalid entries and return copies with normalized paths."""
        valid: list[FileEntry] = []
        for file in files:
            if not isinstance(file.path, str) or not file.path:
                continue
            if not isinstance(file.size, int) or isinstance(file.size, bool):
                continue
            if file.size < 0:
                continue
            valid.append(replace(file, path=self.file_utils.normalize_path(file.path)))
        return valid

    def _should_ignore_file(self, path: str) -> bool:
        if self.file_utils.should_ignore_file(path):
            return True
        return any(matcher(path) for matcher in self._ignore_matchers)

    def _create_index_entry(self, file: FileEntry) -> FileIndexEntry:
        path = file.path

        file_type = self.options.custom_file_type_rules.get(path) or file.type
        if file_type is None:
            file_type = self.file_utils.get_file_type(path, file.content)

        return FileIndexEntry(
            path=path,
            type=file_type,
            size=file.size,
            importance=self.scorer.score(path, file.content, file_type),
            language=self.file_utils.get_language_from_path(path),
            last_modified=datetime.now(UTC),
        )

    def _create_priority_file_map(
        self, file_index: list[FileIndexEntry]
    ) -> PriorityFileMap:
        priority_files = PriorityFileMap()

        for entry in file_index:
            info = PathInfo(entry.path)

            if entry.type == FileType.PACKAGE or info.name in PACKAGE_FILES:
                priority_files.package_files.append(entry.path)

            if entry.type == FileType.CONFIG or any(
                pattern.search(info.name) for pattern in CONFIG_FILE_PATTERNS
            ):
                priority_files.config_files.append(entry.path)

            if info.name in ENTRY_POINT_FILES:
                priority_files.entry_points.append(entry.path)

            if (
                info.name_contains(SCHEMA_NAME_MARKERS)
                or info.in_dir(PRIORITY_MAP_SCHEMA_DIRS, ignore_case=True)
                or info.name.endswith(PRIORITY_MAP_SCHEMA_SUFFIXES)
            ):
                priority_files.schemas.append(entry.path)

            if (
                info.name_contains(PRIORITY_MAP_DOCKER_NAME_MARKERS)
                or info.name in PRIORITY_MAP_DOCKER_FILE_NAMES
                or info.in_dir(PRIORITY_MAP_DOCKER_DIRS, ignore_case=True)
            ):
                priority_files.docker_files.append(entry.path)

            if info.in_dir(PRIORITY_MAP_CICD_DIRS, ignore_case=True) or info.name_contains(
                PRIORITY_MAP_CICD_NAME_MARKERS
            ):
                priority_files.cicd_files.append(entry.path)

        return priority_files

    def _calculate_statistics(
        self, file_index: list[FileIndexEntry]
    ) -> CodebaseStatistics:
        language_distribution: dict[str, int] = {}
        file_type_distribution = {file_type: 0 for file_type in FileType}
        total_size = 0
        score_sum = 0

        for entry in file_index:
            if entry.language:
                language_distribution[entry.language] = (
                    language_distribution.get(entry.language, 0) + 1
                )
            file_type_distribution[entry.type] += 1
            total_size += entry.size
            score_sum += entry.importance.score

        return CodebaseStatistics(
            total_files=len(file_index),
            total_size=total_size,
            language_distribution=language_distribution,
            file_type_distribution=file_type_distribution,
            # 0.1 per score point, rounded half-up
            complexity_score=(score_sum + 5) // 10,
        )

    def _indexing_error(
        self, message: str, total_files: int, start: float
    ) -> FileIndexingError:
        return FileIndexingError(
            message=f"File indexing failed: {message}",
            suggestions=list(INDEXING_SUGGESTIONS),
            partial_results={
                "processed_files": 0,
                "total_files": total_files,
                "processing_time_ms": _elapsed_ms(start),
            },
        )


def _compile_ignore_pattern(pattern: str):
    if "*" in pattern:
        regex = re.compile(".*".join(re.escape(part) for part in pattern.split("*")))
        return lambda path: regex.search(path) is not None
    return lambda path: pattern in path


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
