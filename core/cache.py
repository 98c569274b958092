"""
Caching collaborator for parsed syntax trees and analysis results.

The cache is an explicit dependency: callers construct an InMemoryCacheManager
and pass it where it is needed. There is no shared module-level instance.
"""

from dataclasses import dataclass
from datetime import datetime
import time
from typing import Any, Callable, Iterable, Optional, Protocol

from core.models import AST

ANALYSIS_MAX_AGE_SECONDS = 60 * 60


@dataclass(frozen=True)
class CacheStats:
    ast_cache_size: int
    analysis_cache_size: int
    hit_rate: float
    total_requests: int
    total_hits: int


class CacheManager(Protocol):
    """Protocol for AST and analysis-result caches."""

    def get_cached_ast(self, file_path: str, last_modified: datetime) -> Optional[AST]:
        """Return the cached tree if it was stored for the same modification time."""

    def set_cached_ast(self, file_path: str, ast: AST, last_modified: datetime) -> None:
        """Store a tree for a file at a given modification time."""

    def get_cached_analysis(self, codebase_hash: str) -> Any:
        """Return a cached analysis result, or None if missing or expired."""

    def set_cached_analysis(self, codebase_hash: str, result: Any) -> None:
        """Store an analysis result for a codebase hash."""

    def invalidate_cache(self, changed_files: Iterable[str]) -> None:
        """Drop entries affected by changed files."""

    def clear_cache(self) -> None:
        """Drop every entry and reset statistics."""

    def get_cache_stats(self) -> CacheStats:
        """Return cache sizes and hit statistics."""


@dataclass
class _AstEntry:
    ast: AST
    last_modified: datetime


@dataclass
class _AnalysisEntry:
    result: Any
    stored_at: float


class InMemoryCacheManager:
    """
    Dictionary-backed CacheManager.

    AST entries are valid as long as the file's modification time is unchanged.
    Analysis entries expire one hour after they were stored; expired entries are
    evicted on lookup.

    Attributes:
        clock: Function returning the current time in seconds. Injected so
            expiry can be tested without sleeping.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._ast_cache: dict[str, _AstEntry] = {}
        self._analysis_cache: dict[str, _AnalysisEntry] = {}
        self._total_requests = 0
        self._total_hits = 0

    def get_cached_ast(self, file_path: str, last_modified: datetime) -> Optional[AST]:
        self._total_requests += 1

        cached = self._ast_cache.get(file_path)
        if cached is not None and cached.last_modified == last_modified:
            self._total_hits += 1
            return cached.ast

        return None

    def set_cached_ast(self, file_path: str, ast: AST, last_modified: datetime) -> None:
        self._ast_cache[file_path] = _AstEntry(ast=ast, last_modified=last_modified)

    def get_cached_analysis(self, codebase_hash: str) -> Any:
        self._total_requests += 1

        cached = self._analysis_cache.get(codebase_hash)
        if cached is None:
            return None

        if self.clock() - cached.stored_at < ANALYSIS_MAX_AGE_SECONDS:
            self._total_hits += 1
            return cached.result

        del self._analysis_cache[codebase_hash]
        return None

    def set_cached_analysis(self, codebase_hash: str, result: Any) -> None:
        self._analysis_cache[codebase_hash] = _AnalysisEntry(
            result=result, stored_at=self.clock()
        )

    def invalidate_cache(self, changed_files: Iterable[str]) -> None:
        """
        Drop the AST entries of changed files.

        Any change also clears the whole analysis cache, since an analysis
        result covers the entire codebase.
        """
        changed = list(changed_files)
        for file_path in changed:
            self._ast_cache.pop(file_path, None)

        if changed:
            self._analysis_cache.clear()

    def clear_cache(self) -> None:
        self._ast_cache.clear()
        self._analysis_cache.clear()
        self._total_requests = 0
        self._total_hits = 0

    def get_cache_stats(self) -> CacheStats:
        hit_rate = (
            self._total_hits / self._total_requests if self._total_requests > 0 else 0.0
        )
        return CacheStats(
            ast_cache_size=len(self._ast_cache),
            analysis_cache_size=len(self._analysis_cache),
            hit_rate=hit_rate,
            total_requests=self._total_requests,
            total_hits=self._total_hits,
        )
