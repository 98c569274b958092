"""
Tests for the cache module.

Tests cover:
- AST caching keyed by modification time
- Analysis caching with expiry
- invalidate_cache, clear_cache and get_cache_stats
"""

from datetime import UTC, datetime, timedelta

import pytest

from core.cache import ANALYSIS_MAX_AGE_SECONDS, InMemoryCacheManager
from core.models import AST


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryCacheManager(clock=clock)


@pytest.fixture
def modified():
    return datetime(2024, 1, 1, tzinfo=UTC)


# ============================================================================
# Tests for the AST cache
# ============================================================================


@pytest.mark.unit
def test_ast_cache_hit(cache, modified):
    """Should return the tree stored for the same modification time."""
    tree = AST(type="Program")
    cache.set_cached_ast("src/index.ts", tree, modified)

    assert cache.get_cached_ast("src/index.ts", modified) is tree


@pytest.mark.unit
def test_ast_cache_stale(cache, modified):
    """Should miss when the file changed since it was cached."""
    cache.set_cached_ast("src/index.ts", AST(type="Program"), modified)

    assert cache.get_cached_ast("src/index.ts", modified + timedelta(seconds=1)) is None


@pytest.mark.unit
def test_ast_cache_miss(cache, modified):
    """Should miss for unknown files."""
    assert cache.get_cached_ast("src/missing.ts", modified) is None


# ============================================================================
# Tests for the analysis cache
# ============================================================================


@pytest.mark.unit
def test_analysis_cache_hit(cache):
    """Should return a fresh analysis result."""
    cache.set_cached_analysis("abc123", {"language": "typescript"})

    assert cache.get_cached_analysis("abc123") == {"language": "typescript"}


@pytest.mark.unit
def test_analysis_cache_expires(cache, clock):
    """Should evict results once they are an hour old."""
    cache.set_cached_analysis("abc123", {"language": "typescript"})

    clock.now += ANALYSIS_MAX_AGE_SECONDS - 1
    assert cache.get_cached_analysis("abc123") is not None

    clock.now += 1
    assert cache.get_cached_analysis("abc123") is None
    assert cache.get_cache_stats().analysis_cache_size == 0


@pytest.mark.unit
def test_analysis_cache_miss(cache):
    """Should miss for unknown hashes."""
    assert cache.get_cached_analysis("unknown") is None


# ============================================================================
# Tests for invalidation and statistics
# ============================================================================


@pytest.mark.unit
def test_invalidate_cache(cache, modified):
    """Should drop changed files and every analysis result."""
    cache.set_cached_ast("a.ts", AST(type="Program"), modified)
    cache.set_cached_ast("b.ts", AST(type="Program"), modified)
    cache.set_cached_analysis("abc123", {})

    cache.invalidate_cache(["a.ts", "not-cached.ts"])

    assert cache.get_cached_ast("a.ts", modified) is None
    assert cache.get_cached_ast("b.ts", modified) is not None
    assert cache.get_cached_analysis("abc123") is None


@pytest.mark.unit
def test_invalidate_cache_nothing_changed(cache):
    """Should keep analysis results when no files changed."""
    cache.set_cached_analysis("abc123", {})

    cache.invalidate_cache([])

    assert cache.get_cached_analysis("abc123") == {}


@pytest.mark.unit
def test_cache_stats(cache, modified):
    """Should count requests and hits across both caches."""
    cache.set_cached_ast("a.ts", AST(type="Program"), modified)
    cache.set_cached_analysis("abc123", {})

    cache.get_cached_ast("a.ts", modified)
    cache.get_cached_ast("b.ts", modified)
    cache.get_cached_analysis("abc123")
    cache.get_cached_analysis("other")

    stats = cache.get_cache_stats()
    assert stats.ast_cache_size == 1
    assert stats.analysis_cache_size == 1
    assert stats.total_requests == 4
    assert stats.total_hits == 2
    assert stats.hit_rate == 0.5


@pytest.mark.unit
def test_cache_stats_without_requests(cache):
    """Should report a zero hit rate before any lookup."""
    assert cache.get_cache_stats().hit_rate == 0.0


@pytest.mark.unit
def test_clear_cache(cache, modified):
    """Should drop everything and reset statistics."""
    cache.set_cached_ast("a.ts", AST(type="Program"), modified)
    cache.set_cached_analysis("abc123", {})
    cache.get_cached_ast("a.ts", modified)

    cache.clear_cache()

    stats = cache.get_cache_stats()
    assert stats.ast_cache_size == 0
    assert stats.analysis_cache_size == 0
    assert stats.total_requests == 0
    assert stats.total_hits == 0


@pytest.mark.unit
def test_caches_are_independent():
    """Should not share entries between instances."""
    first = InMemoryCacheManager()
    second = InMemoryCacheManager()

    first.set_cached_analysis("abc123", {})

    assert second.get_cached_analysis("abc123") is None
