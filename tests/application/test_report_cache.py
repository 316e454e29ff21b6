"""Tests for the report cache wrapper."""

from unittest.mock import MagicMock

import pytest

from src.application.use_cases.report_cache import ReportCache
from src.infrastructure.cache import InMemoryTtlCache


def test_get_or_compute_memoizes_per_user() -> None:
    report_cache = ReportCache(InMemoryTtlCache(), logger=MagicMock())
    compute = MagicMock(return_value=[1, 2])

    first = report_cache.get_or_compute("u1", "summary:2024-01", compute)
    second = report_cache.get_or_compute("u1", "summary:2024-01", compute)
    report_cache.get_or_compute("u2", "summary:2024-01", compute)

    assert first == second == [1, 2]
    assert compute.call_count == 2


def test_empty_results_are_cached() -> None:
    report_cache = ReportCache(InMemoryTtlCache(), logger=MagicMock())
    compute = MagicMock(return_value=[])

    report_cache.get_or_compute("u1", "by-category:2024-01:expense", compute)
    report_cache.get_or_compute("u1", "by-category:2024-01:expense", compute)

    assert compute.call_count == 1


def test_invalidate_user_forces_recompute() -> None:
    report_cache = ReportCache(InMemoryTtlCache(), logger=MagicMock())
    compute = MagicMock(side_effect=["old", "new"])

    report_cache.get_or_compute("u1", "summary", compute)
    report_cache.invalidate_user("u1")

    assert report_cache.get_or_compute("u1", "summary", compute) == "new"


def test_cache_read_and_write_failures_fall_back_to_compute() -> None:
    cache = MagicMock()
    cache.get.side_effect = ConnectionError("cache down")
    cache.set.side_effect = ConnectionError("cache down")
    logger = MagicMock()
    report_cache = ReportCache(cache, ttl_seconds=30, logger=logger)

    assert report_cache.get_or_compute("u1", "summary", lambda: 7) == 7
    assert logger.warning.call_count == 2


def test_invalidation_failures_propagate() -> None:
    cache = MagicMock()
    cache.clear_namespace.side_effect = ConnectionError("cache down")
    report_cache = ReportCache(cache, logger=MagicMock())

    with pytest.raises(ConnectionError):
        report_cache.invalidate_user("u1")


def test_disabled_cache_always_computes() -> None:
    report_cache = ReportCache(None, logger=MagicMock())
    compute = MagicMock(return_value=1)

    report_cache.get_or_compute("u1", "summary", compute)
    report_cache.get_or_compute("u1", "summary", compute)
    report_cache.invalidate_user("u1")

    assert compute.call_count == 2


def test_build_key_joins_parameters() -> None:
    assert ReportCache.build_key("monthly", "2024-01", 6) == "monthly:2024-01:6"
    assert ReportCache.namespace("u1") == "reports:u1"


def test_invalidation_during_compute_skips_the_cache_fill() -> None:
    report_cache = ReportCache(InMemoryTtlCache(), logger=MagicMock())
    values = iter(["stale", "fresh"])

    def compute_racing_a_write():
        value = next(values)
        if value == "stale":
            report_cache.invalidate_user("u1")
        return value

    first = report_cache.get_or_compute("u1", "summary", compute_racing_a_write)
    second = report_cache.get_or_compute("u1", "summary", compute_racing_a_write)

    assert first == "stale"
    assert second == "fresh"
    assert report_cache.generation("u1") == 1


def test_invalidating_another_user_does_not_skip_the_fill() -> None:
    report_cache = ReportCache(InMemoryTtlCache(), logger=MagicMock())
    compute = MagicMock(return_value=[1])

    def compute_while_other_user_writes():
        report_cache.invalidate_user("u2")
        return compute()

    report_cache.get_or_compute("u1", "summary", compute_while_other_user_writes)
    report_cache.get_or_compute("u1", "summary", compute_while_other_user_writes)

    assert compute.call_count == 1


def test_hits_and_misses_return_independent_copies() -> None:
    report_cache = ReportCache(InMemoryTtlCache(), logger=MagicMock())

    missed = report_cache.get_or_compute("u1", "monthly", lambda: [1, 2])
    missed.append(3)
    hit = report_cache.get_or_compute("u1", "monthly", lambda: [])
    hit.sort(reverse=True)

    assert report_cache.get_or_compute("u1", "monthly", lambda: []) == [1, 2]
