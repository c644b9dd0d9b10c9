"""
Tests for ProjectionCache.
"""
from unittest.mock import MagicMock

import pytest

from unifiedanalytics.core.domain.options import ProjectionOptions
from unifiedanalytics.core.services.memo import ProjectionCache


@pytest.fixture
def compute():
    return MagicMock(side_effect=lambda: object())


def test_hit_for_same_payload_and_options(compute):
    cache = ProjectionCache()
    payload = {"historical": []}

    first = cache.get_or_compute(payload, ProjectionOptions(), compute)
    second = cache.get_or_compute(payload, ProjectionOptions(), compute)

    assert first is second
    assert compute.call_count == 1
    assert (cache.hits, cache.misses) == (1, 1)


def test_equal_but_distinct_payload_misses(compute):
    cache = ProjectionCache()
    cache.get_or_compute({"historical": []}, ProjectionOptions(), compute)
    cache.get_or_compute({"historical": []}, ProjectionOptions(), compute)
    assert compute.call_count == 2


@pytest.mark.parametrize("changed", [
    {"metric": "orders_count"},
    {"include_predictions": False},
    {"current_window": 14},
    {"forecast_window": 60},
    {"time_range": "last30"},
    {"filter_policy": "drop_malformed"},
])
def test_option_change_misses(compute, changed):
    cache = ProjectionCache()
    payload = {}
    cache.get_or_compute(payload, ProjectionOptions(), compute)
    cache.get_or_compute(payload, ProjectionOptions(**changed), compute)
    assert compute.call_count == 2


def test_lru_eviction(compute):
    cache = ProjectionCache(max_entries=2)
    a, b, c = {}, {}, {}
    opts = ProjectionOptions()

    cache.get_or_compute(a, opts, compute)
    cache.get_or_compute(b, opts, compute)
    cache.get_or_compute(a, opts, compute)  # a becomes most recent
    cache.get_or_compute(c, opts, compute)  # evicts b

    assert len(cache) == 2
    cache.get_or_compute(a, opts, compute)
    assert compute.call_count == 3
    cache.get_or_compute(b, opts, compute)
    assert compute.call_count == 4


def test_clear(compute):
    cache = ProjectionCache()
    payload = {}
    cache.get_or_compute(payload, ProjectionOptions(), compute)
    cache.clear()
    assert len(cache) == 0
    assert cache.hits == cache.misses == 0
    cache.get_or_compute(payload, ProjectionOptions(), compute)
    assert compute.call_count == 2


def test_invalid_size():
    with pytest.raises(ValueError):
        ProjectionCache(max_entries=0)
