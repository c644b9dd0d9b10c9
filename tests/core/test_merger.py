"""
Tests for the series merger.
"""
from unifiedanalytics.core.domain.points import PointKind
from unifiedanalytics.core.services.merger import merge

H, P = PointKind.HISTORICAL, PointKind.PREDICTION


def test_merge_orders_by_date(point_factory):
    historical = [point_factory("2024-01-03"), point_factory("2024-01-01")]
    predictions = [point_factory("2024-01-05", P), point_factory("2024-01-02", P)]

    series = merge(historical, predictions, include_predictions=True)

    assert [p.date for p in series] == ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-05"]
    dates = [p.date for p in series]
    assert dates == sorted(dates)


def test_merge_excludes_predictions(point_factory):
    historical = [point_factory("2024-01-01")]
    predictions = [point_factory("2024-01-02", P), point_factory("2024-01-03", P)]

    series = merge(historical, predictions, include_predictions=False)

    assert len(series) == 1
    assert not any(p.kind is P for p in series)


def test_merge_keeps_duplicates_in_input_order(point_factory):
    historical = [point_factory("2024-01-02", revenue=1.0), point_factory("2024-01-02", revenue=2.0)]
    predictions = [point_factory("2024-01-02", P, revenue=3.0)]

    series = merge(historical, predictions)

    assert [p.revenue for p in series] == [1.0, 2.0, 3.0]
    assert [p.kind for p in series] == [H, H, P]


def test_merge_empty_inputs():
    assert merge([], [], include_predictions=True) == []


def test_merge_does_not_mutate_inputs(point_factory):
    historical = [point_factory("2024-01-02"), point_factory("2024-01-01")]
    merge(historical, [])
    assert [p.date for p in historical] == ["2024-01-02", "2024-01-01"]
