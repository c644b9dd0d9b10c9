"""
Tests for the metric projector.
"""
import pandas as pd
import pytest

from unifiedanalytics.core.domain.points import ConfidenceInterval, MetricKey, PointKind, UnknownMetricError
from unifiedanalytics.core.services.projector import project, to_frame
from unifiedanalytics.core.services.validator import RecordValidator

P = PointKind.PREDICTION


@pytest.fixture
def series(point_factory):
    return [
        point_factory("2024-01-31", revenue=80, orders_count=4, conversion_rate=2.0),
        point_factory(
            "2024-02-01", P, revenue=50, orders_count=5, conversion_rate=2.5, confidence_score=0.9,
            confidence_intervals={
                MetricKey.REVENUE: ConfidenceInterval(40, 60),
                MetricKey.ORDERS_COUNT: ConfidenceInterval(3, 7),
            },
        ),
    ]


def test_revenue_interval_from_prediction():
    point = RecordValidator().validate({
        "date": "2024-02-01", "revenue": 50,
        "confidence_interval": {"revenue_min": 40, "revenue_max": 60},
    }, kind=P)

    [projected] = project([point], "revenue")

    assert projected.confidence_min == 40
    assert projected.confidence_max == 60
    assert projected.is_prediction is True


def test_projection_matches_series(series):
    projection = project(series, MetricKey.ORDERS_COUNT)

    assert len(projection) == len(series)
    assert [p.date for p in projection] == ["2024-01-31", "2024-02-01"]
    assert [p.value for p in projection] == [4, 5]
    assert (projection[1].confidence_min, projection[1].confidence_max) == (3, 7)
    assert projection[1].confidence_score == 0.9


def test_historical_points_have_no_band(series):
    historical = project(series, MetricKey.REVENUE)[0]
    assert historical.is_prediction is False
    assert (historical.confidence_min, historical.confidence_max) == (0, 0)
    assert historical.confidence_score == 0


def test_conversion_rate_gets_synthetic_band(series):
    projection = project(series, MetricKey.CONVERSION_RATE)

    assert projection[0].confidence_min == pytest.approx(1.6)
    assert projection[0].confidence_max == pytest.approx(2.4)
    assert projection[1].confidence_min == pytest.approx(2.0)
    assert projection[1].confidence_max == pytest.approx(3.0)


def test_avg_order_value_has_no_band(series):
    projection = project(series, MetricKey.AVG_ORDER_VALUE)
    assert all(p.confidence_min == p.confidence_max == 0 for p in projection)


def test_unknown_metric_fails_fast(series):
    with pytest.raises(UnknownMetricError):
        project(series, "profit")


def test_unknown_metric_fails_even_for_empty_series():
    with pytest.raises(ValueError):
        project([], "sessions")


def test_to_frame(series):
    df = to_frame(project(series, "revenue"))

    assert list(df.columns) == ["ds", "y", "is_prediction", "lower", "upper", "confidence_score"]
    assert len(df) == 2
    assert df["ds"].iloc[1] == pd.Timestamp("2024-02-01")
    assert df["y"].tolist() == [80, 50]
    assert df["is_prediction"].tolist() == [False, True]


def test_to_frame_empty():
    df = to_frame([])
    assert df.empty
    assert "ds" in df.columns
