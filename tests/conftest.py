"""
Pytest configuration and shared fixtures for the analytics pipeline tests.
"""
import pytest

from unifiedanalytics.core.domain.points import PointKind, ValidatedPoint


@pytest.fixture
def sample_payload():
    """A small, well-formed payload in the shape the dashboard API returns."""
    return {
        "historical": [
            {"kind": "historical", "date": "2025-01-01", "revenue": 1200.50, "orders_count": 15,
             "conversion_rate": 3.2, "avg_order_value": 80.03, "isPrediction": False},
            {"kind": "historical", "date": "2025-01-02", "revenue": 980.75, "orders_count": 12,
             "conversion_rate": 2.8, "avg_order_value": 81.73, "isPrediction": False},
            {"kind": "historical", "date": "2025-01-03", "revenue": 1350.25, "orders_count": 18,
             "conversion_rate": 3.5, "avg_order_value": 75.01, "isPrediction": False},
        ],
        "predictions": [
            {"kind": "prediction", "date": "2025-01-04", "revenue": 1100.00, "orders_count": 13,
             "conversion_rate": 3.0, "avg_order_value": 84.62, "isPrediction": True,
             "confidence_score": 0.85,
             "confidence_interval": {"revenue_min": 770.00, "revenue_max": 1430.00,
                                     "orders_min": 9, "orders_max": 17}},
            {"kind": "prediction", "date": "2025-01-05", "revenue": 1250.00, "orders_count": 16,
             "conversion_rate": 3.1, "avg_order_value": 78.13, "isPrediction": True,
             "confidence_score": 0.82,
             "confidence_interval": {"revenue_min": 875.00, "revenue_max": 1625.00,
                                     "orders_min": 11, "orders_max": 21}},
        ],
        "period_days": 60,
    }


def make_point(date, kind=PointKind.HISTORICAL, **fields):
    return ValidatedPoint(date=date, kind=kind, **fields)


@pytest.fixture
def point_factory():
    return make_point
