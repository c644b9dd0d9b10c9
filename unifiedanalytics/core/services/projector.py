"""
Metric Projector - Maps a merged series onto a single chartable metric.
"""

import pandas as pd

from unifiedanalytics.core.domain.points import (
    MetricKey,
    MetricProjection,
    ProjectionPoint,
    ValidatedPoint,
)

# Synthetic band for conversion rate when no explicit interval exists.
# Applies to historical and prediction points alike; other metrics get no band.
CONVERSION_BAND_LOWER = 0.8
CONVERSION_BAND_UPPER = 1.2


def _bounds(point: ValidatedPoint, metric: MetricKey, value: float) -> tuple[float, float]:
    interval = point.confidence_intervals.get(metric) if point.is_prediction else None
    if interval is not None:
        return interval.lower, interval.upper
    if metric is MetricKey.CONVERSION_RATE:
        return value * CONVERSION_BAND_LOWER, value * CONVERSION_BAND_UPPER
    return 0.0, 0.0


def project(series: list[ValidatedPoint], metric: MetricKey | str) -> MetricProjection:
    """
    Project each point of the series onto `metric`, one output point per input point.

    Raises:
        UnknownMetricError: metric is not a known MetricKey
    """
    metric = MetricKey.parse(metric)

    projection = []
    for point in series:
        value = point.value_of(metric)
        lower, upper = _bounds(point, metric, value)
        projection.append(ProjectionPoint(
            date=point.date,
            value=value,
            is_prediction=point.is_prediction,
            confidence_min=lower,
            confidence_max=upper,
            confidence_score=point.confidence_score or 0.0,
        ))
    return projection


def to_frame(projection: MetricProjection) -> pd.DataFrame:
    """
    Convert a projection to a DataFrame.

    Columns: ['ds', 'y', 'is_prediction', 'lower', 'upper', 'confidence_score']
    """
    columns = ["ds", "y", "is_prediction", "lower", "upper", "confidence_score"]
    if not projection:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame([
        {
            "ds": p.date,
            "y": p.value,
            "is_prediction": p.is_prediction,
            "lower": p.confidence_min,
            "upper": p.confidence_max,
            "confidence_score": p.confidence_score,
        }
        for p in projection
    ], columns=columns)
    df["ds"] = pd.to_datetime(df["ds"], errors="coerce")
    return df
