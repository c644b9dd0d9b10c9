"""
Statistics Aggregator - Windowed totals, averages and growth for one metric.

Figures are descriptive point estimates over fixed windows:
- current period: the last `current_window` historical points
- previous period: the `current_window` historical points before that
- forecast period: the first `forecast_window` prediction points
"""

import numpy as np

from unifiedanalytics.core.domain.points import AggregateStats, MetricKey, ValidatedPoint


def _values(points: list[ValidatedPoint], metric: MetricKey) -> np.ndarray:
    return np.fromiter((p.value_of(metric) for p in points), dtype=float, count=len(points))


def _average(total: float, count: int) -> float:
    return total / count if count else 0.0


def _percent_change(new: float, base: float) -> float:
    if base == 0:
        return 0.0
    return (new - base) / base * 100


def aggregate(
    historical: list[ValidatedPoint],
    predictions: list[ValidatedPoint],
    metric: MetricKey | str,
    current_window: int = 7,
    forecast_window: int = 30,
    include_predictions: bool = True,
) -> AggregateStats:
    """
    Summarize `metric` over the current, previous and forecast windows.

    Growth rate compares the forecast average with the current average and is 0
    when the current total is 0 or the forecast window is empty.

    Raises:
        UnknownMetricError: metric is not a known MetricKey
        ValueError: a window size is negative
    """
    metric = MetricKey.parse(metric)
    if current_window < 0 or forecast_window < 0:
        raise ValueError(
            f"Window sizes must be non-negative (current={current_window}, forecast={forecast_window})"
        )

    history = _values(historical, metric)
    split = max(len(history) - current_window, 0)
    current = history[split:]
    previous = history[max(split - current_window, 0):split]

    if include_predictions:
        forecast = _values(predictions[:forecast_window], metric)
    else:
        forecast = np.empty(0)

    current_total = float(current.sum())
    previous_total = float(previous.sum())
    forecast_total = float(forecast.sum())

    current_average = _average(current_total, len(current))
    forecast_average = _average(forecast_total, len(forecast))

    if current_total == 0 or len(forecast) == 0:
        growth = 0.0
    else:
        growth = _percent_change(forecast_average, current_average)

    return AggregateStats(
        current_total=round(current_total, 2),
        current_average=round(current_average, 2),
        forecast_total=round(forecast_total, 2),
        forecast_average=round(forecast_average, 2),
        growth_rate_percent=round(growth, 2),
        current_period_point_count=len(current),
        forecast_period_point_count=len(forecast),
        previous_total=round(previous_total, 2),
        previous_period_point_count=len(previous),
        period_change_percent=round(_percent_change(current_total, previous_total), 2),
    )
