"""
Series Merger - Combines historical and prediction points into one ordered series.
"""

from datetime import date

from unifiedanalytics.core.domain.points import ValidatedPoint


def merge(
    historical: list[ValidatedPoint],
    predictions: list[ValidatedPoint],
    include_predictions: bool = True,
) -> list[ValidatedPoint]:
    """
    Concatenate and stable-sort points by date ascending.

    Predictions are excluded entirely when include_predictions is False. Points
    sharing a date are kept, in the order they were encountered.
    """
    combined = list(historical)
    if include_predictions:
        combined.extend(predictions)

    # sorted() is stable: ties keep historical-then-prediction input order
    return sorted(combined, key=lambda point: date.fromisoformat(point.date))
