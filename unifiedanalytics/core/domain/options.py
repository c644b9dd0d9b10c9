"""
View Options Domain Model - The small set of caller inputs that shape a projection.

Uses Pydantic for validation. Options are frozen so they can key the projection cache.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from unifiedanalytics.core.domain.points import MetricKey


class FilterPolicy(str, Enum):
    """What to do with records whose raw shape was too malformed to trust."""

    KEEP_WITH_DEFAULTS = "keep_with_defaults"
    DROP_MALFORMED = "drop_malformed"


TimeRange = Literal["all", "last30", "last7"]

# Historical points kept for each time range; None keeps everything
TIME_RANGE_DAYS: dict[str, int | None] = {
    "all": None,
    "last30": 30,
    "last7": 7,
}


class ProjectionOptions(BaseModel):
    """
    Options for a single pipeline run.
    """

    model_config = ConfigDict(frozen=True)

    metric: MetricKey = MetricKey.REVENUE
    include_predictions: bool = True
    current_window: int = Field(default=7, ge=0)
    forecast_window: int = Field(default=30, ge=0)
    time_range: TimeRange = "all"
    filter_policy: FilterPolicy = FilterPolicy.KEEP_WITH_DEFAULTS

    @field_validator("metric", mode="before")
    @classmethod
    def _parse_metric(cls, value):
        return MetricKey.parse(value)

    def cache_key(self) -> tuple:
        return (
            self.metric,
            self.include_predictions,
            self.current_window,
            self.forecast_window,
            self.time_range,
            self.filter_policy,
        )
