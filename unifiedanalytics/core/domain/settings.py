from pydantic import BaseModel, Field

from unifiedanalytics.core.domain.options import FilterPolicy, ProjectionOptions, TimeRange
from unifiedanalytics.core.domain.points import MetricKey


class AnalyticsSettings(BaseModel):
    """
    Global defaults for the analytics pipeline.
    """
    # View defaults
    current_window: int = Field(default=7, ge=0, description="Trailing historical points in the current period")
    forecast_window: int = Field(default=30, ge=0, description="Leading prediction points in the forecast period")
    include_predictions: bool = Field(default=True, description="Merge forecasts into the series")
    time_range: TimeRange = Field(default="all", description="Historical range shown: all, last30 or last7")
    filter_policy: FilterPolicy = Field(default=FilterPolicy.KEEP_WITH_DEFAULTS, description="Malformed record policy")

    # Runtime
    cache_size: int = Field(default=32, ge=1, description="Max memoized views per pipeline")
    log_level: str = Field(default="INFO", description="Log level used by scripts")

    def default_options(self, metric: MetricKey | str = MetricKey.REVENUE) -> ProjectionOptions:
        """Build view options seeded from these settings."""
        return ProjectionOptions(
            metric=metric,
            include_predictions=self.include_predictions,
            current_window=self.current_window,
            forecast_window=self.forecast_window,
            time_range=self.time_range,
            filter_policy=self.filter_policy,
        )
