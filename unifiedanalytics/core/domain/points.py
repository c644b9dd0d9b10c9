"""
Point Domain Models - Data structures flowing through the analytics pipeline.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum


class UnknownMetricError(ValueError):
    """Raised when a caller asks for a metric the pipeline does not know."""


class PointKind(str, Enum):
    """Whether a sample was measured or forecast."""

    HISTORICAL = "historical"
    PREDICTION = "prediction"


class MetricKey(str, Enum):
    """Measured quantities that can be projected and charted."""

    REVENUE = "revenue"
    ORDERS_COUNT = "orders_count"
    CONVERSION_RATE = "conversion_rate"
    AVG_ORDER_VALUE = "avg_order_value"

    @property
    def upper_bound(self) -> float:
        return METRIC_UPPER_BOUNDS[self]

    @classmethod
    def parse(cls, value: "MetricKey | str") -> "MetricKey":
        """Resolve a metric name, failing fast on anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            known = ", ".join(m.value for m in cls)
            raise UnknownMetricError(f"Unknown metric '{value}' (expected one of: {known})") from None


METRIC_LOWER_BOUND = 0.0

METRIC_UPPER_BOUNDS: dict[MetricKey, float] = {
    MetricKey.REVENUE: 1e9,
    MetricKey.ORDERS_COUNT: 1e6,
    MetricKey.CONVERSION_RATE: 100.0,
    MetricKey.AVG_ORDER_VALUE: 1e6,
}

# Raw confidence_interval keys, per metric that can carry an explicit band
INTERVAL_FIELDS: dict[MetricKey, tuple[str, str]] = {
    MetricKey.REVENUE: ("revenue_min", "revenue_max"),
    MetricKey.ORDERS_COUNT: ("orders_min", "orders_max"),
}


@dataclass(frozen=True)
class ConfidenceInterval:
    """Forecast uncertainty band for one metric. lower <= upper is not enforced."""

    lower: float
    upper: float


@dataclass(frozen=True)
class ValidatedPoint:
    """A sanitized sample. Every numeric field is finite and within its metric bounds."""

    date: str  # YYYY-MM-DD
    kind: PointKind
    revenue: float = 0.0
    orders_count: float = 0.0
    conversion_rate: float = 0.0
    avg_order_value: float = 0.0
    confidence_intervals: dict[MetricKey, ConfidenceInterval] = field(default_factory=dict)
    confidence_score: float | None = None  # predictions only, in [0, 1]

    @property
    def is_prediction(self) -> bool:
        return self.kind is PointKind.PREDICTION

    def value_of(self, metric: MetricKey | str) -> float:
        return getattr(self, MetricKey.parse(metric).value)


@dataclass(frozen=True)
class ProjectionPoint:
    """A single chartable point for one metric."""

    date: str
    value: float
    is_prediction: bool
    confidence_min: float = 0.0
    confidence_max: float = 0.0
    confidence_score: float = 0.0


MetricProjection = list[ProjectionPoint]


@dataclass(frozen=True)
class AggregateStats:
    """Windowed summary of one metric. Descriptive only, not a trend test."""

    current_total: float = 0.0
    current_average: float = 0.0
    forecast_total: float = 0.0
    forecast_average: float = 0.0
    growth_rate_percent: float = 0.0
    current_period_point_count: int = 0
    forecast_period_point_count: int = 0
    previous_total: float = 0.0
    previous_period_point_count: int = 0
    period_change_percent: float = 0.0


@dataclass
class ValidationDiagnostics:
    """Counts of input the validator had to repair or drop."""

    defaulted_fields: int = 0
    clamped_fields: int = 0
    repaired_records: int = 0
    dropped_records: int = 0
    defaulted_by_field: Counter = field(default_factory=Counter)

    @property
    def clean(self) -> bool:
        return not (self.defaulted_fields or self.clamped_fields or self.dropped_records)

    def merge(self, other: "ValidationDiagnostics") -> "ValidationDiagnostics":
        return ValidationDiagnostics(
            defaulted_fields=self.defaulted_fields + other.defaulted_fields,
            clamped_fields=self.clamped_fields + other.clamped_fields,
            repaired_records=self.repaired_records + other.repaired_records,
            dropped_records=self.dropped_records + other.dropped_records,
            defaulted_by_field=self.defaulted_by_field + other.defaulted_by_field,
        )


@dataclass(frozen=True)
class SeriesTotals:
    """Headline totals for the historical period."""

    total_revenue: float
    total_orders: float
    period_days: int
    source: str  # "payload", "computed" or "mixed" (one total from each)


@dataclass
class AnalyticsView:
    """Everything a chart needs to draw one metric."""

    metric: MetricKey
    projection: MetricProjection
    stats: AggregateStats
    totals: SeriesTotals
    diagnostics: ValidationDiagnostics = field(default_factory=ValidationDiagnostics)
