"""
Unified Analytics Pipeline - The single data-preparation path shared by every chart.

This service orchestrates the validate-merge-project cycle:
1. Parse the payload envelope
2. Validate historical and prediction records (filter policy applies)
3. Trim the drawn history to the requested time range
4. Merge both series chronologically
5. Project the requested metric and aggregate its statistics over the full history
"""

import logging
from typing import Any

from unifiedanalytics.core.domain.options import TIME_RANGE_DAYS, ProjectionOptions
from unifiedanalytics.core.domain.payload import AnalyticsPayload
from unifiedanalytics.core.domain.points import (
    AnalyticsView,
    MetricKey,
    PointKind,
    SeriesTotals,
    ValidatedPoint,
)
from unifiedanalytics.core.domain.settings import AnalyticsSettings
from unifiedanalytics.core.services.aggregator import aggregate
from unifiedanalytics.core.services.memo import ProjectionCache
from unifiedanalytics.core.services.merger import merge
from unifiedanalytics.core.services.projector import project
from unifiedanalytics.core.services.validator import RecordValidator, resolve_fallback_date

logger = logging.getLogger(__name__)


class UnifiedAnalyticsPipeline:
    """
    Turns a raw analytics payload into per-metric chart views.
    """

    def __init__(
        self,
        settings: AnalyticsSettings | None = None,
        cache: ProjectionCache | None = None,
        fallback_date: str | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            settings: Defaults for view options (default: AnalyticsSettings())
            cache: Memoizer for views (default: a cache sized from settings)
            fallback_date: Date given to records with unparseable dates (default: today)

        Raises:
            ValueError: fallback_date is given but is not a calendar date
        """
        self.settings = settings or AnalyticsSettings()
        self.cache = cache or ProjectionCache(max_entries=self.settings.cache_size)
        self.fallback_date = resolve_fallback_date(fallback_date)

    def run(self, payload: Any, options: ProjectionOptions | None = None) -> AnalyticsView:
        """
        Build the view for one metric, reusing a memoized result when possible.

        Args:
            payload: Raw payload (mapping or AnalyticsPayload); never mutated
            options: View options (default: from settings)
        """
        options = options or self.settings.default_options()
        return self.cache.get_or_compute(payload, options, lambda: self._compute(payload, options))

    def run_all(
        self,
        payload: Any,
        options: ProjectionOptions | None = None,
        metrics: list[MetricKey | str] | None = None,
    ) -> dict[MetricKey, AnalyticsView]:
        """
        Build one view per metric (default: every metric).
        """
        options = options or self.settings.default_options()
        keys = [MetricKey.parse(m) for m in metrics] if metrics else list(MetricKey)
        return {
            metric: self.run(payload, options.model_copy(update={"metric": metric}))
            for metric in keys
        }

    def _compute(self, payload: Any, options: ProjectionOptions) -> AnalyticsView:
        envelope = AnalyticsPayload.parse(payload)
        validator = RecordValidator(fallback_date=self.fallback_date)

        historical_batch = validator.validate_many(
            envelope.historical, kind=PointKind.HISTORICAL, policy=options.filter_policy
        )
        prediction_batch = validator.validate_many(
            envelope.predictions, kind=PointKind.PREDICTION, policy=options.filter_policy
        )

        historical = self._apply_time_range(historical_batch.points, options.time_range)
        predictions = prediction_batch.points

        series = merge(historical, predictions, include_predictions=options.include_predictions)
        logger.info(
            f"Projecting '{options.metric.value}' over {len(series)} points "
            f"({len(historical)} historical, {len(series) - len(historical)} predicted)"
        )

        projection = project(series, options.metric)
        # Statistics always look at the full history; the time range only trims what is drawn
        stats = aggregate(
            historical_batch.points,
            predictions,
            options.metric,
            current_window=options.current_window,
            forecast_window=options.forecast_window,
            include_predictions=options.include_predictions,
        )

        return AnalyticsView(
            metric=options.metric,
            projection=projection,
            stats=stats,
            totals=self._totals(envelope, historical_batch.points),
            diagnostics=historical_batch.diagnostics.merge(prediction_batch.diagnostics),
        )

    def _apply_time_range(self, points: list[ValidatedPoint], time_range: str) -> list[ValidatedPoint]:
        days = TIME_RANGE_DAYS[time_range]
        if days is None:
            return points
        return points[-days:]

    def _totals(self, envelope: AnalyticsPayload, historical: list[ValidatedPoint]) -> SeriesTotals:
        """Payload totals win; missing ones are summed from the validated history."""
        if envelope.total_revenue is not None and envelope.total_orders is not None:
            return SeriesTotals(
                total_revenue=envelope.total_revenue,
                total_orders=envelope.total_orders,
                period_days=envelope.period_days,
                source="payload",
            )

        computed_revenue = round(sum(p.revenue for p in historical), 2)
        computed_orders = round(sum(p.orders_count for p in historical), 2)
        if envelope.total_revenue is None and envelope.total_orders is None:
            logger.info("Payload totals missing, computing them from historical records")
            return SeriesTotals(
                total_revenue=computed_revenue,
                total_orders=computed_orders,
                period_days=envelope.period_days,
                source="computed",
            )

        logger.info("Payload totals incomplete, computing the missing one from historical records")
        return SeriesTotals(
            total_revenue=envelope.total_revenue if envelope.total_revenue is not None else computed_revenue,
            total_orders=envelope.total_orders if envelope.total_orders is not None else computed_orders,
            period_days=envelope.period_days,
            source="mixed",
        )
