"""
Record Validator - Repairs untrusted raw records into ValidatedPoints.

Malformed analytics data degrades to zero instead of aborting the series: one bad
sample must not blank a whole chart. Every repair is counted in
ValidationDiagnostics so the degradation stays observable.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from unifiedanalytics.core.domain.options import FilterPolicy
from unifiedanalytics.core.domain.points import (
    INTERVAL_FIELDS,
    METRIC_LOWER_BOUND,
    ConfidenceInterval,
    MetricKey,
    PointKind,
    ValidatedPoint,
    ValidationDiagnostics,
)
from unifiedanalytics.core.services.sanitizer import NumberOutcome, inspect_number, normalize_date, parse_date

logger = logging.getLogger(__name__)


@dataclass
class ValidationOutcome:
    """Validated points of one batch plus what it took to get them."""

    points: list[ValidatedPoint] = field(default_factory=list)
    diagnostics: ValidationDiagnostics = field(default_factory=ValidationDiagnostics)


def _truthy(value: Any) -> bool:
    if isinstance(value, float) and math.isnan(value):
        return False
    try:
        return bool(value)
    except (TypeError, ValueError):
        return False


def _resolve_kind(raw: Mapping) -> PointKind:
    if "isPrediction" in raw:
        return PointKind.PREDICTION if _truthy(raw["isPrediction"]) else PointKind.HISTORICAL
    if raw.get("kind") == PointKind.PREDICTION.value:
        return PointKind.PREDICTION
    return PointKind.HISTORICAL


class RecordValidator:
    """
    Applies the sanitizer and date normalizer to raw records.

    A validator accumulates diagnostics across calls; use one per batch or call
    `reset()` between batches.
    """

    def __init__(self, fallback_date: str | None = None):
        """
        Args:
            fallback_date: Date used for unparseable input (default: today)

        Raises:
            ValueError: fallback_date is given but is not a calendar date
        """
        self.fallback_date = resolve_fallback_date(fallback_date)
        self.diagnostics = ValidationDiagnostics()

    def reset(self) -> ValidationDiagnostics:
        """Start a fresh diagnostics counter, returning the previous one."""
        previous, self.diagnostics = self.diagnostics, ValidationDiagnostics()
        return previous

    def validate(self, raw: Any, kind: PointKind | None = None) -> ValidatedPoint:
        """
        Validate a single raw record. Never raises.

        Args:
            raw: Untrusted record, normally a dict decoded from JSON
            kind: Force the point kind (e.g. when the source array is known)
        """
        defaulted_before = self.diagnostics.defaulted_fields
        record = raw if isinstance(raw, Mapping) else {}

        if kind is None:
            kind = _resolve_kind(record)

        raw_date = record.get("date")
        if parse_date(raw_date) is None:
            self._count_default("date")
        date = normalize_date(raw_date, fallback=self.fallback_date)

        measures = {
            metric.value: self._number(record, metric.value, metric.upper_bound)
            for metric in MetricKey
        }

        intervals: dict[MetricKey, ConfidenceInterval] = {}
        score = None
        if kind is PointKind.PREDICTION:
            # confidence_score is optional; only a present but unusable score is a repair
            score = self._number(record, "confidence_score", 1.0, count_missing=False)
            raw_interval = record.get("confidence_interval")
            if isinstance(raw_interval, Mapping):
                for metric, (min_key, max_key) in INTERVAL_FIELDS.items():
                    intervals[metric] = ConfidenceInterval(
                        lower=self._number(raw_interval, min_key, metric.upper_bound),
                        upper=self._number(raw_interval, max_key, metric.upper_bound),
                    )

        if self.diagnostics.defaulted_fields > defaulted_before:
            self.diagnostics.repaired_records += 1

        return ValidatedPoint(
            date=date,
            kind=kind,
            confidence_intervals=intervals,
            confidence_score=score,
            **measures,
        )

    def validate_many(
        self,
        records: Any,
        kind: PointKind | None = None,
        policy: FilterPolicy = FilterPolicy.KEEP_WITH_DEFAULTS,
    ) -> ValidationOutcome:
        """
        Validate a batch of raw records under a filter policy.

        Non-list input is treated as an empty batch. Diagnostics for the batch are
        returned on the outcome and the validator is reset.
        """
        self.reset()
        if not isinstance(records, (list, tuple)):
            records = []

        points = []
        for raw in records:
            if policy is FilterPolicy.DROP_MALFORMED and is_malformed(raw):
                self.diagnostics.dropped_records += 1
                continue
            points.append(self.validate(raw, kind=kind))

        diagnostics = self.reset()
        if diagnostics.repaired_records or diagnostics.dropped_records:
            logger.warning(
                f"Repaired {diagnostics.repaired_records} and dropped {diagnostics.dropped_records} "
                f"of {len(records)} {kind.value if kind else 'mixed'} records "
                f"({diagnostics.defaulted_fields} fields defaulted)"
            )
        return ValidationOutcome(points=points, diagnostics=diagnostics)

    def _number(self, record: Mapping, key: str, upper_bound: float, count_missing: bool = True) -> float:
        value, outcome = inspect_number(record.get(key), 0.0, METRIC_LOWER_BOUND, upper_bound)
        if outcome is NumberOutcome.DEFAULTED and (count_missing or record.get(key) is not None):
            self._count_default(key)
        elif outcome is NumberOutcome.CLAMPED:
            self.diagnostics.clamped_fields += 1
        return value

    def _count_default(self, name: str) -> None:
        self.diagnostics.defaulted_fields += 1
        self.diagnostics.defaulted_by_field[name] += 1


def resolve_fallback_date(value: Any) -> str | None:
    """Normalize a caller-supplied fallback date to YYYY-MM-DD, failing fast on garbage."""
    if value is None:
        return None
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"Invalid fallback date: {value!r}")
    return parsed.isoformat()


def is_malformed(raw: Any) -> bool:
    """True when a raw record is too broken to trust: not a mapping, or no usable date."""
    if not isinstance(raw, Mapping):
        return True
    return parse_date(raw.get("date")) is None


def validate(raw: Any, kind: PointKind | None = None) -> ValidatedPoint:
    """Validate a single record with a throwaway validator."""
    return RecordValidator().validate(raw, kind=kind)
