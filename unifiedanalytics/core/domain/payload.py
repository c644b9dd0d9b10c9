"""
Payload Domain Model - The envelope delivered by the data-fetching collaborator.

Only the envelope is validated here. Individual records stay untrusted and are
repaired later by the RecordValidator.
"""

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_PERIOD_DAYS = 60


class AnalyticsPayload(BaseModel):
    """
    Raw analytics payload: historical actuals plus pre-computed forecasts.
    """

    historical: list[Any] = Field(default_factory=list)
    predictions: list[Any] = Field(default_factory=list)

    # Authoritative overrides for the sum-based totals
    total_revenue: float | None = None
    total_orders: float | None = None

    period_days: int = DEFAULT_PERIOD_DAYS

    @field_validator("historical", "predictions", mode="before")
    @classmethod
    def _coerce_series(cls, value):
        if isinstance(value, (list, tuple)):
            return list(value)
        return []

    @field_validator("total_revenue", "total_orders", mode="before")
    @classmethod
    def _coerce_total(cls, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if not math.isfinite(value) or value < 0:
            return None
        return float(value)

    @field_validator("period_days", mode="before")
    @classmethod
    def _coerce_period(cls, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return DEFAULT_PERIOD_DAYS
        if not math.isfinite(value) or value <= 0:
            return DEFAULT_PERIOD_DAYS
        return int(value)

    @classmethod
    def parse(cls, obj: Any) -> "AnalyticsPayload":
        """Build a payload from anything; unusable input becomes an empty payload."""
        if isinstance(obj, cls):
            return obj
        if not isinstance(obj, Mapping):
            return cls()
        known = {name: obj[name] for name in cls.model_fields if name in obj}
        return cls(**known)
