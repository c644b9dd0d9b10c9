"""
Sanitizer - Total functions that turn untrusted values into safe numbers and dates.

Neither function raises on bad input; failure is represented by the default or
fallback value.
"""

import math
from datetime import date, datetime
from enum import Enum
from typing import Any

import pandas as pd


class NumberOutcome(str, Enum):
    OK = "ok"
    CLAMPED = "clamped"
    DEFAULTED = "defaulted"


def _coerce(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def inspect_number(
    value: Any,
    default: float,
    lower_bound: float,
    upper_bound: float,
) -> tuple[float, NumberOutcome]:
    """
    Sanitize a value and report what had to be done to it.

    Returns:
        (sanitized value, outcome)
    """
    number = _coerce(value)
    if number is None:
        return default, NumberOutcome.DEFAULTED

    clamped = min(max(number, lower_bound), upper_bound)
    outcome = NumberOutcome.CLAMPED if clamped != number else NumberOutcome.OK
    return round(clamped, 2), outcome


def sanitize(value: Any, default: float, lower_bound: float, upper_bound: float) -> float:
    """
    Coerce an arbitrary value into a bounded, finite number.

    None, non-numeric values, NaN and infinities yield `default`. Anything else is
    clamped to [lower_bound, upper_bound] and rounded to 2 decimals.
    """
    return inspect_number(value, default, lower_bound, upper_bound)[0]


def _today() -> str:
    return date.today().isoformat()


def parse_date(value: Any) -> date | None:
    """Parse a date-like value, returning None when it is not a usable calendar date."""
    if isinstance(value, datetime):
        # pandas.NaT is a datetime subclass
        return None if pd.isna(value) else value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    # pandas reads keywords such as "now" and "today" as dates
    if not any(ch.isdigit() for ch in value):
        return None
    try:
        parsed = pd.to_datetime(value.strip(), errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return parsed.date()


def normalize_date(value: Any, fallback: str | date | None = None) -> str:
    """
    Standardize a date token to day-granularity ISO (YYYY-MM-DD).

    Args:
        value: Raw date (string, date, datetime or pandas Timestamp)
        fallback: Returned, normalized, when value cannot be parsed. Defaults to today,
            which is also used when the fallback itself does not parse.
    """
    parsed = parse_date(value)
    if parsed is None:
        parsed = parse_date(fallback)
    if parsed is None:
        return _today()
    return parsed.isoformat()
