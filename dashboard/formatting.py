from __future__ import annotations

import math
import numbers
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

import pandas as pd

from dashboard.schemas import SheetSchema


def is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(float(value))


def round_half_up(value: object, ndigits: int = 0, *, scale: int = 1) -> Decimal:
    # Halves round away from zero (0.125 -> 0.13), matching browser currency / toFixed output.
    q = Decimal(10) ** -ndigits
    return (Decimal(str(float(value))) * scale).quantize(q, rounding=ROUND_HALF_UP)


def format_currency(value: object) -> str:
    """US-dollar display with cents; anything that is not a finite number is "$0"."""
    if not is_finite_number(value):
        return "$0"
    q = round_half_up(value, 2)
    sign = "-" if q < 0 else ""
    return f"{sign}${abs(q):,.2f}"


def format_percentage(value: object) -> str:
    """Decimal fraction to one-decimal percent (0.061 -> "6.1%")."""
    if not is_finite_number(value):
        return "0%"
    return f"{round_half_up(value, 1, scale=100):.1f}%"


def format_text(value: object) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value)


def format_currency_columns(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    formatted = df.copy()
    for c in cols:
        if c in formatted.columns:
            formatted[c] = formatted[c].map(format_currency)
    return formatted


def format_percent_columns(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    formatted = df.copy()
    for c in cols:
        if c in formatted.columns:
            formatted[c] = formatted[c].map(format_percentage)
    return formatted


def format_frame(df: pd.DataFrame, schema: SheetSchema) -> pd.DataFrame:
    """Render every cell as display text using the schema's column kinds."""
    formatted = format_currency_columns(df, schema.currency_columns)
    formatted = format_percent_columns(formatted, schema.percent_columns)
    special = set(schema.currency_columns) | set(schema.percent_columns)
    for c in formatted.columns:
        if c not in special:
            formatted[c] = formatted[c].map(format_text)
    return formatted
