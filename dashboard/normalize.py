from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import pandas as pd

from dashboard.schemas import (
    DIAGNOSTIC_SUMMARY_COLUMN,
    ELASTICITY_COLUMN,
    MARGIN_RISK_COLUMN,
    MISSING_VALUE,
    UNKNOWN,
    SheetSchema,
)


def is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def value_or_unknown(value: object) -> object:
    return UNKNOWN if is_blank(value) else value


def diagnostic_summary(row: Mapping[str, Any]) -> object:
    return value_or_unknown(row.get(MARGIN_RISK_COLUMN))


def elasticity_classification(row: Mapping[str, Any]) -> str:
    value = row.get(ELASTICITY_COLUMN)
    if is_blank(value):
        return MISSING_VALUE
    return str(value).strip()


def normalize(row: Mapping[str, Any], schema: Optional[SheetSchema] = None) -> Dict[str, Any]:
    """Return a copy of ``row`` with the derived display fields added.

    Pure and total: absent columns fall back to ``"Unknown"`` or ``""``.
    """
    out = dict(row)
    out[DIAGNOSTIC_SUMMARY_COLUMN] = diagnostic_summary(row)
    if ELASTICITY_COLUMN in row or (schema is not None and schema.has(ELASTICITY_COLUMN)):
        out[ELASTICITY_COLUMN] = elasticity_classification(row)
    return out


def normalize_frame(df: pd.DataFrame, schema: Optional[SheetSchema] = None) -> pd.DataFrame:
    out = df.copy()
    get = lambda col: out[col] if col in out.columns else pd.Series(MISSING_VALUE, index=out.index, dtype=object)  # noqa: E731

    out[DIAGNOSTIC_SUMMARY_COLUMN] = get(MARGIN_RISK_COLUMN).map(value_or_unknown).astype(object)
    if ELASTICITY_COLUMN in out.columns or (schema is not None and schema.has(ELASTICITY_COLUMN)):
        out[ELASTICITY_COLUMN] = get(ELASTICITY_COLUMN).map(lambda v: MISSING_VALUE if is_blank(v) else str(v).strip()).astype(object)
    return out
