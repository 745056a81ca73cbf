from __future__ import annotations

from typing import Dict, Iterable, Sequence

import pandas as pd

from dashboard.normalize import is_blank
from dashboard.schemas import CATEGORY_COLUMN, UNKNOWN


UNRANKED = 999


def filter_by_category(df: pd.DataFrame, label: str, field: str = CATEGORY_COLUMN) -> pd.DataFrame:
    """Rows whose ``field`` equals ``label`` exactly, in original order."""
    if df.empty or field not in df.columns:
        return df.iloc[0:0].copy()
    mask = df[field].map(lambda v: isinstance(v, str) and v == label)
    return df[mask.astype(bool)].reset_index(drop=True)


def filter_by_categories(df: pd.DataFrame, labels: Iterable[str], field: str = CATEGORY_COLUMN) -> Dict[str, pd.DataFrame]:
    return {label: filter_by_category(df, label, field) for label in labels}


def priority_rank(value: object, priority: Sequence[str]) -> int:
    if is_blank(value):
        return UNRANKED
    try:
        return list(priority).index(value)
    except ValueError:
        return UNRANKED


def sort_by_priority(df: pd.DataFrame, priority: Sequence[str], key_field: str) -> pd.DataFrame:
    """Order rows by the position of ``key_field`` in ``priority``.

    Values missing from ``priority`` (blank included) sort last. The sort is
    stable so ties keep their input order.
    """
    if df.empty:
        return df.copy()
    priority = list(priority)
    if key_field in df.columns:
        rank = df[key_field].map(lambda v: priority_rank(v, priority))
    else:
        rank = pd.Series(UNRANKED, index=df.index)
    ranked = df.assign(_priority_rank=rank.astype(int))
    ranked = ranked.sort_values("_priority_rank", kind="mergesort")
    return ranked.drop(columns=["_priority_rank"]).reset_index(drop=True)


def count_by(df: pd.DataFrame, field: str) -> Dict[str, int]:
    """Tally each distinct value of ``field``; blanks count as ``"Unknown"``.

    Keys keep first-occurrence order.
    """
    if df.empty:
        return {}
    if field not in df.columns:
        return {UNKNOWN: int(len(df))}
    keys = df[field].map(lambda v: UNKNOWN if is_blank(v) else str(v))
    counts = keys.groupby(keys, sort=False).size()
    return {str(k): int(v) for k, v in counts.items()}
