from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

import pandas as pd

from dashboard.loader import LoadError, conform_to_schema, load
from dashboard.normalize import normalize_frame
from dashboard.presentation import ChartSlot, build_table
from dashboard.schemas import (
    DIAGNOSTIC_SUMMARY_COLUMN,
    EFFICIENCY_ALERT_COLUMN,
    ELASTICITY_COLUMN,
    FINANCIAL_PERFORMANCE,
    detect_schema,
    get_schema,
)
from dashboard.settings import TABLE_SLICES, DashboardSettings, normalize_settings
from dashboard.views import count_by, filter_by_categories, sort_by_priority


def _settings(settings: Optional[DashboardSettings | dict]) -> DashboardSettings:
    if isinstance(settings, DashboardSettings):
        return settings
    return normalize_settings(settings)


def _settings_payload(settings: DashboardSettings) -> Dict[str, Any]:
    payload = asdict(settings)
    payload["data_dir"] = str(settings.data_dir)
    return payload


# ---------------- Contexts (frames, used by the Streamlit UI and exports) ----------------
def load_expense_context(settings: Optional[DashboardSettings | dict] = None) -> Dict[str, Any]:
    s = _settings(settings)
    try:
        raw = load(s.expense_resource, data_dir=s.data_dir, timeout=s.request_timeout)
    except LoadError as exc:
        return {"settings": s, "error": str(exc), "schema": None, "dataset": pd.DataFrame(), "sorted": pd.DataFrame(), "counts": {}}

    schema = get_schema(s.expense_schema) if s.expense_schema else detect_schema(raw.columns)
    dataset = normalize_frame(conform_to_schema(raw, schema), schema)
    ctx: Dict[str, Any] = {
        "settings": s,
        "error": None,
        "schema": schema,
        "dataset": dataset,
        "sorted": sort_by_priority(dataset, s.priority, EFFICIENCY_ALERT_COLUMN),
        "counts": count_by(dataset, DIAGNOSTIC_SUMMARY_COLUMN),
    }
    if schema.has(ELASTICITY_COLUMN):
        ctx["elasticity_counts"] = count_by(dataset, ELASTICITY_COLUMN)
    return ctx


def load_financial_context(settings: Optional[DashboardSettings | dict] = None) -> Dict[str, Any]:
    s = _settings(settings)
    try:
        dataset = load(s.financial_resource, schema=FINANCIAL_PERFORMANCE, data_dir=s.data_dir, timeout=s.request_timeout)
    except LoadError as exc:
        return {"settings": s, "error": str(exc), "schema": None, "dataset": pd.DataFrame(), "slices": {}}
    by_label = filter_by_categories(dataset, TABLE_SLICES.values())
    slices = {key: by_label[label] for key, label in TABLE_SLICES.items()}
    return {"settings": s, "error": None, "schema": FINANCIAL_PERFORMANCE, "dataset": dataset, "slices": slices}


# ---------------- Payloads (JSON-serializable) ----------------
def compute_expense_page(settings: Optional[DashboardSettings | dict] = None, ctx: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    ctx = ctx or load_expense_context(settings)
    s: DashboardSettings = ctx["settings"]
    if ctx["error"]:
        return {
            "settings": _settings_payload(s),
            "error": ctx["error"],
            "schema": None,
            "row_count": 0,
            "table": {"columns": [], "rows": []},
            "counts": {},
            "chart": None,
        }

    schema = ctx["schema"]
    table = build_table(ctx["sorted"], schema)
    counts: Dict[str, int] = ctx["counts"]
    handle = ChartSlot(palette=s.palette).render(counts)
    payload: Dict[str, Any] = {
        "settings": _settings_payload(s),
        "error": None,
        "schema": schema.name,
        "row_count": int(len(ctx["dataset"])),
        "table": {"columns": table.columns, "rows": table.rows},
        "counts": counts,
        "chart": handle.spec if handle is not None else None,
    }
    if "elasticity_counts" in ctx:
        payload["elasticity_counts"] = ctx["elasticity_counts"]
    return payload


def compute_financial_page(settings: Optional[DashboardSettings | dict] = None, ctx: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    ctx = ctx or load_financial_context(settings)
    s: DashboardSettings = ctx["settings"]
    if ctx["error"]:
        return {"settings": _settings_payload(s), "error": ctx["error"], "row_count": 0, "tables": {}}

    tables = {}
    for key, view in ctx["slices"].items():
        table = build_table(view, FINANCIAL_PERFORMANCE)
        tables[key] = {"label": TABLE_SLICES[key], "columns": table.columns, "rows": table.rows}
    return {
        "settings": _settings_payload(s),
        "error": None,
        "row_count": int(len(ctx["dataset"])),
        "tables": tables,
    }
