from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from dashboard.schemas import SCHEMAS


DATA_DIR = Path(__file__).resolve().parents[1] / "public"

EXPENSE_RESOURCE = "/expense-analysis.xlsx"
FINANCIAL_RESOURCE = "/financial-performance.xlsx"

YOY_CATEGORY = "YOY Expense & Profitability Analysis"
CASHFLOW_CATEGORY = "Cash Flow Projection"

TABLE_SLICES = {"yoy": YOY_CATEGORY, "cashflow": CASHFLOW_CATEGORY}
TABLE_TITLES = {"yoy": "YOY Expense & Profitability", "cashflow": "Cash Flow Projection"}

EFFICIENCY_ALERT_PRIORITY = (
    "Investigate – Potential Risk",
    "Efficient Scaling",
    "Monitor – Rising Costs",
    "Stable – No Action",
    "Below Threshold",
)

CHART_PALETTE = ("#e53e3e", "#fd7900", "#48bb78", "#4299e1")

REQUEST_TIMEOUT_DEFAULT = 30.0


@dataclass(frozen=True)
class DashboardSettings:
    data_dir: Path = DATA_DIR
    expense_resource: str = EXPENSE_RESOURCE
    financial_resource: str = FINANCIAL_RESOURCE
    expense_schema: Optional[str] = None
    priority: List[str] = field(default_factory=lambda: list(EFFICIENCY_ALERT_PRIORITY))
    palette: List[str] = field(default_factory=lambda: list(CHART_PALETTE))
    request_timeout: float = REQUEST_TIMEOUT_DEFAULT


def _as_str_list(values: Optional[Iterable[object]], default: Iterable[str]) -> List[str]:
    if not values:
        return list(default)
    out = [str(v) for v in values if v is not None and str(v) != ""]
    return out or list(default)


def normalize_settings(raw: Optional[dict] = None) -> DashboardSettings:
    raw = raw or {}

    data_dir = raw.get("data_dir") or DATA_DIR
    expense_resource = (raw.get("expense_resource") or EXPENSE_RESOURCE).strip()
    financial_resource = (raw.get("financial_resource") or FINANCIAL_RESOURCE).strip()
    expense_schema = (raw.get("expense_schema") or "").strip() or None
    if expense_schema not in SCHEMAS:
        expense_schema = None

    priority = _as_str_list(raw.get("priority"), EFFICIENCY_ALERT_PRIORITY)
    # Chart colours are capped at four.
    palette = _as_str_list(raw.get("palette"), CHART_PALETTE)[:4]

    timeout = raw.get("request_timeout", REQUEST_TIMEOUT_DEFAULT)
    try:
        timeout = float(timeout)
    except Exception:
        timeout = REQUEST_TIMEOUT_DEFAULT
    timeout = max(1.0, min(120.0, timeout))

    return DashboardSettings(
        data_dir=Path(data_dir),
        expense_resource=expense_resource,
        financial_resource=financial_resource,
        expense_schema=expense_schema,
        priority=priority,
        palette=palette,
        request_timeout=timeout,
    )
