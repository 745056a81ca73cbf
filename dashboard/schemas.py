from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple


MISSING_VALUE = ""
UNKNOWN = "Unknown"

CATEGORY_COLUMN = "Category"
MARGIN_RISK_COLUMN = "Margin Risk Assessment"
DIAGNOSTIC_SUMMARY_COLUMN = "Performance Diagnostic Summary"
EFFICIENCY_ALERT_COLUMN = "Efficiency Alert"
ELASTICITY_COLUMN = "Elasticity Classification"


@dataclass(frozen=True)
class SheetSchema:
    """Expected shape of the first sheet of a dashboard workbook.

    Columns missing from a loaded sheet are filled with ``default_value``.
    """

    name: str
    columns: Tuple[str, ...]
    currency_columns: Tuple[str, ...] = ()
    percent_columns: Tuple[str, ...] = ()
    derived_columns: Tuple[str, ...] = ()
    month_column: Optional[str] = None
    default_value: str = MISSING_VALUE

    def has(self, column: str) -> bool:
        return column in self.columns or column in self.derived_columns

    @property
    def display_columns(self) -> List[str]:
        return list(self.columns) + [c for c in self.derived_columns if c not in self.columns]


def _expense_columns(month: str, *, elasticity: bool) -> Tuple[str, ...]:
    cols = [
        CATEGORY_COLUMN,
        month,
        "Anchor vs Prior Avg ($)",
        MARGIN_RISK_COLUMN,
        "Expense Growth Alignment",
        EFFICIENCY_ALERT_COLUMN,
        "Marketing Spend Efficiency",
    ]
    if elasticity:
        cols.append(ELASTICITY_COLUMN)
    return tuple(cols)


EXPENSE_JUL_2025 = SheetSchema(
    name="expense-jul-2025",
    columns=_expense_columns("Jul 2025", elasticity=False),
    currency_columns=("Jul 2025", "Anchor vs Prior Avg ($)"),
    derived_columns=(DIAGNOSTIC_SUMMARY_COLUMN,),
    month_column="Jul 2025",
)

EXPENSE_MAY = SheetSchema(
    name="expense-may",
    columns=_expense_columns("May", elasticity=True),
    currency_columns=("May", "Anchor vs Prior Avg ($)"),
    derived_columns=(DIAGNOSTIC_SUMMARY_COLUMN,),
    month_column="May",
)

FINANCIAL_PERFORMANCE = SheetSchema(
    name="financial-performance",
    columns=(
        CATEGORY_COLUMN,
        "Metric_Name",
        "Responsibility",
        "Value_2024_Jan_July",
        "Value_2025_Jan_July",
        "Growth_Rate_Decimal",
    ),
    currency_columns=("Value_2024_Jan_July", "Value_2025_Jan_July"),
    percent_columns=("Growth_Rate_Decimal",),
)

EXPENSE_SCHEMAS: Tuple[SheetSchema, ...] = (EXPENSE_MAY, EXPENSE_JUL_2025)

SCHEMAS: Dict[str, SheetSchema] = {
    s.name: s for s in (EXPENSE_JUL_2025, EXPENSE_MAY, FINANCIAL_PERFORMANCE)
}


def get_schema(name: str) -> SheetSchema:
    try:
        return SCHEMAS[name]
    except KeyError:
        raise KeyError(f"Unknown sheet schema: {name!r}") from None


def detect_schema(columns: Iterable[object], candidates: Iterable[SheetSchema] = EXPENSE_SCHEMAS) -> SheetSchema:
    """Pick the expense schema whose month column appears in ``columns``."""
    present = {str(c) for c in columns}
    for schema in candidates:
        if schema.month_column and schema.month_column in present:
            return schema
    return EXPENSE_JUL_2025
