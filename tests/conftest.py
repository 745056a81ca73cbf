# Shared pytest fixtures: workbooks are generated into tmp_path with pandas/openpyxl.
from __future__ import annotations

import io
from pathlib import Path

import pandas as pd
import pytest


EXPENSE_ROWS = [
    {
        "Category": "Payroll",
        "Jul 2025": 125000.5,
        "Anchor vs Prior Avg ($)": -2500,
        "Margin Risk Assessment": "High",
        "Expense Growth Alignment": "Misaligned",
        "Efficiency Alert": "Stable – No Action",
        "Marketing Spend Efficiency": "n/a",
    },
    {
        "Category": "Marketing",
        "Jul 2025": 48000,
        "Anchor vs Prior Avg ($)": 3100.25,
        "Margin Risk Assessment": None,
        "Expense Growth Alignment": "Aligned",
        "Efficiency Alert": "Investigate – Potential Risk",
        "Marketing Spend Efficiency": "Low",
    },
    {
        "Category": "Rent",
        "Jul 2025": 9000,
        "Anchor vs Prior Avg ($)": 0,
        "Margin Risk Assessment": "High",
        "Expense Growth Alignment": "Aligned",
        "Efficiency Alert": "Something New",
        "Marketing Spend Efficiency": None,
    },
    {
        "Category": "Software",
        "Jul 2025": 7200,
        "Anchor vs Prior Avg ($)": 150,
        "Margin Risk Assessment": "Low",
        "Expense Growth Alignment": "Aligned",
        "Efficiency Alert": "Efficient Scaling",
        "Marketing Spend Efficiency": "High",
    },
]

FINANCIAL_ROWS = [
    {
        "Category": "YOY Expense & Profitability Analysis",
        "Metric_Name": "Revenue",
        "Responsibility": "CFO",
        "Value_2024_Jan_July": 1000000,
        "Value_2025_Jan_July": 1061000,
        "Growth_Rate_Decimal": 0.061,
    },
    {
        "Category": "Cash Flow Projection",
        "Metric_Name": "Operating Cash",
        "Responsibility": "Controller",
        "Value_2024_Jan_July": 250000,
        "Value_2025_Jan_July": 240000,
        "Growth_Rate_Decimal": -0.04,
    },
    {
        "Category": "YOY Expense & Profitability Analysis",
        "Metric_Name": "Gross Margin",
        "Responsibility": "CFO",
        "Value_2024_Jan_July": 400000,
        "Value_2025_Jan_July": None,
        "Growth_Rate_Decimal": None,
    },
    {
        "Category": "yoy expense & profitability analysis",
        "Metric_Name": "Lowercase label",
        "Responsibility": "Nobody",
        "Value_2024_Jan_July": 1,
        "Value_2025_Jan_July": 2,
        "Growth_Rate_Decimal": 1.0,
    },
]


def workbook_bytes(sheets: dict[str, list[dict]]) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        for name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=name, index=False)
    return buf.getvalue()


@pytest.fixture()
def write_workbook(tmp_path: Path):
    def _write(name: str, rows: list[dict], sheet_name: str = "Sheet1") -> Path:
        path = tmp_path / name
        path.write_bytes(workbook_bytes({sheet_name: rows}))
        return path

    return _write


@pytest.fixture()
def data_dir(tmp_path: Path, write_workbook) -> Path:
    write_workbook("expense-analysis.xlsx", EXPENSE_ROWS)
    write_workbook("financial-performance.xlsx", FINANCIAL_ROWS)
    return tmp_path
