from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from dashboard.settings import CHART_PALETTE, EFFICIENCY_ALERT_PRIORITY


class DashboardSettingsModel(BaseModel):
    # Workbook locations are server configuration, not request input.
    expense_schema: Optional[str] = None
    priority: List[str] = Field(default_factory=lambda: list(EFFICIENCY_ALERT_PRIORITY))
    palette: List[str] = Field(default_factory=lambda: list(CHART_PALETTE))
    request_timeout: float = 30.0


class SchemaInfo(BaseModel):
    name: str
    columns: List[str]
    currency_columns: List[str]
    percent_columns: List[str]


class MetaSchemasResponse(BaseModel):
    schemas: List[SchemaInfo]

