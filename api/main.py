from __future__ import annotations

import logging
import math

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import DashboardSettingsModel, MetaSchemasResponse, SchemaInfo
from dashboard.pages import (
    compute_expense_page,
    compute_financial_page,
    load_expense_context,
    load_financial_context,
)
from dashboard.schemas import SCHEMAS
from dashboard.settings import DashboardSettings, normalize_settings


app = FastAPI(title="Expense Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _settings_from_model(model: DashboardSettingsModel) -> DashboardSettings:
    return normalize_settings(model.model_dump())


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/schemas")
def meta_schemas():
    schemas = [
        SchemaInfo(
            name=s.name,
            columns=s.display_columns,
            currency_columns=list(s.currency_columns),
            percent_columns=list(s.percent_columns),
        )
        for s in SCHEMAS.values()
    ]
    return _json(MetaSchemasResponse(schemas=schemas).model_dump())


@app.post("/expense")
def expense(settings: DashboardSettingsModel):
    try:
        return _json(compute_expense_page(_settings_from_model(settings)))
    except Exception as exc:
        logger.exception("expense failed")
        return _error(exc)


@app.post("/financial")
def financial(settings: DashboardSettingsModel):
    try:
        return _json(compute_financial_page(_settings_from_model(settings)))
    except Exception as exc:
        logger.exception("financial failed")
        return _error(exc)


@app.post("/export/{page}")
def export_page(page: str, settings: DashboardSettingsModel):
    s = _settings_from_model(settings)

    export_df = None
    filename = f"{page}.csv"
    if page == "expense":
        ctx = load_expense_context(s)
        export_df = ctx.get("sorted")
    elif page == "financial":
        ctx = load_financial_context(s)
        export_df = ctx.get("dataset")
    else:
        ctx = {}
        export_df = pd.DataFrame()

    if ctx.get("error"):
        return JSONResponse(status_code=502, content={"error": ctx["error"], "type": "LoadError"})
    if export_df is None or not hasattr(export_df, "to_csv"):
        export_df = pd.DataFrame()
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})
