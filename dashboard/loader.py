from __future__ import annotations

import io
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Union

import pandas as pd
import requests

from dashboard.schemas import MISSING_VALUE, SheetSchema
from dashboard.settings import DATA_DIR, REQUEST_TIMEOUT_DEFAULT


logger = logging.getLogger(__name__)

FETCH_FAILED = "fetch failed"
DECODE_FAILED = "decode failed"

_MESSAGES = {
    FETCH_FAILED: "Failed to fetch Excel file",
    DECODE_FAILED: "Failed to read Excel file",
}

Resource = Union[str, Path]


class LoadError(Exception):
    """Raised when a workbook cannot be retrieved or decoded."""

    def __init__(self, reason: str, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        message = _MESSAGES.get(reason, "Error loading data")
        super().__init__(f"{message}: {detail}" if detail else message)

    @property
    def message(self) -> str:
        return str(self)


def is_url(resource: Resource) -> bool:
    return isinstance(resource, str) and resource.lower().startswith(("http://", "https://"))


def resolve_path(resource: Resource, data_dir: Path = DATA_DIR) -> Path:
    """Map a web-root style path (``/expense-analysis.xlsx``) onto ``data_dir``.

    String resources must stay inside ``data_dir``.
    """
    if isinstance(resource, Path):
        return resource
    root = Path(data_dir).resolve()
    path = (root / resource.lstrip("/")).resolve()
    if not path.is_relative_to(root):
        raise LoadError(FETCH_FAILED, f"{resource} is outside the data directory")
    return path


def fetch_bytes(resource: Resource, *, data_dir: Path = DATA_DIR, timeout: float = REQUEST_TIMEOUT_DEFAULT) -> bytes:
    if is_url(resource):
        try:
            r = requests.get(resource, timeout=timeout)
        except requests.RequestException as exc:
            raise LoadError(FETCH_FAILED, str(exc)) from exc
        if not r.ok:
            raise LoadError(FETCH_FAILED, f"HTTP {r.status_code} for {resource}")
        return r.content

    path = resolve_path(resource, data_dir)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise LoadError(FETCH_FAILED, f"{resource}: {exc.strerror or exc}") from exc


def header_text(value: object) -> str:
    # Month headers typed into Excel arrive as dates; keep their displayed "Jul 2025" form.
    if isinstance(value, date):
        return value.strftime("%b %Y")
    return str(value)


def decode_first_sheet(payload: bytes) -> pd.DataFrame:
    """Decode an XLSX payload and return its first sheet as string-keyed rows.

    The header row supplies the column names, fully blank rows are skipped and
    empty cells become ``""`` so every row carries every column.
    """
    try:
        # Only truly empty cells are missing; literal "NA" / "n/a" text is kept.
        df = pd.read_excel(
            io.BytesIO(payload),
            sheet_name=0,
            header=0,
            dtype=object,
            engine="openpyxl",
            keep_default_na=False,
            na_values=[""],
        )
    except Exception as exc:
        raise LoadError(DECODE_FAILED, str(exc) or type(exc).__name__) from exc

    df = df.dropna(how="all")
    df.columns = [header_text(c) for c in df.columns]
    df = df.astype(object).where(df.notna(), MISSING_VALUE)
    return df.reset_index(drop=True)


def conform_to_schema(df: pd.DataFrame, schema: SheetSchema) -> pd.DataFrame:
    missing = [c for c in schema.columns if c not in df.columns]
    if not missing:
        return df
    out = df.copy()
    for col in missing:
        out[col] = schema.default_value
    return out


def load(
    resource: Resource,
    *,
    schema: Optional[SheetSchema] = None,
    data_dir: Path = DATA_DIR,
    timeout: float = REQUEST_TIMEOUT_DEFAULT,
) -> pd.DataFrame:
    """Fetch ``resource`` and return the rows of its first sheet.

    Raises ``LoadError`` when the workbook cannot be fetched or decoded; no
    partial result is returned.
    """
    try:
        payload = fetch_bytes(resource, data_dir=data_dir, timeout=timeout)
        df = decode_first_sheet(payload)
    except LoadError as exc:
        logger.warning("load %s failed: %s", resource, exc)
        raise
    if schema is not None:
        df = conform_to_schema(df, schema)
    logger.info("loaded %s: %d rows, %d columns", resource, len(df), len(df.columns))
    return df
