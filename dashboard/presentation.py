from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import altair as alt
import pandas as pd

from dashboard.charts import count_chart, to_vega_spec
from dashboard.formatting import format_frame
from dashboard.schemas import SheetSchema
from dashboard.settings import CHART_PALETTE


logger = logging.getLogger(__name__)


@dataclass
class ChartHandle:
    chart: alt.Chart
    spec: Dict[str, Any]
    on_dispose: Optional[Callable[[], None]] = None
    disposed: bool = False

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        if self.on_dispose is not None:
            self.on_dispose()


class ChartSlot:
    """Owns at most one live chart; the previous one is released before a new one is built.

    ``target`` is anything with ``altair_chart(chart, ...)`` and ``empty()``
    (a Streamlit ``st.empty()`` placeholder), or None to only keep the spec.
    """

    def __init__(self, target: Any = None, palette: Sequence[str] = CHART_PALETTE) -> None:
        self.target = target
        self.palette = list(palette)
        self._handle: Optional[ChartHandle] = None

    @property
    def handle(self) -> Optional[ChartHandle]:
        return self._handle

    def clear(self) -> None:
        if self._handle is not None:
            self._handle.dispose()
            self._handle = None

    def render(self, counts: Mapping[str, int], *, title: str = "") -> Optional[ChartHandle]:
        self.clear()
        if not counts:
            return None
        chart = count_chart(counts, self.palette, title=title)
        on_dispose = None
        if self.target is not None:
            self.target.altair_chart(chart, use_container_width=True)
            on_dispose = self.target.empty
        self._handle = ChartHandle(chart=chart, spec=to_vega_spec(chart), on_dispose=on_dispose)
        logger.debug("chart rebuilt with %d bars", len(counts))
        return self._handle


@dataclass
class TableView:
    columns: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=self.columns)


def build_table(df: pd.DataFrame, schema: SheetSchema) -> TableView:
    formatted = format_frame(df, schema)
    return TableView(columns=[str(c) for c in formatted.columns], rows=formatted.to_dict(orient="records"))


def render_table_html(table: TableView) -> str:
    head = "".join(f"<th>{html.escape(c)}</th>" for c in table.columns)
    body = "".join(
        "<tr>" + "".join(f"<td>{html.escape(str(row.get(c, '')))}</td>" for c in table.columns) + "</tr>"
        for row in table.rows
    )
    return f"<table class='data-table'><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"
