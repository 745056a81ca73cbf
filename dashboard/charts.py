from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

import altair as alt
import pandas as pd

from dashboard.settings import CHART_PALETTE

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def bar_colors(n: int, palette: Sequence[str] = CHART_PALETTE) -> List[str]:
    palette = list(palette)[:4] or list(CHART_PALETTE)
    return [palette[i % len(palette)] for i in range(n)]


def count_chart(counts: Mapping[str, int], palette: Sequence[str] = CHART_PALETTE, *, title: str = "") -> alt.Chart:
    labels = list(counts.keys())
    source = pd.DataFrame({"label": labels, "count": [int(v) for v in counts.values()]})
    chart = (
        alt.Chart(source)
        .mark_bar()
        .encode(
            x=alt.X("label:N", title=None, sort=labels, axis=alt.Axis(labelAngle=0)),
            y=alt.Y("count:Q", title="Count", scale=alt.Scale(zero=True), axis=alt.Axis(tickMinStep=1, format="d")),
            color=alt.Color("label:N", scale=alt.Scale(domain=labels, range=bar_colors(len(labels), palette)), legend=None),
            tooltip=[alt.Tooltip("label:N", title="Value"), alt.Tooltip("count:Q", title="Count")],
        )
        .properties(height=300)
    )
    if title:
        chart = chart.properties(title=title)
    return chart
