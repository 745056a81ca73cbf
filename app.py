import logging
from contextlib import contextmanager
from typing import Dict, Optional

import pandas as pd
import streamlit as st

from dashboard.pages import load_expense_context, load_financial_context
from dashboard.presentation import ChartSlot, build_table, render_table_html
from dashboard.schemas import EXPENSE_SCHEMAS, FINANCIAL_PERFORMANCE
from dashboard.settings import TABLE_TITLES, normalize_settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #6b7280;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        table.data-table {margin: 0 auto;border-collapse: collapse;font-size: 0.9rem;}
        table.data-table th, table.data-table td {border: 1px solid #ccc;padding: 4px 8px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def render_page_header(title: str, breadcrumb: str, export_df: Optional[pd.DataFrame] = None, export_name: str = "export.csv"):
    inject_base_styles()
    c1, c2 = st.columns([8, 2])
    with c1:
        st.markdown(
            f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
            unsafe_allow_html=True,
        )
    with c2:
        if export_df is not None and not export_df.empty:
            st.download_button(
                "Export CSV",
                data=export_df.to_csv(index=False).encode("utf-8"),
                file_name=export_name,
                mime="text/csv",
            )


def render_count_table(counts: Dict[str, int], label: str):
    st.dataframe(pd.DataFrame({label: list(counts.keys()), "Count": list(counts.values())}), hide_index=True, use_container_width=True)


# ---------- UI setup ----------
st.set_page_config(page_title="High Point Margin Performance Dashboard", layout="wide")
inject_base_styles()
st.title("High Point Margin Performance Dashboard")

with st.sidebar:
    st.markdown("### Navigate")
    nav_choice = st.radio("Navigate", ["Margin Performance", "Financial Performance"], index=0)
    st.markdown("---")
    with st.expander("Advanced settings", expanded=False):
        schema_options = ["Auto-detect"] + [s.name for s in EXPENSE_SCHEMAS]
        schema_choice = st.selectbox("Expense sheet layout", schema_options, index=0)

settings = normalize_settings({"expense_schema": None if schema_choice == "Auto-detect" else schema_choice})


# ----- Page renderers -----
def render_margin_page():
    ctx = load_expense_context(settings)
    render_page_header("Margin Performance", "Home / Margin Performance", export_df=ctx["sorted"], export_name="expense.csv")
    if ctx["error"]:
        st.error(ctx["error"])
        return

    schema = ctx["schema"]
    st.caption(f"{len(ctx['dataset'])} rows · layout {schema.name}")

    chart_col, counts_col = st.columns([3, 2])
    with chart_col:
        with card("📊 Margin Risk Assessment"):
            slot = ChartSlot(st.empty(), palette=settings.palette)
            if slot.render(ctx["counts"]) is None:
                st.info("No rows to chart.")
    with counts_col:
        with card("Diagnostic summary"):
            render_count_table(ctx["counts"], "Performance Diagnostic Summary")
        if "elasticity_counts" in ctx:
            with card("Elasticity classification"):
                render_count_table(ctx["elasticity_counts"], "Elasticity Classification")

    with card("Expense detail (by efficiency alert priority)"):
        st.markdown(render_table_html(build_table(ctx["sorted"], schema)), unsafe_allow_html=True)


def render_financial_page():
    ctx = load_financial_context(settings)
    render_page_header("Financial Performance", "Home / Financial Performance", export_df=ctx["dataset"], export_name="financial.csv")
    if ctx["error"]:
        st.error(ctx["error"])
        return

    for key, view in ctx["slices"].items():
        with card(TABLE_TITLES[key]):
            if view.empty:
                st.info("No rows for this category.")
            st.markdown(render_table_html(build_table(view, FINANCIAL_PERFORMANCE)), unsafe_allow_html=True)


if nav_choice == "Margin Performance":
    render_margin_page()
else:
    render_financial_page()
