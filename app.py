import logging
from contextlib import contextmanager
from datetime import date
from typing import Optional

import pandas as pd
import streamlit as st

from core.charts import build_sales_chart
from core.data import DataUnavailableError, format_amount, load_dashboard_data, prepare_context
from core.filters import METRIC_COLORS, METRIC_OPTION_LABELS, METRICS, normalize_filters, series_for_metric
from core.metrics_overview import compute_overview, overview_export_frame

logging.basicConfig(level=logging.INFO)


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .footer {color: #6b7280;font-size: 0.85rem;text-align: center;margin-top: 24px;}
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


def render_stats(stats: dict):
    cols = st.columns(3)
    cols[0].metric("Total Records", stats["total_records_display"])
    cols[1].metric("Warehouses Shown", f"{stats['warehouses_shown']}")
    cols[2].metric("Total Sales (Top 15)", stats["total_sales_display"])


def render_table(table: list, export_df: Optional[pd.DataFrame] = None):
    if not table:
        st.info("No warehouses with sales found in the dataset.")
        return
    df = pd.DataFrame(
        {
            "Rank": [f"#{r['rank']}" for r in table],
            "Warehouse / Supplier": [r["name"] for r in table],
            **{label: [r[f"{key}_display"] for r in table] for key, label in METRICS.items()},
            "Total": [r["total_display"] for r in table],
        }
    )
    st.dataframe(df, hide_index=True, use_container_width=True)
    if export_df is not None and not export_df.empty:
        st.download_button(
            "Export CSV",
            data=export_df.to_csv(index=False).encode("utf-8"),
            file_name="top_warehouses.csv",
            mime="text/csv",
        )


# ---------- UI setup ----------
st.set_page_config(page_title="Warehouse & Retail Sales", layout="wide")
inject_base_styles()
st.title("Warehouse & Retail Sales")
st.caption("Sales Distribution by Warehouse (Top 15)")

try:
    with st.spinner("Loading sales data..."):
        data_ctx = load_dashboard_data()
except DataUnavailableError as exc:
    st.error(f"Data unavailable. Place Warehouse_and_Retail_Sales.csv next to app.py. ({exc})")
    st.stop()

selected_metric = st.radio(
    "Metric",
    options=list(METRIC_OPTION_LABELS),
    format_func=METRIC_OPTION_LABELS.get,
    horizontal=True,
    label_visibility="collapsed",
)

f = normalize_filters({"selected_metric": selected_metric, "top_n": 15})
ctx = prepare_context(f, data_ctx)
payload = compute_overview(f, ctx)

render_stats(payload["stats"])

with card("Sales by Warehouse"):
    chart = build_sales_chart(ctx["records"], series_for_metric(f.selected_metric))
    if chart is None:
        st.info("Nothing to chart.")
    else:
        st.altair_chart(chart, use_container_width=True)
    legend = " ".join(
        f"<span style='color:{METRIC_COLORS[s]}'>&#9632; {METRICS[s]}</span>" for s in series_for_metric(f.selected_metric)
    )
    st.markdown(legend, unsafe_allow_html=True)

with card("Top Warehouses by Total Sales"):
    render_table(payload["table"], export_df=overview_export_frame(ctx))
    if payload["table"]:
        top = payload["table"][0]
        st.caption(f"Leader: {top['name']} at {format_amount(top['total'])} total sales.")

st.markdown(f"<div class='footer'>Data visualization powered by Altair • {date.today().year}</div>", unsafe_allow_html=True)
