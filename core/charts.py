from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import altair as alt

from core.aggregate import SummaryRecord, records_to_frame
from core.filters import METRIC_COLORS, METRICS

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def build_sales_chart(records: Sequence[SummaryRecord], series: List[str], height: int = 500) -> Optional[alt.Chart]:
    """Grouped bar chart: one group per supplier (ranked order), one bar per selected series."""
    series = [s for s in series if s in METRICS]
    if not records or not series:
        return None

    wide = records_to_frame(records)
    long_df = wide.melt(
        id_vars=["rank", "name", "short_name", "total"],
        value_vars=series,
        var_name="series",
        value_name="amount",
    )
    long_df["series_label"] = long_df["series"].map(METRICS)

    labels = [METRICS[s] for s in series]
    colors = [METRIC_COLORS[s] for s in series]
    order = wide["short_name"].tolist()

    return (
        alt.Chart(long_df)
        .mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
        .encode(
            x=alt.X("short_name:N", title=None, sort=order, axis=alt.Axis(labelAngle=-45, labelLimit=200)),
            xOffset=alt.XOffset("series_label:N", sort=labels),
            y=alt.Y("amount:Q", title="Sales", axis=alt.Axis(format="~s", gridDash=[3, 3])),
            color=alt.Color("series_label:N", title=None, scale=alt.Scale(domain=labels, range=colors), legend=alt.Legend(orient="bottom")),
            tooltip=[
                alt.Tooltip("name:N", title="Warehouse"),
                alt.Tooltip("series_label:N", title="Metric"),
                alt.Tooltip("amount:Q", title="Value", format=",.2f"),
                alt.Tooltip("total:Q", title="Total", format=",.2f"),
            ],
        )
        .properties(height=height)
    )


def sales_chart_spec(records: Sequence[SummaryRecord], series: List[str]) -> Optional[Dict[str, Any]]:
    chart = build_sales_chart(records, series)
    return to_vega_spec(chart) if chart is not None else None
