from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

import pandas as pd

from core.aggregate import AMOUNT_FIELDS, SummaryRecord, records_to_frame
from core.charts import sales_chart_spec
from core.data import format_amount, format_whole
from core.filters import DashboardFilters, series_for_metric


EXPORT_COLUMNS = {
    "rank": "Rank",
    "name": "Warehouse / Supplier",
    "warehouse_sales": "Warehouse Sales",
    "retail_sales": "Retail Sales",
    "retail_transfers": "Retail Transfers",
    "total": "Total",
}


def _table_rows(records: List[SummaryRecord]) -> List[Dict[str, Any]]:
    rows = []
    for rank, rec in enumerate(records, start=1):
        row: Dict[str, Any] = {"rank": rank, "name": rec.name, "short_name": rec.short_name}
        for field in [*AMOUNT_FIELDS, "total"]:
            value = getattr(rec, field)
            row[field] = value
            row[f"{field}_display"] = format_amount(value)
        rows.append(row)
    return rows


def compute_overview(filters: DashboardFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    records: List[SummaryRecord] = ctx.get("records", []) or []
    total_records = int(ctx.get("total_records", 0) or 0)
    total_sales = float(sum(r.total for r in records))

    stats = {
        "total_records": total_records,
        "total_records_display": f"{total_records:,}",
        "warehouses_shown": len(records),
        "total_sales": total_sales,
        "total_sales_display": format_whole(total_sales),
    }

    return {
        "filters": asdict(filters),
        "stats": stats,
        "chart": sales_chart_spec(records, series_for_metric(filters.selected_metric)),
        "table": _table_rows(records),
        "records": [asdict(r) for r in records],
    }


def overview_export_frame(ctx: Dict[str, Any]) -> pd.DataFrame:
    frame = records_to_frame(ctx.get("records", []) or [])
    return frame[list(EXPORT_COLUMNS)].rename(columns=EXPORT_COLUMNS)
