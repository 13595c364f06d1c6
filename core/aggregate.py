"""Supplier aggregation for the warehouse/retail sales dataset.

Rows come straight from CSV parsing (header-mapped, every value as text) and are
reduced to one ``SummaryRecord`` per supplier, ranked by total sales.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd


SUPPLIER_COLUMN = "SUPPLIER"
AMOUNT_COLUMNS = {
    "WAREHOUSE SALES": "warehouse_sales",
    "RETAIL SALES": "retail_sales",
    "RETAIL TRANSFERS": "retail_transfers",
}
AMOUNT_FIELDS = list(AMOUNT_COLUMNS.values())

TOP_N = 15
LABEL_MAX_LEN = 20
LABEL_KEEP_LEN = 18
ELLIPSIS = "…"

# Leading decimal literal, ASCII digits only; trailing text is ignored.
AMOUNT_PREFIX = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


@dataclass(frozen=True)
class SummaryRecord:
    name: str
    warehouse_sales: float
    retail_sales: float
    retail_transfers: float
    total: float
    short_name: str


def normalize_supplier(value: Any) -> Optional[str]:
    """Return the grouping key for a raw supplier cell, or None when the row has no supplier.

    The key is kept verbatim: no stripping and no case folding.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        if pd.api.types.is_scalar(value) and pd.isna(value):
            return None
        value = str(value)
    return value or None


def parse_amount(value: Any) -> float:
    """Parse a numeric-as-text cell the way a browser's parseFloat reads it.

    Only the leading decimal literal counts ("12abc" -> 12, "1,234" -> 1, "1_000" -> 1).
    Anything missing, without a leading number, or non-finite counts as 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        out = float(value)
    else:
        match = AMOUNT_PREFIX.match(str(value))
        if not match:
            return 0.0
        out = float(match.group(1))
    if math.isnan(out) or math.isinf(out):
        return 0.0
    return out


def _running_sum(values: pd.Series) -> float:
    total = 0.0
    for v in values:
        total += v
    return total


def shorten_label(name: str) -> str:
    if len(name) > LABEL_MAX_LEN:
        return name[:LABEL_KEEP_LEN] + ELLIPSIS
    return name


def aggregate(rows: Iterable[Mapping[str, Any]], top_n: int = TOP_N) -> List[SummaryRecord]:
    """Group rows by supplier, sum the three sales columns and return the top ``top_n`` by total.

    Rows without a supplier are dropped before grouping. Bad numeric cells add 0 for
    that cell only. Sums run left to right in row order. Ties on total keep first-seen
    supplier order. ``top_n`` is capped at ``TOP_N``.
    """
    frame = pd.DataFrame.from_records([dict(row) for row in rows])
    if frame.empty or SUPPLIER_COLUMN not in frame.columns:
        return []

    suppliers = frame[SUPPLIER_COLUMN].map(normalize_supplier)
    keep = suppliers.notna()
    if not keep.any():
        return []

    sums = pd.DataFrame({"name": suppliers[keep].astype(object)})
    for column, field in AMOUNT_COLUMNS.items():
        if column in frame.columns:
            sums[field] = frame.loc[keep, column].map(parse_amount).astype(float)
        else:
            sums[field] = 0.0

    grouped = sums.groupby("name", sort=False)[AMOUNT_FIELDS].agg(_running_sum).reset_index()
    grouped["total"] = grouped["warehouse_sales"] + grouped["retail_sales"] + grouped["retail_transfers"]
    top = grouped.sort_values("total", ascending=False, kind="stable").head(max(0, min(TOP_N, int(top_n))))

    return [
        SummaryRecord(
            name=str(r.name),
            warehouse_sales=float(r.warehouse_sales),
            retail_sales=float(r.retail_sales),
            retail_transfers=float(r.retail_transfers),
            total=float(r.total),
            short_name=shorten_label(str(r.name)),
        )
        for r in top.itertuples(index=False)
    ]


def records_to_frame(records: Iterable[SummaryRecord]) -> pd.DataFrame:
    columns = ["name", "short_name", *AMOUNT_FIELDS, "total"]
    frame = pd.DataFrame([{c: getattr(rec, c) for c in columns} for rec in records], columns=columns)
    frame.insert(0, "rank", range(1, len(frame) + 1))
    return frame
