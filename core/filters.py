from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from core.aggregate import TOP_N


METRICS: Dict[str, str] = {
    "warehouse_sales": "Warehouse Sales",
    "retail_sales": "Retail Sales",
    "retail_transfers": "Retail Transfers",
}

METRIC_COLORS: Dict[str, str] = {
    "warehouse_sales": "#00d4aa",
    "retail_sales": "#ff6b9d",
    "retail_transfers": "#7c5cff",
}

# Selector value -> series shown.
METRIC_OPTIONS: Dict[str, List[str]] = {
    "all": list(METRICS),
    "warehouse": ["warehouse_sales"],
    "retail": ["retail_sales"],
    "transfers": ["retail_transfers"],
}

METRIC_OPTION_LABELS: Dict[str, str] = {
    "all": "All Metrics",
    "warehouse": "Warehouse Sales",
    "retail": "Retail Sales",
    "transfers": "Retail Transfers",
}


@dataclass(frozen=True)
class DashboardFilters:
    selected_metric: str = "all"
    top_n: int = TOP_N


def series_for_metric(metric: str) -> List[str]:
    return list(METRIC_OPTIONS.get(metric, METRIC_OPTIONS["all"]))


def normalize_filters(raw: dict) -> DashboardFilters:
    selected_metric = str(raw.get("selected_metric") or "all").strip().lower()
    if selected_metric not in METRIC_OPTIONS:
        selected_metric = "all"

    top_n = raw.get("top_n", TOP_N)
    try:
        top_n = int(top_n)
    except Exception:
        top_n = TOP_N
    top_n = max(1, min(TOP_N, top_n))

    return DashboardFilters(selected_metric=selected_metric, top_n=top_n)
