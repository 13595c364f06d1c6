from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel


class DashboardFiltersModel(BaseModel):
    selected_metric: Literal["all", "warehouse", "retail", "transfers"] = "all"
    top_n: int = 15


class MetricOption(BaseModel):
    value: str
    label: str
    series: List[str]


class MetaMetricsResponse(BaseModel):
    metrics: List[MetricOption]


class MetaSummaryResponse(BaseModel):
    files: List[str]
    total_records: int
