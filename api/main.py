from __future__ import annotations

import logging
import math

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.responses import Response
from fastapi.encoders import jsonable_encoder

from api.schemas import DashboardFiltersModel, MetaMetricsResponse, MetaSummaryResponse, MetricOption
from core.data import DataUnavailableError, load_dashboard_data, prepare_context
from core.filters import METRIC_OPTION_LABELS, METRIC_OPTIONS, DashboardFilters, normalize_filters
from core.metrics_overview import compute_overview, overview_export_frame


app = FastAPI(title="Warehouse Sales Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:8501"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _filters_from_model(model: DashboardFiltersModel) -> DashboardFilters:
    return normalize_filters(model.model_dump())


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _unavailable(exc: DataUnavailableError) -> JSONResponse:
    return JSONResponse(status_code=503, content={"error": "data unavailable", "detail": str(exc)})


def _failed(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/metrics", response_model=MetaMetricsResponse)
def meta_metrics():
    return MetaMetricsResponse(
        metrics=[
            MetricOption(value=key, label=METRIC_OPTION_LABELS[key], series=series)
            for key, series in METRIC_OPTIONS.items()
        ]
    )


@app.get("/meta/summary")
def meta_summary():
    try:
        data_ctx = load_dashboard_data()
        summary = MetaSummaryResponse(
            files=list(data_ctx.get("files", []) or []),
            total_records=int(data_ctx.get("total_records", 0) or 0),
        )
        return _json(summary.model_dump())
    except DataUnavailableError as exc:
        return _unavailable(exc)
    except Exception as exc:
        logger.exception("meta_summary failed")
        return _failed(exc)


@app.post("/overview")
def overview(filters: DashboardFiltersModel):
    try:
        data_ctx = load_dashboard_data()
        f = _filters_from_model(filters)
        ctx = prepare_context(f, data_ctx)
        return _json(compute_overview(f, ctx))
    except DataUnavailableError as exc:
        return _unavailable(exc)
    except Exception as exc:
        logger.exception("overview failed")
        return _failed(exc)


@app.post("/export/{page}")
def export_page(page: str, filters: DashboardFiltersModel):
    if page != "overview":
        return JSONResponse(status_code=404, content={"error": f"unknown page: {page}"})
    try:
        data_ctx = load_dashboard_data()
    except DataUnavailableError as exc:
        return _unavailable(exc)
    f = _filters_from_model(filters)
    ctx = prepare_context(f, data_ctx)

    export_df = overview_export_frame(ctx)
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": "attachment; filename=overview.csv"})
