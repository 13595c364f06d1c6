from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from core.aggregate import aggregate
from core.filters import DashboardFilters, normalize_filters


DATA_DIR = Path(__file__).resolve().parents[1]
DATA_FILE = "Warehouse_and_Retail_Sales.csv"
DATA_PATH_ENV = "SALES_CSV_PATH"

logger = logging.getLogger(__name__)


class DataUnavailableError(RuntimeError):
    """The sales CSV could not be read."""


def get_source_file() -> Path:
    override = os.environ.get(DATA_PATH_ENV)
    if override:
        return Path(override)
    return DATA_DIR / DATA_FILE


def file_signature(path: Path) -> Tuple[str, float]:
    return (str(path), path.stat().st_mtime)


def read_sales_rows(path: Path) -> List[Dict[str, str]]:
    """Read the CSV as header-mapped text rows.

    Every cell stays a string and blank cells stay ``""``; supplier names like "NA"
    must not be turned into missing values.
    """
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except UnicodeDecodeError:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True, encoding="latin-1")
    df.columns = df.columns.str.strip()
    return df.to_dict(orient="records")


# ---------------- Public API (Streamlit parity + FastAPI use) ----------------
@lru_cache(maxsize=4)
def _load_dashboard_data_cached(file_sig: Tuple[str, float]) -> Dict[str, object]:
    path = Path(file_sig[0])
    rows = read_sales_rows(path)
    return {
        "files": [path.name],
        "rows": rows,
        "total_records": len(rows),
    }


def load_dashboard_data(path: Optional[Path] = None) -> Dict[str, object]:
    path = Path(path) if path is not None else get_source_file()
    try:
        sig = file_signature(path)
        return _load_dashboard_data_cached(sig)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        logger.warning("sales data unavailable at %s: %s", path, exc)
        raise DataUnavailableError(f"data unavailable: {path.name}") from exc


def prepare_context(filters: dict | DashboardFilters, data_ctx: Dict[str, object]) -> Dict[str, object]:
    if isinstance(filters, dict):
        filters = normalize_filters(filters)
    rows = data_ctx.get("rows", []) or []
    return {
        "rows": rows,
        "total_records": int(data_ctx.get("total_records", len(rows)) or 0),
        "records": aggregate(rows, top_n=filters.top_n),
    }


def format_amount(value: object) -> str:
    if value is None or pd.isna(value):
        return "N/A"
    return f"{float(value):,.2f}"


def format_whole(value: object) -> str:
    if value is None or pd.isna(value):
        return "N/A"
    return f"{float(value):,.0f}"
