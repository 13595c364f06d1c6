from core.aggregate import aggregate
from core.filters import DashboardFilters
from core.metrics_overview import compute_overview, overview_export_frame


def _ctx(rows, total_records=None):
    return {
        "rows": rows,
        "total_records": len(rows) if total_records is None else total_records,
        "records": aggregate(rows),
    }


ROWS = [
    {"SUPPLIER": "Acme", "WAREHOUSE SALES": "1000", "RETAIL SALES": "234.5", "RETAIL TRANSFERS": "0"},
    {"SUPPLIER": "Bolt", "WAREHOUSE SALES": "10", "RETAIL SALES": "5", "RETAIL TRANSFERS": "1"},
    {"SUPPLIER": "", "WAREHOUSE SALES": "99999", "RETAIL SALES": "0", "RETAIL TRANSFERS": "0"},
]


def test_stats_count_every_parsed_row():
    payload = compute_overview(DashboardFilters(), _ctx(ROWS))

    stats = payload["stats"]
    assert stats["total_records"] == 3
    assert stats["warehouses_shown"] == 2
    assert stats["total_sales"] == 1250.5
    assert stats["total_sales_display"] == "1,250"


def test_table_is_ranked_and_formatted():
    payload = compute_overview(DashboardFilters(), _ctx(ROWS))

    first, second = payload["table"]
    assert first["rank"] == 1
    assert first["name"] == "Acme"
    assert first["warehouse_sales_display"] == "1,000.00"
    assert first["retail_sales_display"] == "234.50"
    assert first["total_display"] == "1,234.50"
    assert second["rank"] == 2
    assert second["name"] == "Bolt"


def test_chart_spec_follows_selected_metric():
    payload = compute_overview(DashboardFilters(selected_metric="retail"), _ctx(ROWS))

    chart = payload["chart"]
    assert chart is not None
    assert chart["mark"]["type"] == "bar"
    assert chart["encoding"]["color"]["scale"]["domain"] == ["Retail Sales"]


def test_all_metrics_chart_has_three_series():
    payload = compute_overview(DashboardFilters(), _ctx(ROWS))

    domain = payload["chart"]["encoding"]["color"]["scale"]["domain"]
    assert domain == ["Warehouse Sales", "Retail Sales", "Retail Transfers"]


def test_empty_dataset():
    payload = compute_overview(DashboardFilters(), _ctx([]))

    assert payload["chart"] is None
    assert payload["table"] == []
    assert payload["records"] == []
    assert payload["stats"]["warehouses_shown"] == 0


def test_export_frame_columns():
    frame = overview_export_frame(_ctx(ROWS))

    assert list(frame.columns) == ["Rank", "Warehouse / Supplier", "Warehouse Sales", "Retail Sales", "Retail Transfers", "Total"]
    assert frame["Warehouse / Supplier"].tolist() == ["Acme", "Bolt"]


def test_chart_x_axis_follows_rank_and_tooltip_shows_full_name():
    rows = ROWS + [{"SUPPLIER": "Great Lakes Wine & Spirits Distribution Co", "WAREHOUSE SALES": "5000"}]

    chart = compute_overview(DashboardFilters(), _ctx(rows))["chart"]

    assert chart["encoding"]["x"]["field"] == "short_name"
    assert chart["encoding"]["x"]["sort"] == ["Great Lakes Wine &…", "Acme", "Bolt"]
    tooltip_fields = [t["field"] for t in chart["encoding"]["tooltip"]]
    assert tooltip_fields == ["name", "series_label", "amount", "total"]
