from core.filters import DashboardFilters, normalize_filters, series_for_metric


def test_defaults():
    assert normalize_filters({}) == DashboardFilters(selected_metric="all", top_n=15)


def test_unknown_metric_falls_back_to_all():
    assert normalize_filters({"selected_metric": "profit"}).selected_metric == "all"


def test_metric_is_case_insensitive():
    assert normalize_filters({"selected_metric": " Retail "}).selected_metric == "retail"


def test_top_n_is_clamped():
    assert normalize_filters({"top_n": 0}).top_n == 1
    assert normalize_filters({"top_n": 40}).top_n == 15
    assert normalize_filters({"top_n": 10_000}).top_n == 15
    assert normalize_filters({"top_n": "abc"}).top_n == 15
    assert normalize_filters({"top_n": "7"}).top_n == 7


def test_series_for_metric():
    assert series_for_metric("all") == ["warehouse_sales", "retail_sales", "retail_transfers"]
    assert series_for_metric("warehouse") == ["warehouse_sales"]
    assert series_for_metric("retail") == ["retail_sales"]
    assert series_for_metric("transfers") == ["retail_transfers"]
    assert series_for_metric("bogus") == series_for_metric("all")
