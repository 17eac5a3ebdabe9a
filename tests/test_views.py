import pytest

from core.charts import line_chart, series_frame, statistics_bar_chart, to_vega_spec
from core.config import PanelConfig
from core.dashboard import StatisticsController, TimeSeriesController
from core.models import Pagination, Product, Statistics, TimeSeriesPoint
from core.products import ProductListController
from core.views import (
    EMPTY_PRODUCTS_MESSAGE,
    dashboard_view,
    format_price,
    pagination_view,
    product_list_view,
    statistics_tiles,
    table_cells,
)


def test_pagination_view_middle_page():
    view = pagination_view(Pagination(current_page=2, last_page=3, per_page=10))
    assert view["label"] == "Showing page 2 of 3"
    assert view["pages"] == [1, 2, 3]
    assert view["prev_disabled"] is False
    assert view["next_disabled"] is False


def test_pagination_view_boundaries():
    first = pagination_view(Pagination(current_page=1, last_page=3))
    last = pagination_view(Pagination(current_page=3, last_page=3))
    assert first["prev_disabled"] and not first["next_disabled"]
    assert last["next_disabled"] and not last["prev_disabled"]


def test_pagination_clamps_out_of_range_current_page():
    p = Pagination(current_page=9, last_page=2)
    assert p.current_page == 2


def test_widget_row_cells():
    product = Product(id=1, name="Widget", price=9.99, quantity=5, description="x")
    assert ", ".join(table_cells(product)) == "Widget, 9.99, 5, x"


def test_large_price_has_no_exponent():
    product = Product(id=2, name="Car", price=1234567.0, quantity=1, description="d")
    assert table_cells(product) == ["Car", "1234567", "1", "d"]


@pytest.mark.parametrize(
    "price, expected",
    [(12.345678, "12.345678"), (100.0, "100"), (0, "0"), (0.5, "0.5")],
)
def test_format_price_plain_decimal(price, expected):
    assert format_price(price) == expected


def test_product_list_view_before_load(client):
    view = product_list_view(ProductListController(client))
    assert view["status"] == "idle"
    assert view["rows"] == []
    assert view["empty_message"] == EMPTY_PRODUCTS_MESSAGE
    assert view["modal"] == {"open": False, "product_id": None, "prompt": None}


def test_product_list_view_with_modal(client):
    ctl = ProductListController(client)
    ctl.load()
    ctl.open_modal(2)
    view = product_list_view(ctl)
    assert view["empty_message"] is None
    assert view["modal"]["open"] is True
    assert view["modal"]["product_id"] == 2
    assert view["modal"]["prompt"] == "Are you sure you want to delete this product?"


def test_statistics_tiles_format():
    tiles = statistics_tiles(Statistics(total_products=1200, total_quantity=5, average_price=12.346))
    assert [t["display"] for t in tiles] == ["1,200", "5", "12.35"]


def test_line_chart_uses_temporal_axis_and_server_order():
    points = [
        TimeSeriesPoint(x="2024-03-01T00:00:00", y=3),
        TimeSeriesPoint(x="2024-01-01T00:00:00", y=1),
    ]
    spec = to_vega_spec(line_chart(points))
    assert spec["mark"]["type"] == "line"
    assert spec["encoding"]["x"]["type"] == "temporal"
    assert spec["encoding"]["order"]["field"] == "seq"
    assert list(series_frame(points)["y"]) == [3, 1]


def test_line_chart_handles_empty_series():
    spec = to_vega_spec(line_chart([]))
    assert spec["encoding"]["y"]["type"] == "quantitative"


def test_statistics_bar_chart_categories():
    df = statistics_bar_chart(Statistics(total_products=3, total_quantity=4, average_price=5)).data
    assert list(df["category"]) == ["Total Products", "Total Quantity", "Average Price"]
    assert list(df["value"]) == [3, 4, 5]


def test_dashboard_view_bar_chart_disabled_by_default(client, config):
    stats, series = StatisticsController(client), TimeSeriesController(client)
    stats.mount()
    series.load()
    view = dashboard_view(stats, series, config)
    assert view["bar_chart"] is None
    assert view["filter"] == "day"
    assert view["filter_options"] == ["day", "month", "year"]
    assert [s["y"] for s in view["series"]] == [1, 3]
    assert view["statistics"]["total_products"] == 3
    assert view["errors"] == []


def test_dashboard_view_bar_chart_enabled(client, config):
    flagged = PanelConfig(base_url=config.base_url, timeout=config.timeout, show_statistics_bar=True)
    view = dashboard_view(StatisticsController(client), TimeSeriesController(client), flagged)
    assert view["bar_chart"]["mark"]["type"] == "bar"
