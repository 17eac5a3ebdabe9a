"""JSON-serializable view payloads for the dashboard and product screens.

These are the only things a front end needs to render; the Streamlit app
and the FastAPI view routes both build on them.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

from core.charts import line_chart, statistics_bar_chart, to_vega_spec
from core.config import PanelConfig
from core.dashboard import StatisticsController, TimeSeriesController
from core.models import Pagination, Product, Statistics, TimeFilter
from core.products import ProductListController

EMPTY_PRODUCTS_MESSAGE = "No products found."
DELETE_CONFIRM_PROMPT = "Are you sure you want to delete this product?"
TABLE_COLUMNS = ["Name", "Price", "Quantity", "Description"]


def format_price(value: float) -> str:
    # plain decimal notation, no exponent and no trailing zeros
    return format(Decimal(str(value)).normalize(), "f")


def table_cells(product: Product) -> List[str]:
    """Display text for one table row, in ``TABLE_COLUMNS`` order."""
    return [product.name, format_price(product.price), str(product.quantity), product.description]


def pagination_view(pagination: Pagination) -> Dict[str, Any]:
    current, last = pagination.current_page, pagination.last_page
    return {
        "label": f"Showing page {current} of {last}",
        "current_page": current,
        "last_page": last,
        "per_page": pagination.per_page,
        "pages": list(range(1, last + 1)),
        "prev_disabled": current == 1,
        "next_disabled": current == last,
    }


def product_list_view(ctl: ProductListController) -> Dict[str, Any]:
    rows: List[Dict[str, Any]] = [p.model_dump() for p in ctl.products]
    return {
        "status": ctl.status.value,
        "search": ctl.search,
        "columns": TABLE_COLUMNS,
        "rows": rows,
        "empty_message": None if rows else EMPTY_PRODUCTS_MESSAGE,
        "pagination": pagination_view(ctl.pagination),
        "modal": {
            "open": ctl.modal_open,
            "product_id": ctl.pending_delete_id,
            "prompt": DELETE_CONFIRM_PROMPT if ctl.modal_open else None,
        },
        "notice": ctl.notice,
        "error": str(ctl.last_error) if ctl.last_error else None,
    }


def statistics_tiles(stats: Statistics) -> List[Dict[str, Any]]:
    return [
        {"key": "total_products", "label": "Total Products", "value": stats.total_products, "display": f"{stats.total_products:,.0f}"},
        {"key": "total_quantity", "label": "Total Quantity", "value": stats.total_quantity, "display": f"{stats.total_quantity:,.0f}"},
        {"key": "average_price", "label": "Average Price", "value": stats.average_price, "display": f"{stats.average_price:,.2f}"},
    ]


def dashboard_view(
    stats_ctl: StatisticsController,
    series_ctl: TimeSeriesController,
    config: PanelConfig,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "statistics": stats_ctl.statistics.model_dump(),
        "tiles": statistics_tiles(stats_ctl.statistics),
        "filter": series_ctl.filter.value,
        "filter_options": [f.value for f in TimeFilter],
        "series_status": series_ctl.status.value,
        "series": [{"x": p.x.isoformat(), "y": p.y} for p in series_ctl.points],
        "line_chart": to_vega_spec(line_chart(series_ctl.points)),
        "bar_chart": None,
        "errors": [str(e) for e in (stats_ctl.last_error, series_ctl.last_error) if e],
    }
    if config.show_statistics_bar:
        payload["bar_chart"] = to_vega_spec(statistics_bar_chart(stats_ctl.statistics))
    return payload
