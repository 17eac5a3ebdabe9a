from __future__ import annotations

import logging
from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import DashboardViewModel, DeleteResultModel, ProductListViewModel
from core.client import ResourceClient
from core.config import PanelConfig, configure_logging, get_config
from core.dashboard import StatisticsController, TimeSeriesController
from core.models import TimeFilter
from core.products import ProductListController
from core.views import dashboard_view, product_list_view


app = FastAPI(title="Product Admin Panel View API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_client(config: PanelConfig = Depends(get_config)) -> ResourceClient:
    configure_logging(config.log_level)
    return ResourceClient(config)


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _product_controller(client: ResourceClient, page: int, search: str) -> ProductListController:
    # pagination stays at its defaults until the server answers for `page`
    ctl = ProductListController(client)
    ctl.search = search
    ctl.load(page=page)
    return ctl


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/views/dashboard", response_model=DashboardViewModel)
def dashboard(
    filter: TimeFilter = Query(default=TimeFilter.DAY),
    client: ResourceClient = Depends(get_client),
    config: PanelConfig = Depends(get_config),
):
    try:
        stats_ctl = StatisticsController(client)
        stats_ctl.mount()
        series_ctl = TimeSeriesController(client, filter=filter)
        series_ctl.load()
        return dashboard_view(stats_ctl, series_ctl, config)
    except Exception as exc:
        logger.exception("dashboard view failed")
        return _error(exc)


@app.get("/views/products", response_model=ProductListViewModel)
def products(
    page: int = Query(default=1, ge=1),
    search: str = Query(default=""),
    client: ResourceClient = Depends(get_client),
):
    try:
        ctl = _product_controller(client, page, search)
        return product_list_view(ctl)
    except Exception as exc:
        logger.exception("product list view failed")
        return _error(exc)


@app.delete("/views/products/{product_id}", response_model=DeleteResultModel)
def delete_product(
    product_id: int,
    page: int = Query(default=1, ge=1),
    search: str = Query(default=""),
    client: ResourceClient = Depends(get_client),
):
    try:
        ctl = _product_controller(client, page, search)
        ctl.open_modal(product_id)
        deleted = ctl.confirm_delete()
        return {"deleted": deleted, "notice": ctl.notice, "view": product_list_view(ctl)}
    except Exception as exc:
        logger.exception("delete product %s failed", product_id)
        return _error(exc)
