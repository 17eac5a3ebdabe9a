from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import TypeAdapter, ValidationError

from core.config import PanelConfig
from core.errors import NetworkError, ParseError, ServerError
from core.models import ProductPage, Statistics, TimeFilter, TimeSeriesPoint

logger = logging.getLogger(__name__)

STATISTICS_PATH = "/api/dashboard/statistics"
LINE_CHART_PATH = "/api/dashboard/line-chart"
PRODUCT_LIST_PATH = "/api/products/list"
PRODUCT_DELETE_PATH = "/api/products/delete/{product_id}"

_series_adapter = TypeAdapter(List[TimeSeriesPoint])


class ResourceClient:
    """HTTP access to the admin API.

    Every call either returns a parsed payload or raises a
    :class:`core.errors.ResourceError` subclass. There are no retries; the
    only timeout is the one configured on ``PanelConfig``.
    """

    def __init__(self, config: PanelConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    def url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = self.url(path)
        try:
            resp = self.session.request(method, url, params=params, timeout=self.config.timeout)
        except requests.RequestException as exc:
            raise NetworkError(f"{method} {url} failed: {exc}", url=url) from exc
        if not 200 <= resp.status_code < 300:
            raise ServerError(
                f"{method} {url} returned HTTP {resp.status_code}",
                url=url,
                status_code=resp.status_code,
            )
        return resp

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        resp = self._request("GET", path, params=params)
        try:
            return resp.json()
        except ValueError as exc:
            raise ParseError(f"GET {self.url(path)} returned a non-JSON body", url=self.url(path)) from exc

    def get_statistics(self) -> Statistics:
        body = self._get_json(STATISTICS_PATH)
        try:
            return Statistics.model_validate(body)
        except ValidationError as exc:
            raise ParseError(f"unexpected statistics payload: {exc}", url=self.url(STATISTICS_PATH)) from exc

    def get_line_chart(self, filter: TimeFilter | str) -> List[TimeSeriesPoint]:
        value = TimeFilter.parse(filter).value
        body = self._get_json(LINE_CHART_PATH, params={"filter": value})
        try:
            return _series_adapter.validate_python(body)
        except ValidationError as exc:
            raise ParseError(f"unexpected line-chart payload: {exc}", url=self.url(LINE_CHART_PATH)) from exc

    def list_products(self, page: int = 1, search: str = "") -> ProductPage:
        body = self._get_json(PRODUCT_LIST_PATH, params={"page": int(page), "search": search or ""})
        try:
            return ProductPage.model_validate(body)
        except ValidationError as exc:
            raise ParseError(f"unexpected product list payload: {exc}", url=self.url(PRODUCT_LIST_PATH)) from exc

    def delete_product(self, product_id: int) -> None:
        path = PRODUCT_DELETE_PATH.format(product_id=int(product_id))
        self._request("DELETE", path)
        logger.info("Deleted product %s", product_id)
