import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

import math

import pytest
import requests

from core.client import ResourceClient
from core.config import PanelConfig

BASE_URL = "http://api.test"


# ----- Fake HTTP layer -----
class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def json(self):
        if self._text is not None or self._payload is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


def make_products(n, start=1):
    return [
        {
            "id": i,
            "name": f"Product {i}",
            "price": round(1.5 * i, 2),
            "quantity": i * 2,
            "description": f"desc {i}",
        }
        for i in range(start, start + n)
    ]


class FakeAdminApi:
    """In-memory stand-in for the admin REST API, usable as a requests.Session."""

    def __init__(self, products=None, per_page=10, statistics=None, series=None):
        self.products = list(products or [])
        self.per_page = per_page
        self.statistics = statistics or {"total_products": 3, "total_quantity": 42, "average_price": 12.5}
        self.series = series or {
            "day": [{"x": "2024-01-01T00:00:00", "y": 1}, {"x": "2024-01-02T00:00:00", "y": 3}],
            "month": [{"x": "2024-01-01T00:00:00", "y": 10}, {"x": "2024-02-01T00:00:00", "y": 20}, {"x": "2024-03-01T00:00:00", "y": 15}],
            "year": [[1704067200000, 100]],
        }
        self.calls = []
        self.failures = {}

    def fail(self, method, path_prefix, outcome):
        """outcome: an exception instance, an HTTP status int, or 'badjson'."""
        self.failures[(method, path_prefix)] = outcome

    def calls_to(self, path_prefix, method="GET"):
        return [c for c in self.calls if c[0] == method and c[1].startswith(path_prefix)]

    def request(self, method, url, params=None, timeout=None):
        assert url.startswith(BASE_URL), url
        path = url[len(BASE_URL):]
        self.calls.append((method, path, dict(params or {}), timeout))

        for (m, prefix), outcome in self.failures.items():
            if m == method and path.startswith(prefix):
                if isinstance(outcome, Exception):
                    raise outcome
                if outcome == "badjson":
                    return FakeResponse(200, text="<html>oops</html>")
                return FakeResponse(int(outcome), payload={"message": "error"})

        if method == "GET" and path == "/api/dashboard/statistics":
            return FakeResponse(200, self.statistics)
        if method == "GET" and path == "/api/dashboard/line-chart":
            return FakeResponse(200, self.series[params["filter"]])
        if method == "GET" and path == "/api/products/list":
            return FakeResponse(200, self._list(int(params.get("page", 1)), params.get("search", "")))
        if method == "DELETE" and path.startswith("/api/products/delete/"):
            product_id = int(path.rsplit("/", 1)[-1])
            before = len(self.products)
            self.products = [p for p in self.products if p["id"] != product_id]
            return FakeResponse(200 if len(self.products) < before else 404)
        return FakeResponse(404, payload={"message": "not found"})

    def _list(self, page, search):
        rows = [p for p in self.products if search.lower() in p["name"].lower()]
        last_page = max(1, math.ceil(len(rows) / self.per_page))
        current = max(1, min(page, last_page))
        start = (current - 1) * self.per_page
        return {
            "data": rows[start:start + self.per_page],
            "current_page": current,
            "last_page": last_page,
            "per_page": self.per_page,
        }


@pytest.fixture
def config():
    return PanelConfig(base_url=BASE_URL, timeout=5.0)


@pytest.fixture
def api():
    return FakeAdminApi(products=make_products(25))


@pytest.fixture
def client(config, api):
    return ResourceClient(config, session=api)


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
