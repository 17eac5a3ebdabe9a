from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import List, Optional

from core.client import ResourceClient
from core.errors import ResourceError
from core.models import Pagination, Product, ProductPage
from core.sequencing import FetchIntent, FetchWorker, RequestSequencer

logger = logging.getLogger(__name__)

DELETE_FAILED_NOTICE = "Failed to delete the product."


class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    EMPTY = "empty"


class ProductListController:
    """State of the product list screen.

    Dependencies are the page number and the search text; changing either
    issues a fetch. Only the newest fetch may update the displayed rows, and
    a failed fetch leaves the previous rows and pagination in place.
    """

    view_name = "products"

    def __init__(self, client: ResourceClient):
        self.client = client
        self.products: List[Product] = []
        self.pagination = Pagination()
        self.search = ""
        self.status = ViewStatus.IDLE
        self.pending_delete_id: Optional[int] = None
        self.notice: Optional[str] = None
        self.last_error: Optional[ResourceError] = None
        self._settled_status = ViewStatus.IDLE
        self._settled_pagination = self.pagination
        self._sequencer = RequestSequencer()
        self._lock = threading.Lock()

    # ----- fetch lifecycle -----
    def begin_load(self, page: Optional[int] = None) -> FetchIntent:
        # `page` requests a specific page without touching the displayed pagination
        with self._lock:
            token = self._sequencer.issue()
            self.status = ViewStatus.LOADING
            return FetchIntent(
                view=self.view_name,
                token=token,
                params={"page": page or self.pagination.current_page, "search": self.search},
            )

    def execute(self, intent: FetchIntent) -> ProductPage:
        return self.client.list_products(page=intent.params["page"], search=intent.params["search"])

    def apply_result(self, intent: FetchIntent, page: ProductPage) -> bool:
        with self._lock:
            if not self._sequencer.is_current(intent.token):
                logger.debug("Discarding stale product list #%s", intent.token)
                return False
            self.products = list(page.data)
            self.pagination = page.pagination
            self.status = ViewStatus.LOADED if self.products else ViewStatus.EMPTY
            self.last_error = None
            self._settled_status = self.status
            self._settled_pagination = self.pagination
            return True

    def apply_error(self, intent: FetchIntent, exc: Exception) -> bool:
        if not isinstance(exc, ResourceError):
            raise exc
        with self._lock:
            if not self._sequencer.is_current(intent.token):
                logger.debug("Discarding stale product list failure #%s: %s", intent.token, exc)
                return False
            logger.warning("Error fetching products: %s", exc)
            self.last_error = exc
            self.pagination = self._settled_pagination
            self.status = self._settled_status
            return True

    def load(self, page: Optional[int] = None) -> None:
        intent = self.begin_load(page)
        try:
            result = self.execute(intent)
        except ResourceError as exc:
            self.apply_error(intent, exc)
            return
        self.apply_result(intent, result)

    def dispatch(self, worker: FetchWorker):
        return worker.submit(self.begin_load(), self.execute, self.apply_result, self.apply_error)

    # ----- dependencies -----
    def set_search(self, text: str) -> bool:
        text = text or ""
        if text == self.search:
            return False
        self.search = text
        self.load()
        return True

    def go_to_page(self, page: int) -> bool:
        if page < 1 or page > self.pagination.last_page:
            return False
        self.pagination = self.pagination.with_page(page)
        self.load()
        return True

    def next_page(self) -> bool:
        return self.go_to_page(self.pagination.current_page + 1)

    def previous_page(self) -> bool:
        return self.go_to_page(self.pagination.current_page - 1)

    # ----- delete confirmation -----
    @property
    def modal_open(self) -> bool:
        return self.pending_delete_id is not None

    def open_modal(self, product_id: int) -> None:
        self.pending_delete_id = product_id

    def close_modal(self) -> None:
        self.pending_delete_id = None

    def confirm_delete(self) -> bool:
        product_id = self.pending_delete_id
        if product_id is None:
            return False
        try:
            self.client.delete_product(product_id)
        except ResourceError as exc:
            logger.warning("Error deleting product %s: %s", product_id, exc)
            self.last_error = exc
            self.notice = DELETE_FAILED_NOTICE
            self.close_modal()
            return False
        self.close_modal()
        self.load()
        return True

    def dismiss_notice(self) -> None:
        self.notice = None
