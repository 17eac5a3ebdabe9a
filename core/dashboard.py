from __future__ import annotations

import logging
import threading
from typing import List, Optional

from core.client import ResourceClient
from core.errors import ResourceError
from core.models import Statistics, TimeFilter, TimeSeriesPoint
from core.products import ViewStatus
from core.sequencing import FetchIntent, FetchWorker, RequestSequencer

logger = logging.getLogger(__name__)


class StatisticsController:
    """Aggregate statistics, fetched once per mount of the dashboard."""

    def __init__(self, client: ResourceClient):
        self.client = client
        self.statistics = Statistics()
        self.status = ViewStatus.IDLE
        self.last_error: Optional[ResourceError] = None
        self._mounted = False

    def mount(self) -> bool:
        if self._mounted:
            return False
        self._mounted = True
        previous = self.status
        self.status = ViewStatus.LOADING
        try:
            self.statistics = self.client.get_statistics()
        except ResourceError as exc:
            logger.warning("Error fetching statistics: %s", exc)
            self.last_error = exc
            self.status = previous
            return True
        self.last_error = None
        self.status = ViewStatus.LOADED
        return True

    def remount(self) -> bool:
        self._mounted = False
        return self.mount()


class TimeSeriesController:
    """Line-chart series keyed by the day/month/year filter."""

    view_name = "line-chart"

    def __init__(self, client: ResourceClient, filter: TimeFilter | str = TimeFilter.DAY):
        self.client = client
        self.filter = TimeFilter.parse(filter)
        self.points: List[TimeSeriesPoint] = []
        self.status = ViewStatus.IDLE
        self.last_error: Optional[ResourceError] = None
        self._settled_status = ViewStatus.IDLE
        self._sequencer = RequestSequencer()
        self._lock = threading.Lock()

    def begin_load(self) -> FetchIntent:
        with self._lock:
            token = self._sequencer.issue()
            self.status = ViewStatus.LOADING
            return FetchIntent(view=self.view_name, token=token, params={"filter": self.filter})

    def execute(self, intent: FetchIntent) -> List[TimeSeriesPoint]:
        return self.client.get_line_chart(intent.params["filter"])

    def apply_result(self, intent: FetchIntent, points: List[TimeSeriesPoint]) -> bool:
        with self._lock:
            if not self._sequencer.is_current(intent.token):
                logger.debug("Discarding stale line chart #%s", intent.token)
                return False
            self.points = list(points)
            self.status = ViewStatus.LOADED if self.points else ViewStatus.EMPTY
            self.last_error = None
            self._settled_status = self.status
            return True

    def apply_error(self, intent: FetchIntent, exc: Exception) -> bool:
        if not isinstance(exc, ResourceError):
            raise exc
        with self._lock:
            if not self._sequencer.is_current(intent.token):
                logger.debug("Discarding stale line chart failure #%s: %s", intent.token, exc)
                return False
            logger.warning("Error fetching line chart data: %s", exc)
            self.last_error = exc
            self.status = self._settled_status
            return True

    def load(self) -> None:
        intent = self.begin_load()
        try:
            points = self.execute(intent)
        except ResourceError as exc:
            self.apply_error(intent, exc)
            return
        self.apply_result(intent, points)

    def dispatch(self, worker: FetchWorker):
        return worker.submit(self.begin_load(), self.execute, self.apply_result, self.apply_error)

    def set_filter(self, value: TimeFilter | str) -> bool:
        new_filter = TimeFilter.parse(value)
        if new_filter == self.filter:
            return False
        self.filter = new_filter
        self.load()
        return True
