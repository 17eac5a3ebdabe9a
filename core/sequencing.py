from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchIntent:
    """One fetch a view wants executed, tagged with its request token."""

    view: str
    token: int
    params: Dict[str, Any] = field(default_factory=dict)


class RequestSequencer:
    """Hands out monotonically increasing tokens; only the newest one is current."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest = 0

    def issue(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    @property
    def latest(self) -> int:
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest


class FetchWorker:
    """Runs fetch intents on a thread pool and posts results back.

    ``on_result`` / ``on_error`` are called from the worker thread; the
    controllers they belong to drop anything that is no longer current.
    """

    def __init__(self, max_workers: int = 2, executor: Optional[ThreadPoolExecutor] = None):
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="fetch")

    def submit(
        self,
        intent: FetchIntent,
        run: Callable[[FetchIntent], Any],
        on_result: Callable[[FetchIntent, Any], None],
        on_error: Callable[[FetchIntent, Exception], None],
    ) -> Future:
        def _task() -> None:
            try:
                result = run(intent)
            except Exception as exc:
                on_error(intent, exc)
                return
            on_result(intent, result)

        logger.debug("Dispatching %s fetch #%s %s", intent.view, intent.token, intent.params)
        return self._executor.submit(_task)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
