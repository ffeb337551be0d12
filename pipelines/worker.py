from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Dict

from models import Search


logger = logging.getLogger(__name__)


class SearchWorker:
    """Single background worker for search runs; callers keep only the search id.

    Submitting a search that is still running returns the in-flight future
    instead of starting a second run for the same id.
    """

    def __init__(self, run_search: Callable[[Search], str], max_workers: int = 1) -> None:
        self._run_search = run_search
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="search-worker")
        self._lock = threading.Lock()
        self._in_flight: Dict[int, Future] = {}

    def submit(self, search: Search) -> Future:
        with self._lock:
            running = self._in_flight.get(search.id)
            if running is not None and not running.done():
                logger.info(
                    "Search %s already running", search.id,
                    extra={"step": "search_worker", "status": "in_flight", "search_id": search.id},
                )
                return running
            future = self._executor.submit(self._run, search)
            self._in_flight[search.id] = future
            return future

    def _run(self, search: Search) -> str:
        try:
            return self._run_search(search)
        except Exception:
            logger.exception(
                "Background search run crashed",
                extra={"step": "search_worker", "status": "error", "search_id": search.id},
            )
            raise
        finally:
            with self._lock:
                self._in_flight.pop(search.id, None)

    def is_running(self, search_id: int) -> bool:
        with self._lock:
            return search_id in self._in_flight

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
