"""Thread pool used to fetch feeds concurrently within one poll cycle."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from threading import Lock


class ThreadPoolManager:
    """Lazily create and own the shared fetch executor."""

    def __init__(self, workers: int = 4, thread_name_prefix: str = "feed-fetch") -> None:
        self.workers = workers
        self.thread_name_prefix = thread_name_prefix
        self._executor: ThreadPoolExecutor | None = None
        self._lock = Lock()

    def get(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.workers, thread_name_prefix=self.thread_name_prefix
                )
            return self._executor

    def shutdown(self, wait: bool = False) -> None:
        with self._lock:
            if self._executor is not None:
                self._executor.shutdown(wait=wait)
                self._executor = None


__all__ = ["ThreadPoolManager"]
