import threading
from collections.abc import Generator
from contextlib import contextmanager

from analyzer.browser.exceptions import BrowserCapacityError
from analyzer.logging.logger import Log


class BrowserSlots:
    """Bounded admission control for concurrently running browsers."""

    def __init__(self, max_concurrent: int, queue_timeout_seconds: float) -> None:
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self._semaphore = threading.BoundedSemaphore(max_concurrent)
        self._queue_timeout_seconds = queue_timeout_seconds
        self._max_concurrent = max_concurrent
        self._lock = threading.Lock()
        self._in_use = 0

    @property
    def in_use(self) -> int:
        return self._in_use

    @contextmanager
    def acquire(self) -> Generator[None, None, None]:
        """Hold one slot for the duration of the block.

        Raises:
            BrowserCapacityError: if no slot frees up within the queue timeout.
        """
        if not self._semaphore.acquire(timeout=self._queue_timeout_seconds):
            Log.warning(
                f"All {self._max_concurrent} browser slots busy for "
                f"{self._queue_timeout_seconds}s, rejecting analysis"
            )
            raise BrowserCapacityError(
                f"No browser slot free after {self._queue_timeout_seconds}s"
            )
        with self._lock:
            self._in_use += 1
        try:
            yield
        finally:
            with self._lock:
                self._in_use -= 1
            self._semaphore.release()
