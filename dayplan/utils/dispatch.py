"""
Dispatchers standing in for the UI/main execution context.

Platform callbacks arrive on whatever thread EventKit picks. Anything the
user interface observes is handed to a dispatcher instead of being run
on that thread directly.
"""

import logging
import queue
import time
from typing import Any, Callable, Optional


class InlineDispatcher:
    """Runs callables immediately on the calling thread."""

    def dispatch(self, fn: Callable[..., Any], *args: Any) -> None:
        fn(*args)


class QueueDispatcher:
    """
    Queues callables for the thread that owns the dispatcher.

    The owner (the CLI main thread or the curses loop) calls ``drain`` or
    ``run_until`` to execute whatever other threads have posted.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._queue: "queue.Queue" = queue.Queue()

    def dispatch(self, fn: Callable[..., Any], *args: Any) -> None:
        self._queue.put((fn, args))

    def pending(self) -> int:
        return self._queue.qsize()

    def drain(self, timeout: float = 0.0) -> int:
        """
        Run queued callables until the queue is empty.

        Args:
            timeout: How long to wait for the first item when the queue is empty

        Returns:
            Number of callables executed
        """
        executed = 0
        block = timeout > 0
        while True:
            try:
                if block:
                    fn, args = self._queue.get(timeout=timeout)
                    block = False
                else:
                    fn, args = self._queue.get_nowait()
            except queue.Empty:
                return executed
            fn(*args)
            executed += 1

    def run_until(self, predicate: Callable[[], bool], timeout: Optional[float] = None,
                  idle: Optional[Callable[[float], Any]] = None,
                  interval: float = 0.1) -> bool:
        """
        Drain the queue until ``predicate()`` holds.

        Args:
            predicate: Condition to wait for, checked after every drain
            timeout: Give up after this many seconds (None waits forever)
            idle: Called with ``interval`` between drains, e.g. to pump a run loop
            interval: Polling interval in seconds

        Returns:
            True if the predicate became true, False on timeout
        """
        deadline = time.monotonic() + timeout if timeout is not None else None
        while True:
            self.drain()
            if predicate():
                return True
            if deadline is not None and time.monotonic() >= deadline:
                self.logger.debug("run_until timed out after %.1fs", timeout)
                return False
            if idle is not None:
                idle(interval)
                self.drain()
            else:
                self.drain(timeout=interval)
