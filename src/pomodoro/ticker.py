"""Background-thread periodic trigger used to drive the session clock."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional


class IntervalTicker:
    """Calls `callback` every `interval_seconds` on a daemon thread until cancelled."""

    def __init__(
        self,
        interval_seconds: float,
        callback: Callable[[], None],
        *,
        logger: Optional[logging.Logger] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")

        self._interval_seconds = float(interval_seconds)
        self._callback = callback
        self._logger = logger or logging.getLogger("pomodoro.ticker")
        self._cancelled = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="session-ticker",
        )

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    def start(self) -> "IntervalTicker":
        self._thread.start()
        return self

    def cancel(self) -> None:
        # Never joins: cancel() is routinely called from inside the callback.
        self._cancelled.set()

    def _run(self) -> None:
        while not self._cancelled.wait(self._interval_seconds):
            try:
                self._callback()
            except Exception as error:
                self._logger.error("Tick callback failed: %s", error, exc_info=True)


def thread_scheduler(
    interval_seconds: float,
    callback: Callable[[], None],
) -> IntervalTicker:
    """Scheduler arming one `IntervalTicker` per call."""
    return IntervalTicker(interval_seconds, callback).start()
