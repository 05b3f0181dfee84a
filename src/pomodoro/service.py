"""Thread-safe in-memory work/break session clock."""

from __future__ import annotations

import functools
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Protocol

from .constants import (
    DEFAULT_BREAK_SECONDS,
    DEFAULT_TICK_INTERVAL_SECONDS,
    DEFAULT_WORK_SECONDS,
    SESSION_BREAK,
    SESSION_WORK,
)

SessionType = Literal["work", "break"]

TickListener = Callable[["ClockState"], None]
CompleteListener = Callable[[], None]


@dataclass(frozen=True)
class ClockState:
    """Immutable clock snapshot handed to listeners and UI publishers."""
    session_type: SessionType
    time_remaining: int
    is_running: bool
    completed_pomodoros: int
    total_time_spent: int
    completed_session_type: Optional[SessionType] = None


class TickHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Periodic trigger: call `callback` every `interval_seconds` until cancelled."""
    def __call__(
        self,
        interval_seconds: float,
        callback: Callable[[], None],
    ) -> TickHandle:
        ...


class SessionClock:
    """Pomodoro state machine alternating work and break sessions.

    Time only advances when the scheduler calls back into the clock. Every
    mutation notifies tick listeners synchronously, and a finished session
    switches to the other session type and restarts on its own.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        work_seconds: int = DEFAULT_WORK_SECONDS,
        break_seconds: int = DEFAULT_BREAK_SECONDS,
        tick_interval_seconds: float = DEFAULT_TICK_INTERVAL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        if tick_interval_seconds <= 0:
            raise ValueError("tick_interval_seconds must be greater than zero")

        self._scheduler = scheduler
        self._tick_interval_seconds = float(tick_interval_seconds)
        self._logger = logger or logging.getLogger("pomodoro")
        # Re-entrant: listeners run under the lock and may call back in.
        self._lock = threading.RLock()

        self._durations: dict[str, int] = {
            SESSION_WORK: int(work_seconds),
            SESSION_BREAK: int(break_seconds),
        }
        self._session_type: SessionType = SESSION_WORK
        self._time_remaining = self._durations[SESSION_WORK]
        self._is_running = False
        self._completed_pomodoros = 0
        self._total_time_spent = 0
        self._completed_session_type: Optional[SessionType] = None

        self._handle: Optional[TickHandle] = None
        self._generation = 0
        self._tick_listeners: list[TickListener] = []
        self._complete_listeners: list[CompleteListener] = []

    def start(self) -> None:
        with self._lock:
            if self._is_running:
                return

            self._is_running = True
            self._generation += 1
            self._handle = self._scheduler(
                self._tick_interval_seconds,
                functools.partial(self._tick, self._generation),
            )
            self._logger.info(
                "Session started: type=%s remaining=%ss",
                self._session_type,
                self._time_remaining,
            )
            self._notify_tick()

    def pause(self) -> None:
        with self._lock:
            if not self._is_running:
                return

            self._is_running = False
            handle, self._handle = self._handle, None
            if handle is not None:
                handle.cancel()
            self._logger.info(
                "Session paused: type=%s remaining=%ss",
                self._session_type,
                self._time_remaining,
            )
            self._notify_tick()

    def reset(self) -> None:
        with self._lock:
            self.pause()
            self._time_remaining = self._durations[self._session_type]
            self._notify_tick()

    def switch_session(self, session_type: SessionType) -> None:
        with self._lock:
            self._require_known(session_type)

            self.pause()
            self._session_type = session_type
            self._time_remaining = self._durations[session_type]
            self._logger.info(
                "Switched session: type=%s duration=%ss",
                session_type,
                self._time_remaining,
            )
            self._notify_tick()

    def set_custom_time(self, session_type: SessionType, minutes: int) -> None:
        """Store a new duration; the active countdown only changes while paused."""
        with self._lock:
            self._require_known(session_type)

            self._durations[session_type] = int(minutes * 60)
            self._logger.info(
                "Custom time set: type=%s duration=%ss",
                session_type,
                self._durations[session_type],
            )
            if self._session_type == session_type and not self._is_running:
                self._time_remaining = self._durations[session_type]
                self._notify_tick()

    def get_custom_time(self, session_type: SessionType) -> int:
        with self._lock:
            self._require_known(session_type)
            return self._durations[session_type] // 60

    def get_state(self) -> ClockState:
        with self._lock:
            return self._state_locked()

    def on_tick(self, callback: TickListener) -> None:
        with self._lock:
            self._tick_listeners.append(callback)

    def on_complete(self, callback: CompleteListener) -> None:
        with self._lock:
            self._complete_listeners.append(callback)

    def _tick(self, generation: int) -> None:
        with self._lock:
            # A cancelled ticker may already be waiting on the lock.
            if not self._is_running or generation != self._generation:
                return

            self._time_remaining -= 1
            if self._session_type == SESSION_WORK:
                self._total_time_spent += 1

            if self._time_remaining <= 0:
                self._complete_session_locked()
            else:
                self._logger.debug(
                    "Tick: type=%s remaining=%ss",
                    self._session_type,
                    self._time_remaining,
                )
                self._notify_tick()

    def _complete_session_locked(self) -> None:
        finished = self._session_type
        self._completed_session_type = finished

        self.pause()

        if finished == SESSION_WORK:
            self._completed_pomodoros += 1
            self.switch_session(SESSION_BREAK)
        else:
            self.switch_session(SESSION_WORK)

        self._logger.info(
            "Session completed: type=%s completed_pomodoros=%s",
            finished,
            self._completed_pomodoros,
        )
        for callback in tuple(self._complete_listeners):
            callback()

        # start() only arms the scheduler, so auto-restart never recurses.
        self.start()

    def _require_known(self, session_type: str) -> None:
        if session_type not in self._durations:
            raise ValueError(f"Unknown session type: {session_type!r}")

    def _notify_tick(self) -> None:
        state = self._state_locked()
        for callback in tuple(self._tick_listeners):
            callback(state)

    def _state_locked(self) -> ClockState:
        return ClockState(
            session_type=self._session_type,
            time_remaining=self._time_remaining,
            is_running=self._is_running,
            completed_pomodoros=self._completed_pomodoros,
            total_time_spent=self._total_time_spent,
            completed_session_type=self._completed_session_type,
        )
