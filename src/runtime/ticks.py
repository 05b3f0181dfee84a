"""Clock listeners that publish UI updates and ring the completion alarm."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from pomodoro import ClockState, SessionClock
from pomodoro.constants import SESSION_BREAK, SESSION_WORK

from .ui import RuntimeUIPublisher


class AlarmLike(Protocol):
    def play_for(self, session_type: str) -> object:
        ...


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for processing clock tick and completion events."""
    clock: SessionClock
    alarm: Optional[AlarmLike]
    logger: logging.Logger
    ui: RuntimeUIPublisher


class TickProcessor:
    """Handles clock side effects such as UI updates and completion alarms."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def attach(self) -> None:
        clock = self._dependencies.clock
        clock.on_tick(self.handle_tick)
        clock.on_complete(self.handle_complete)

    def handle_tick(self, state: ClockState) -> None:
        deps = self._dependencies
        deps.ui.publish_clock_update(
            state,
            work_minutes=deps.clock.get_custom_time(SESSION_WORK),
            break_minutes=deps.clock.get_custom_time(SESSION_BREAK),
        )

    def handle_complete(self) -> None:
        deps = self._dependencies
        state = deps.clock.get_state()
        completed = state.completed_session_type
        if completed is None:
            return

        deps.logger.info(
            "Completed %s session; next up: %s",
            completed,
            state.session_type,
        )
        deps.ui.publish_session_completed(state)
        if deps.alarm is not None:
            deps.alarm.play_for(completed)
