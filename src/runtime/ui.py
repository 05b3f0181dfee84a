from __future__ import annotations

from typing import Any, Optional, Protocol

from contracts.ui_protocol import EVENT_CLOCK, EVENT_SESSION_COMPLETED
from pomodoro import ClockState, format_time, format_total_time, get_session_label
from pomodoro.constants import APP_TITLE


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


def clock_payload(
    state: ClockState,
    *,
    work_minutes: int,
    break_minutes: int,
) -> dict[str, Any]:
    """Flatten a clock snapshot plus its display strings into an event payload."""
    time_text = format_time(state.time_remaining)
    return {
        "session_type": state.session_type,
        "time_remaining": state.time_remaining,
        "is_running": state.is_running,
        "completed_pomodoros": state.completed_pomodoros,
        "total_time_spent": state.total_time_spent,
        "completed_session_type": state.completed_session_type,
        "time_text": time_text,
        "label": get_session_label(state.session_type),
        "total_text": format_total_time(state.total_time_spent),
        "title": f"{time_text} - {APP_TITLE}",
        "work_minutes": work_minutes,
        "break_minutes": break_minutes,
    }


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_clock_update(
        self,
        state: ClockState,
        *,
        work_minutes: int,
        break_minutes: int,
    ) -> None:
        self.publish(
            EVENT_CLOCK,
            **clock_payload(
                state,
                work_minutes=work_minutes,
                break_minutes=break_minutes,
            ),
        )

    def publish_session_completed(self, state: ClockState) -> None:
        completed = state.completed_session_type
        self.publish(
            EVENT_SESSION_COMPLETED,
            completed_session_type=completed,
            label=get_session_label(completed) if completed else None,
            next_session_type=state.session_type,
            completed_pomodoros=state.completed_pomodoros,
        )
