"""Session, duration, and command constants used by the session clock."""

from __future__ import annotations

SESSION_WORK = "work"
SESSION_BREAK = "break"

SESSION_TYPES: tuple[str, ...] = (SESSION_WORK, SESSION_BREAK)

DEFAULT_WORK_SECONDS = 25 * 60
DEFAULT_BREAK_SECONDS = 5 * 60

DEFAULT_TICK_INTERVAL_SECONDS = 1.0

SESSION_LABELS: dict[str, str] = {
    SESSION_WORK: "Focus Time",
    SESSION_BREAK: "Break Time",
}

# Bounds accepted from the UI before calling set_custom_time.
MINUTE_BOUNDS: dict[str, tuple[int, int]] = {
    SESSION_WORK: (1, 60),
    SESSION_BREAK: (1, 30),
}

APP_TITLE = "Pompano"

COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_TOGGLE = "toggle"
COMMAND_RESET = "reset"
COMMAND_SWITCH_SESSION = "switch_session"
COMMAND_SET_CUSTOM_TIME = "set_custom_time"
COMMAND_SYNC = "sync"

REASON_OK = "ok"
REASON_ALREADY_RUNNING = "already_running"
REASON_NOT_RUNNING = "not_running"
REASON_INVALID_SESSION = "invalid_session"
REASON_INVALID_MINUTES = "invalid_minutes"
REASON_OUT_OF_RANGE = "out_of_range"
REASON_UNSUPPORTED_COMMAND = "unsupported_command"
