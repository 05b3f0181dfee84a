from .constants import (
    DEFAULT_BREAK_SECONDS,
    DEFAULT_WORK_SECONDS,
    SESSION_BREAK,
    SESSION_TYPES,
    SESSION_WORK,
)
from .formatting import format_time, format_total_time, get_session_label
from .service import ClockState, Scheduler, SessionClock, SessionType, TickHandle
from .ticker import IntervalTicker, thread_scheduler

__all__ = [
    "DEFAULT_BREAK_SECONDS",
    "DEFAULT_WORK_SECONDS",
    "SESSION_BREAK",
    "SESSION_TYPES",
    "SESSION_WORK",
    "ClockState",
    "IntervalTicker",
    "Scheduler",
    "SessionClock",
    "SessionType",
    "TickHandle",
    "format_time",
    "format_total_time",
    "get_session_label",
    "thread_scheduler",
]
