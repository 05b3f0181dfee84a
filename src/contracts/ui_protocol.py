"""Web UI websocket event and command constants."""

from __future__ import annotations

# Websocket event types
EVENT_HELLO = "hello"
EVENT_CLOCK = "clock"
EVENT_SESSION_COMPLETED = "session_completed"
EVENT_COMMAND_RESULT = "command_result"
EVENT_ERROR = "error"

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_CLOCK,
        EVENT_SESSION_COMPLETED,
        EVENT_ERROR,
    }
)

# Replayed to new clients in this order; the clock event last so it wins.
STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_SESSION_COMPLETED,
    EVENT_ERROR,
    EVENT_CLOCK,
)

# Incoming client message fields
FIELD_COMMAND = "command"
FIELD_SESSION_TYPE = "session_type"
FIELD_MINUTES = "minutes"
