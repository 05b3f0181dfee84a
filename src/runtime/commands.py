"""Dispatcher that validates UI commands and applies them to the session clock."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

from contracts.ui_protocol import FIELD_COMMAND, FIELD_MINUTES, FIELD_SESSION_TYPE
from pomodoro import ClockState, SessionClock
from pomodoro.constants import (
    COMMAND_PAUSE,
    COMMAND_RESET,
    COMMAND_SET_CUSTOM_TIME,
    COMMAND_START,
    COMMAND_SWITCH_SESSION,
    COMMAND_SYNC,
    COMMAND_TOGGLE,
    MINUTE_BOUNDS,
    REASON_ALREADY_RUNNING,
    REASON_INVALID_MINUTES,
    REASON_INVALID_SESSION,
    REASON_NOT_RUNNING,
    REASON_OK,
    REASON_OUT_OF_RANGE,
    REASON_UNSUPPORTED_COMMAND,
    SESSION_TYPES,
)


@dataclass(frozen=True)
class CommandResult:
    """Result envelope returned to the UI after applying a command."""
    command: str
    accepted: bool
    reason: str
    state: ClockState
    configured_minutes: Optional[int] = None

    def to_payload(self) -> dict[str, Any]:
        payload = asdict(self)
        if self.configured_minutes is None:
            del payload["configured_minutes"]
        return payload


class CommandDispatcher:
    """Routes UI commands to clock operations.

    Minutes sent with `set_custom_time` are bounded here (work 1-60, break 1-30);
    the clock itself accepts any value. Rejected values echo back the currently
    configured minutes so the client can restore its input field.
    """

    def __init__(self, clock: SessionClock, *, logger: Optional[logging.Logger] = None):
        self._clock = clock
        self._logger = logger or logging.getLogger("commands")

    def handle_message(self, message: Mapping[str, Any]) -> dict[str, Any]:
        return self.dispatch(message).to_payload()

    def dispatch(self, message: Mapping[str, Any]) -> CommandResult:
        command = message.get(FIELD_COMMAND)
        if not isinstance(command, str):
            command = ""

        if command == COMMAND_TOGGLE:
            if self._clock.get_state().is_running:
                self._clock.pause()
            else:
                self._clock.start()
            return self._result(command, True, REASON_OK)

        if command == COMMAND_START:
            if self._clock.get_state().is_running:
                return self._result(command, False, REASON_ALREADY_RUNNING)
            self._clock.start()
            return self._result(command, True, REASON_OK)

        if command == COMMAND_PAUSE:
            if not self._clock.get_state().is_running:
                return self._result(command, False, REASON_NOT_RUNNING)
            self._clock.pause()
            return self._result(command, True, REASON_OK)

        if command == COMMAND_RESET:
            self._clock.reset()
            return self._result(command, True, REASON_OK)

        if command == COMMAND_SWITCH_SESSION:
            session_type = message.get(FIELD_SESSION_TYPE)
            if session_type not in SESSION_TYPES:
                return self._result(command, False, REASON_INVALID_SESSION)
            self._clock.switch_session(session_type)
            return self._result(command, True, REASON_OK)

        if command == COMMAND_SET_CUSTOM_TIME:
            return self._set_custom_time(command, message)

        if command == COMMAND_SYNC:
            return self._result(command, True, REASON_OK)

        self._logger.warning("Unsupported UI command: %r", command)
        return self._result(command, False, REASON_UNSUPPORTED_COMMAND)

    def _set_custom_time(self, command: str, message: Mapping[str, Any]) -> CommandResult:
        session_type = message.get(FIELD_SESSION_TYPE)
        if session_type not in SESSION_TYPES:
            return self._result(command, False, REASON_INVALID_SESSION)

        current = self._clock.get_custom_time(session_type)
        minutes = _parse_minutes(message.get(FIELD_MINUTES))
        if minutes is None:
            return self._result(
                command,
                False,
                REASON_INVALID_MINUTES,
                configured_minutes=current,
            )

        low, high = MINUTE_BOUNDS[session_type]
        if not low <= minutes <= high:
            self._logger.info(
                "Rejected %s minutes for %s session (allowed %d-%d)",
                minutes,
                session_type,
                low,
                high,
            )
            return self._result(
                command,
                False,
                REASON_OUT_OF_RANGE,
                configured_minutes=current,
            )

        self._clock.set_custom_time(session_type, minutes)
        return self._result(command, True, REASON_OK, configured_minutes=minutes)

    def _result(
        self,
        command: str,
        accepted: bool,
        reason: str,
        *,
        configured_minutes: Optional[int] = None,
    ) -> CommandResult:
        return CommandResult(
            command=command,
            accepted=accepted,
            reason=reason,
            state=self._clock.get_state(),
            configured_minutes=configured_minutes,
        )


_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def _parse_minutes(raw: Any) -> Optional[int]:
    # Same truncation as a browser's parseInt: "30.5" and 30.5 both give 30.
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    if isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        return int(match.group(1)) if match else None
    return None
