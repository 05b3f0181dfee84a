"""Display helpers for countdowns, accumulated focus time, and session labels."""

from __future__ import annotations

from .constants import SESSION_LABELS


def format_time(seconds: int) -> str:
    minutes, remainder = divmod(int(seconds), 60)
    return f"{minutes:02d}:{remainder:02d}"


def format_total_time(seconds: int) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    minutes = remainder // 60
    if hours > 0:
        return f"{hours}hours {minutes} mins"
    return f"{minutes} mins"


def get_session_label(session_type: str) -> str:
    try:
        return SESSION_LABELS[session_type]
    except KeyError as error:
        raise ValueError(f"Unknown session type: {session_type!r}") from error
