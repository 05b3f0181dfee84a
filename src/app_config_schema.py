"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettings:
    """Session lengths and tick cadence loaded from `[timer]`."""
    work_minutes: int = 25
    break_minutes: int = 5
    tick_interval_seconds: float = 1.0
    auto_start: bool = False


@dataclass(frozen=True)
class AlarmSettings:
    """Completion alarm playback settings from `[alarm]`."""
    enabled: bool = False
    output_device: Optional[int] = None
    volume: float = 0.3
    work_repeats: int = 3
    break_repeats: int = 1


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    timer: TimerSettings
    alarm: AlarmSettings
    ui_server: UIServerSettings
    source_file: str
