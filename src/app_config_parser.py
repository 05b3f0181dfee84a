"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AlarmSettings,
    AppConfig,
    AppConfigurationError,
    TimerSettings,
    UIServerSettings,
)
from pomodoro.constants import MINUTE_BOUNDS, SESSION_BREAK, SESSION_WORK


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    timer = _parse_timer_settings(_section(raw, "timer"))
    alarm = _parse_alarm_settings(_section(raw, "alarm"))
    ui_server = _parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir)

    return AppConfig(
        timer=timer,
        alarm=alarm,
        ui_server=ui_server,
        source_file=source_file,
    )


def _parse_timer_settings(section: Mapping[str, Any]) -> TimerSettings:
    tick_interval_seconds = _as_float(
        section.get("tick_interval_seconds", 1.0),
        "timer.tick_interval_seconds",
    )
    if tick_interval_seconds <= 0:
        raise AppConfigurationError("timer.tick_interval_seconds must be positive.")

    return TimerSettings(
        work_minutes=_as_minutes(
            section.get("work_minutes", 25),
            "timer.work_minutes",
            MINUTE_BOUNDS[SESSION_WORK],
        ),
        break_minutes=_as_minutes(
            section.get("break_minutes", 5),
            "timer.break_minutes",
            MINUTE_BOUNDS[SESSION_BREAK],
        ),
        tick_interval_seconds=tick_interval_seconds,
        auto_start=_as_bool(section.get("auto_start", False), "timer.auto_start"),
    )


def _parse_alarm_settings(section: Mapping[str, Any]) -> AlarmSettings:
    volume = _as_float(section.get("volume", 0.3), "alarm.volume")
    if not 0.0 <= volume <= 1.0:
        raise AppConfigurationError("alarm.volume must be in [0, 1].")

    work_repeats = _as_int(section.get("work_repeats", 3), "alarm.work_repeats")
    break_repeats = _as_int(section.get("break_repeats", 1), "alarm.break_repeats")
    if work_repeats < 0 or break_repeats < 0:
        raise AppConfigurationError("alarm repeats must not be negative.")

    return AlarmSettings(
        enabled=_as_bool(section.get("enabled", False), "alarm.enabled"),
        output_device=(
            _as_int(section.get("output_device"), "alarm.output_device")
            if "output_device" in section
            else None
        ),
        volume=volume,
        work_repeats=work_repeats,
        break_repeats=break_repeats,
    )


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(section.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", True), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file) if index_file else "",
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")


def _as_minutes(value: Any, field: str, bounds: tuple[int, int]) -> int:
    minutes = _as_int(value, field)
    low, high = bounds
    if not low <= minutes <= high:
        raise AppConfigurationError(f"{field} must be in [{low}, {high}], got: {minutes}.")
    return minutes


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
