"""Configuration model for completion alarm playback."""

from dataclasses import dataclass
from typing import Optional


class AlarmConfigurationError(Exception):
    """Raised when alarm configuration is invalid."""


@dataclass(frozen=True)
class AlarmConfig:
    """Tone shape, repeat counts, and optional output-device selection."""
    output_device_index: Optional[int] = None
    volume: float = 0.3
    work_repeats: int = 3
    break_repeats: int = 1
    frequency_hz: float = 880.0
    tone_seconds: float = 0.6
    gap_seconds: float = 0.25
    sample_rate_hz: int = 44100

    def __post_init__(self) -> None:
        if not 0.0 <= self.volume <= 1.0:
            raise AlarmConfigurationError(f"Alarm volume must be in [0, 1], got: {self.volume}")
        if self.work_repeats < 0 or self.break_repeats < 0:
            raise AlarmConfigurationError("Alarm repeats must not be negative")
        if self.tone_seconds <= 0 or self.sample_rate_hz <= 0:
            raise AlarmConfigurationError("Alarm tone length and sample rate must be positive")

    @classmethod
    def from_settings(cls, settings) -> "AlarmConfig":
        return cls(
            output_device_index=settings.output_device,
            volume=settings.volume,
            work_repeats=settings.work_repeats,
            break_repeats=settings.break_repeats,
        )
