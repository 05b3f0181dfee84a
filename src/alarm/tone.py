"""Synthesis of the alarm chime as mono float32 PCM."""

from __future__ import annotations

import numpy as np

from .config import AlarmConfig

_FADE_SECONDS = 0.02


def synthesize_chime(config: AlarmConfig, repeats: int) -> np.ndarray:
    """Build `repeats` sine beeps separated by silence; empty when repeats is 0."""
    if repeats <= 0:
        return np.zeros(0, dtype=np.float32)

    rate = config.sample_rate_hz
    t = np.arange(int(config.tone_seconds * rate), dtype=np.float32) / rate
    beep = np.sin(2.0 * np.pi * config.frequency_hz * t).astype(np.float32)

    fade = min(int(_FADE_SECONDS * rate), len(beep) // 2)
    if fade > 0:
        ramp = np.linspace(0.0, 1.0, fade, dtype=np.float32)
        beep[:fade] *= ramp
        beep[-fade:] *= ramp[::-1]
    beep *= np.float32(config.volume)

    gap = np.zeros(int(config.gap_seconds * rate), dtype=np.float32)
    parts: list[np.ndarray] = []
    for index in range(repeats):
        if index:
            parts.append(gap)
        parts.append(beep)
    return np.concatenate(parts)
