"""Sounddevice playback for pre-rendered alarm chimes."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import sounddevice as sd

from .errors import AlarmError


class SoundDeviceAudioOutput:
    """Plays a whole mono chime buffer on one output device.

    The chime is short and fully rendered before playback, so it is handed to
    `sd.play` in one piece instead of being streamed block by block.
    """

    def __init__(
        self,
        output_device_index: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._output_device_index = output_device_index
        self._logger = logger or logging.getLogger("alarm.output")

    def play(self, wav: np.ndarray, sample_rate_hz: int, blocking: bool = True) -> None:
        if wav.ndim != 1 or len(wav) == 0:
            raise AlarmError(f"Chime must be a non-empty mono buffer, got shape {wav.shape}")

        self._logger.debug(
            "Playing chime: samples=%d rate=%dHz device=%s",
            len(wav),
            sample_rate_hz,
            self._output_device_index,
        )
        try:
            sd.play(wav, samplerate=sample_rate_hz, device=self._output_device_index)
            if blocking:
                sd.wait()
        except Exception as error:
            raise AlarmError(f"Alarm playback failed: {error}") from error
