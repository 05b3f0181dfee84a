"""Alarm service that chimes off the clock thread when a session completes."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Optional, Protocol

import numpy as np

from pomodoro.constants import SESSION_WORK

from .config import AlarmConfig
from .errors import AlarmError
from .tone import synthesize_chime


class AudioOutputLike(Protocol):
    def play(self, wav: np.ndarray, sample_rate_hz: int, blocking: bool = True) -> None:
        ...


class AlarmService:
    """Plays the completion chime: several beeps after work, fewer after a break."""
    def __init__(
        self,
        config: AlarmConfig,
        output: AudioOutputLike,
        logger: Optional[logging.Logger] = None,
        executor: Optional[concurrent.futures.Executor] = None,
    ):
        self._config = config
        self._output = output
        self._logger = logger or logging.getLogger("alarm")
        self._executor = executor or concurrent.futures.ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="alarm",
        )

    def repeats_for(self, session_type: str) -> int:
        if session_type == SESSION_WORK:
            return self._config.work_repeats
        return self._config.break_repeats

    def play_for(self, session_type: str) -> Optional[concurrent.futures.Future[None]]:
        """Queue the chime for a finished session; returns None when it is silent."""
        repeats = self.repeats_for(session_type)
        if repeats <= 0:
            return None
        self._logger.debug("Queueing alarm: session=%s repeats=%d", session_type, repeats)
        return self._executor.submit(self._play, repeats)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _play(self, repeats: int) -> None:
        wav = synthesize_chime(self._config, repeats)
        try:
            self._output.play(wav, self._config.sample_rate_hz)
        except AlarmError as error:
            self._logger.error("Alarm playback failed: %s", error)
