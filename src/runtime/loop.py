"""Runtime orchestration for the session clock, UI server, and alarm."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from app_config import AppConfig
from alarm import AlarmService
from pomodoro import SessionClock
from server import UIServer

from .commands import CommandDispatcher
from .ticks import TickDependencies, TickProcessor
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfig
    clock: SessionClock
    alarm: Optional[AlarmService]
    ui_server: Optional[UIServer]


class RuntimeEngine:
    """Wires clock listeners to the UI and alarm, then idles until stopped."""
    def __init__(self, bootstrap: RuntimeBootstrap, *, poll_interval_seconds: float = 0.25):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._poll_interval_seconds = poll_interval_seconds
        self._stop_requested = threading.Event()

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._dispatcher = CommandDispatcher(
            bootstrap.clock,
            logger=logging.getLogger("commands"),
        )
        self._tick_processor = TickProcessor(
            TickDependencies(
                clock=bootstrap.clock,
                alarm=bootstrap.alarm,
                logger=self._logger,
                ui=self._ui,
            )
        )
        self._tick_processor.attach()
        if bootstrap.ui_server is not None:
            bootstrap.ui_server.set_command_handler(self._dispatcher.handle_message)

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    def request_stop(self) -> None:
        self._stop_requested.set()

    def run(self) -> int:
        clock = self._bootstrap.clock
        self._tick_processor.handle_tick(clock.get_state())

        try:
            if self._bootstrap.app_config.timer.auto_start:
                self._logger.info("Auto-starting work session")
                clock.start()

            self._logger.info("Ready. Press Ctrl+C to stop.")
            while not self._stop_requested.wait(self._poll_interval_seconds):
                server = self._bootstrap.ui_server
                if server is not None and not server.is_running:
                    self._logger.error("UI server stopped unexpectedly")
                    return 1
            return 0

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        finally:
            self._shutdown()

    def _shutdown(self) -> None:
        self._bootstrap.clock.pause()
        if self._bootstrap.alarm is not None:
            self._bootstrap.alarm.shutdown()
        if self._bootstrap.ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                self._bootstrap.ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
