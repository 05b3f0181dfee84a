import logging
import signal
import sys
from typing import Optional

from app_config import AppConfig, AppConfigurationError, load_app_config, resolve_config_path
from alarm import AlarmConfig, AlarmConfigurationError, AlarmService
from pomodoro import SessionClock, thread_scheduler
from runtime import RuntimeBootstrap, RuntimeEngine
from server import ServerConfigurationError, UIServer, UIServerConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pompano")


def setup_signal_handlers(engine: RuntimeEngine, logger: logging.Logger) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        del frame
        logger.info("Signal %s received, stopping.", signal.Signals(signum).name)
        engine.request_stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def build_clock(app_config: AppConfig) -> SessionClock:
    timer = app_config.timer
    return SessionClock(
        thread_scheduler,
        work_seconds=timer.work_minutes * 60,
        break_seconds=timer.break_minutes * 60,
        tick_interval_seconds=timer.tick_interval_seconds,
        logger=logging.getLogger("pomodoro"),
    )


def build_alarm(app_config: AppConfig, logger: logging.Logger) -> Optional[AlarmService]:
    if not app_config.alarm.enabled:
        return None

    try:
        alarm_config = AlarmConfig.from_settings(app_config.alarm)
        # Deferred: importing sounddevice requires PortAudio on the host.
        from alarm.output import SoundDeviceAudioOutput

        output = SoundDeviceAudioOutput(
            output_device_index=alarm_config.output_device_index,
            logger=logging.getLogger("alarm.output"),
        )
    except (AlarmConfigurationError, ImportError, OSError) as error:
        logger.error("Alarm initialization error: %s", error)
        logger.warning("Continuing without completion alarm.")
        return None

    logger.info("Completion alarm enabled")
    return AlarmService(alarm_config, output, logger=logging.getLogger("alarm"))


def build_ui_server(app_config: AppConfig, logger: logging.Logger) -> Optional[UIServer]:
    try:
        ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
    except ServerConfigurationError as error:
        logger.error("UI server configuration error: %s", error)
        logger.warning("Continuing without UI server.")
        return None

    if not ui_server_config.enabled:
        logger.info("UI server disabled via ui_server.enabled=false")
        return None

    ui_server = UIServer(config=ui_server_config, logger=logging.getLogger("ui_server"))
    try:
        logger.info("Starting UI server...")
        ui_server.start(timeout_seconds=5.0)
    except RuntimeError as error:
        logger.error("UI server startup failed: %s", error)
        logger.warning("Continuing without UI server.")
        return None

    logger.info("UI server ready at http://%s:%d", ui_server.host, ui_server.port)
    return ui_server


def main() -> int:
    logger = setup_logging()

    try:
        app_config = load_app_config(str(resolve_config_path()))
    except AppConfigurationError as error:
        logger.error("Configuration error: %s", error)
        return 1

    logger.info("Loaded configuration from %s", app_config.source_file)

    clock = build_clock(app_config)
    alarm = build_alarm(app_config, logger)
    ui_server = build_ui_server(app_config, logger)

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logger,
            app_config=app_config,
            clock=clock,
            alarm=alarm,
            ui_server=ui_server,
        )
    )
    setup_signal_handlers(engine, logger)
    return engine.run()


if __name__ == "__main__":
    sys.exit(main())
