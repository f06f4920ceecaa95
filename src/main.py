import logging
import os
import signal
import sys
from typing import Callable, Optional

from app_config import (
    AppConfigurationError,
    load_app_config,
    load_secret_config,
    resolve_config_path,
)
from alerts import AlertConfig, AlertConfigurationError, build_alert_service
from integrations import build_remote_importer
from runtime import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from server import ServerConfigurationError, UIServer, UIServerConfig
from tasks import JsonTaskStore


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("focus_timer")


def resolve_log_level(raw: Optional[str]) -> int:
    """Map a `LOG_LEVEL` value such as `debug` to a logging level, default INFO."""
    if not raw:
        return logging.INFO
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_signal_handlers(request_shutdown: Callable[[], None]) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        del frame
        signal_name = signal.Signals(signum).name
        print(f"\n{signal_name} received, stopping...\n")
        request_shutdown()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def write_output(text: str) -> None:
    print(text, flush=True)


def main() -> int:
    """Run the focus timer until `quit` or a termination signal."""
    logger = setup_logging(level=resolve_log_level(os.getenv("LOG_LEVEL")))

    # Load typed app configuration and secrets.
    try:
        config_path = resolve_config_path()
        app_config = load_app_config()
        secret_config = load_secret_config()
        if app_config.source_file:
            logger.info("Loaded runtime config: %s", config_path)
        else:
            logger.info("No config file at %s; using defaults", config_path)
    except AppConfigurationError as error:
        logger.error(f"App configuration error: {error}")
        return 1

    try:
        alert_config = AlertConfig.from_settings(app_config.alerts)
    except AlertConfigurationError as error:
        logger.error(f"Alert configuration error: {error}")
        return 1

    store = JsonTaskStore(
        app_config.tasks.store_file,
        logger=logging.getLogger("tasks"),
    )

    # Optional UI server for static page + websocket updates
    ui_server: Optional[UIServer] = None
    ui_server_config: Optional[UIServerConfig] = None
    try:
        ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
    except ServerConfigurationError as error:
        logger.error(f"UI server configuration error: {error}")
        logger.warning("Continuing without UI server.")

    if ui_server_config and ui_server_config.enabled:
        try:
            ui_server = UIServer(
                config=ui_server_config,
                logger=logging.getLogger("ui_server"),
            )
            logger.info("Starting UI server...")
            ui_server.start(timeout_seconds=5.0)
            logger.info(
                "UI server ready at http://%s:%d",
                ui_server.host,
                ui_server.port,
            )
        except Exception as error:
            logger.error(f"UI server startup failed: {error}")
            logger.warning("Continuing without UI server.")
            ui_server = None

    alert_service = build_alert_service(
        alert_config,
        publisher=ui_server,
        logger=logging.getLogger("alerts"),
    )
    importer = build_remote_importer(
        app_config.google_tasks,
        token_file=secret_config.google_tasks_token_file,
        store=store,
        logger=logging.getLogger("integrations"),
    )

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            timer_settings=app_config.timer,
            store=store,
            alert_sink=alert_service,
            importer=importer,
            ui_server=ui_server,
            input_stream=sys.stdin,
            hooks=RuntimeHooks(
                setup_signal_handlers=setup_signal_handlers,
                write_output=write_output,
            ),
        )
    )
    return engine.run()


if __name__ == "__main__":
    sys.exit(main())
