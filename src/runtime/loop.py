"""Runtime orchestration loop for console commands and timer ticks."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Optional, TextIO

from focus import ActiveTaskBinding, AlertSink, TimerEngine
from focus.constants import ACTION_SYNC, REASON_STARTUP
from server import UIServer
from tasks import TaskStore
from contracts.ui_protocol import (
    EVENT_ERROR,
    STATE_ERROR,
    STATE_IDLE,
    STATE_PAUSED,
    STATE_RUNNING,
)

from .commands import COMMAND_QUIT, CommandError, CommandEvent, parse_command
from .console import ConsoleCommandReader
from .contracts import TaskImporterLike, TimerSettingsLike
from .dispatch import CommandDispatcher
from .ticks import RepeatingTicker, TickDependencies, TickEvent, TickProcessor
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup and output."""
    setup_signal_handlers: Callable[[Callable[[], None]], None]
    write_output: Callable[[str], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    timer_settings: TimerSettingsLike
    store: TaskStore
    alert_sink: Optional[AlertSink]
    importer: Optional[TaskImporterLike]
    ui_server: Optional[UIServer]
    input_stream: Optional[TextIO]
    hooks: RuntimeHooks


@dataclass
class RuntimeResources:
    """Mutable runtime resources created for the event loop lifecycle."""
    event_queue: Queue[Any]
    ticker: Optional[RepeatingTicker] = None
    ticker_generation: int = 0
    command_reader: Optional[ConsoleCommandReader] = None


class RuntimeEngine:
    """Single-writer loop: every engine, binding, and store change happens here."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._shutdown_requested = threading.Event()

        settings = bootstrap.timer_settings
        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._timer = TimerEngine(
            cycle=settings.cycle,
            work_duration_seconds=settings.work_duration_seconds,
            break_duration_seconds=settings.break_duration_seconds,
            alert_sink=bootstrap.alert_sink,
            logger=logging.getLogger("focus.engine"),
        )
        self._binding = ActiveTaskBinding(
            self._timer,
            bootstrap.store,
            logger=logging.getLogger("focus.binding"),
        )
        self._dispatcher = CommandDispatcher(
            logger=self._logger,
            binding=self._binding,
            store=bootstrap.store,
            ui=self._ui,
            importer=bootstrap.importer,
        )
        self._tick_processor = TickProcessor(
            TickDependencies(
                binding=self._binding,
                logger=self._logger,
                ui=self._ui,
                publish_tasks=self._dispatcher.publish_tasks,
                publish_idle_state=self._publish_idle_state,
            )
        )
        self._resources = RuntimeResources(event_queue=Queue())

    @property
    def binding(self) -> ActiveTaskBinding:
        return self._binding

    @property
    def event_queue(self) -> Queue[Any]:
        return self._resources.event_queue

    def request_shutdown(self) -> None:
        self._shutdown_requested.set()

    def run(self) -> int:
        self._publish_startup_sync()

        try:
            self._bootstrap.hooks.setup_signal_handlers(self.request_shutdown)
            self._start_command_reader()

            self._logger.info(
                "Ready. Commands: start, pause, toggle, reset, select <n>, clear, "
                "add <title>, delete <n>, done <n>, list, import, status, quit"
            )
            self._publish_idle_state()

            while not self._shutdown_requested.is_set():
                event = self._poll_event()
                if event is None:
                    continue

                event_exit = self._handle_event(event)
                self._sync_ticker()
                if event_exit is not None:
                    return event_exit

            self._logger.info("Shutdown requested.")
            return 0

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            self._ui.publish(
                EVENT_ERROR,
                state=STATE_ERROR,
                message=f"Unexpected error: {error}",
            )
            return 1
        finally:
            self._shutdown()

    def _start_command_reader(self) -> None:
        stream = self._bootstrap.input_stream
        if stream is None:
            self._logger.info("Console input disabled")
            return
        reader = ConsoleCommandReader(
            self._resources.event_queue,
            stream,
            logger=logging.getLogger("runtime.console"),
        )
        reader.start()
        self._resources.command_reader = reader

    def _publish_idle_state(self) -> None:
        if self._timer.running:
            state = STATE_RUNNING
        elif self._binding.active_task_id is None:
            state = STATE_IDLE
        else:
            state = STATE_PAUSED
        self._ui.publish_state(state, message=self._dispatcher.status_message())

    def _publish_startup_sync(self) -> None:
        self._dispatcher.publish_snapshots(action=ACTION_SYNC, reason=REASON_STARTUP)

    def _poll_event(self) -> Optional[Any]:
        try:
            return self._resources.event_queue.get(timeout=0.25)
        except Empty:
            return None

    def _handle_event(self, event: Any) -> Optional[int]:
        if isinstance(event, TickEvent):
            ticker = self._resources.ticker
            if ticker is None or event.generation != ticker.generation:
                self._logger.debug("Dropping stale tick from ticker %d", event.generation)
                return None
            self._tick_processor.handle_tick()
            return None

        if isinstance(event, CommandEvent):
            return self._handle_command(event.line)

        self._logger.warning("Ignoring unknown event type: %s", type(event).__name__)
        return None

    def _handle_command(self, line: str) -> Optional[int]:
        try:
            command = parse_command(line)
        except CommandError as error:
            self._bootstrap.hooks.write_output(str(error))
            return None
        if command is None:
            return None

        if command.name == COMMAND_QUIT:
            self._logger.info("Quit requested from console.")
            return 0

        result = self._dispatcher.dispatch(command)
        self._bootstrap.hooks.write_output(result.message)
        self._publish_idle_state()
        return None

    def _sync_ticker(self) -> None:
        """Keep exactly one live ticker while the engine runs and none otherwise."""
        resources = self._resources
        running = self._timer.running
        if running and resources.ticker is None:
            resources.ticker_generation += 1
            resources.ticker = RepeatingTicker(
                resources.event_queue,
                generation=resources.ticker_generation,
                interval_seconds=self._bootstrap.timer_settings.tick_interval_seconds,
                logger=logging.getLogger("runtime.ticker"),
            )
            resources.ticker.start()
        elif not running and resources.ticker is not None:
            resources.ticker.stop()
            resources.ticker = None

    def _shutdown(self) -> None:
        ticker = self._resources.ticker
        if ticker is not None:
            ticker.stop()
            self._resources.ticker = None

        self._binding.sync_now()

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
