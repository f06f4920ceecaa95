"""Tick source and tick handlers that persist progress and publish timer updates."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from queue import Queue
from typing import Any, Callable, Optional

from focus import ActiveTaskBinding, TimerTick
from focus.constants import (
    ACTION_COMPLETED,
    ACTION_TICK,
    REASON_COMPLETED,
    REASON_TICK,
)

from .messages import completion_message
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class TickEvent:
    """One-second tick posted by a `RepeatingTicker` of the given generation."""
    generation: int
    occurred_at: datetime


class RepeatingTicker:
    """Background thread that posts a `TickEvent` every `interval_seconds`.

    A ticker is created on every transition into running and stopped on every
    transition out of it. Its generation number lets the runtime drop ticks that
    were already queued when the ticker was replaced.
    """

    def __init__(
        self,
        queue: Queue[Any],
        *,
        generation: int,
        interval_seconds: float = 1.0,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be > 0, got: {interval_seconds}")
        self._queue = queue
        self._generation = generation
        self._interval_seconds = interval_seconds
        self._logger = logger or logging.getLogger("runtime.ticker")
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name=f"ticker-{self._generation}",
        )
        self._thread.start()
        self._logger.debug("Ticker %d started", self._generation)

    def stop(self, timeout_seconds: float = 2.0) -> None:
        self._stop_event.set()
        thread = self._thread
        self._thread = None
        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout=timeout_seconds)
        if thread.is_alive():
            self._logger.warning(
                "Ticker %d did not stop within %.1fs",
                self._generation,
                timeout_seconds,
            )
        else:
            self._logger.debug("Ticker %d stopped", self._generation)

    def _run(self) -> None:
        deadline = self._clock() + self._interval_seconds
        while not self._stop_event.wait(self._wait_seconds(deadline)):
            self._queue.put(
                TickEvent(generation=self._generation, occurred_at=datetime.now())
            )
            deadline = self._next_deadline(deadline)

    def _wait_seconds(self, deadline: float) -> float:
        return max(0.0, deadline - self._clock())

    def _next_deadline(self, deadline: float) -> float:
        """Advance on the fixed schedule; after a stall, restart from now."""
        now = self._clock()
        deadline += self._interval_seconds
        if deadline < now:
            return now + self._interval_seconds
        return deadline


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for processing timer tick events."""
    binding: ActiveTaskBinding
    logger: logging.Logger
    ui: RuntimeUIPublisher
    publish_tasks: Callable[[], None]
    publish_idle_state: Callable[[], None]


class TickProcessor:
    """Advances the engine, persists the bound task, and publishes the result."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def handle_tick(self) -> Optional[TimerTick]:
        deps = self._dependencies
        tick = deps.binding.engine.tick()
        if tick is None:
            return None

        # Persisted in the same step as the decrement.
        deps.binding.on_tick(tick)
        snapshot = deps.binding.snapshot()

        if tick.completed:
            message = completion_message(tick.alert_kind)
            deps.logger.info(message)
            deps.ui.publish_timer_update(
                snapshot,
                action=ACTION_COMPLETED,
                accepted=True,
                reason=REASON_COMPLETED,
                message=message,
            )
            deps.publish_tasks()
            deps.publish_idle_state()
            return tick

        deps.ui.publish_timer_update(
            snapshot,
            action=ACTION_TICK,
            accepted=True,
            reason=REASON_TICK,
        )
        return tick
