"""Tick-driven countdown state machine with optional work/intermission cycling."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Protocol

from .constants import (
    ALERT_BREAK_COMPLETE,
    ALERT_SESSION_COMPLETE,
    ALERT_WORK_COMPLETE,
    BREAK_DURATION_SECONDS,
    CYCLE_NONE,
    CYCLE_POLICIES,
    CYCLE_WORK_BREAK,
    PHASE_INTERMISSION,
    PHASE_WORK,
    WORK_DURATION_SECONDS,
)
from .errors import InvalidArgumentError

TimerPhase = Literal["work", "intermission"]
CyclePolicy = Literal["none", "work_break"]
AlertKind = Literal["work_complete", "break_complete", "session_complete"]


class AlertSink(Protocol):
    """Fire-and-forget receiver for phase completion alerts."""
    def fire(self, kind: AlertKind) -> None:
        ...


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable engine state exposed to the binding, runtime, and UI publishers."""
    phase: TimerPhase
    running: bool
    remaining_seconds: int
    duration_seconds: int
    progress: float
    cycle: CyclePolicy


@dataclass(frozen=True)
class TimerTick:
    """Result of one effective tick; `completed` marks a zero-crossing."""
    snapshot: TimerSnapshot
    completed: bool = False
    alert_kind: Optional[AlertKind] = None


class TimerEngine:
    """Countdown engine advanced by an external one-second tick source.

    The engine owns the countdown and never talks to a task store. Every
    zero-crossing fires the injected alert sink exactly once and then applies
    the cycle policy in the same step, so a negative value is never visible.
    """

    def __init__(
        self,
        *,
        cycle: CyclePolicy = CYCLE_WORK_BREAK,
        work_duration_seconds: int = WORK_DURATION_SECONDS,
        break_duration_seconds: int = BREAK_DURATION_SECONDS,
        alert_sink: Optional[AlertSink] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if cycle not in CYCLE_POLICIES:
            allowed = ", ".join(sorted(CYCLE_POLICIES))
            raise InvalidArgumentError(f"cycle must be one of: {allowed}")
        if work_duration_seconds <= 0:
            raise InvalidArgumentError("work_duration_seconds must be greater than zero")
        if break_duration_seconds <= 0:
            raise InvalidArgumentError("break_duration_seconds must be greater than zero")

        self._cycle: CyclePolicy = cycle
        self._work_duration_seconds = int(work_duration_seconds)
        self._break_duration_seconds = int(break_duration_seconds)
        self._alert_sink = alert_sink
        self._logger = logger or logging.getLogger("focus.engine")

        self._phase: TimerPhase = PHASE_WORK
        self._remaining_seconds = self._work_duration_seconds
        self._running = False

    @property
    def cycle(self) -> CyclePolicy:
        return self._cycle

    @property
    def work_duration_seconds(self) -> int:
        return self._work_duration_seconds

    @property
    def break_duration_seconds(self) -> int:
        return self._break_duration_seconds

    @property
    def phase(self) -> TimerPhase:
        return self._phase

    @property
    def running(self) -> bool:
        return self._running

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def phase_duration_seconds(self) -> int:
        if self._cycle == CYCLE_WORK_BREAK and self._phase == PHASE_INTERMISSION:
            return self._break_duration_seconds
        return self._work_duration_seconds

    @property
    def progress(self) -> float:
        duration = self.phase_duration_seconds
        elapsed = duration - self._remaining_seconds
        return max(0.0, min(100.0, (elapsed / duration) * 100))

    def set_alert_sink(self, alert_sink: Optional[AlertSink]) -> None:
        self._alert_sink = alert_sink

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self._phase,
            running=self._running,
            remaining_seconds=self._remaining_seconds,
            duration_seconds=self.phase_duration_seconds,
            progress=self.progress,
            cycle=self._cycle,
        )

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._logger.info(
            "Timer started: phase=%s remaining=%ss",
            self._phase,
            self._remaining_seconds,
        )

    def pause(self) -> None:
        if not self._running:
            return
        self._running = False
        self._logger.info(
            "Timer paused: phase=%s remaining=%ss",
            self._phase,
            self._remaining_seconds,
        )

    def toggle(self) -> None:
        if self._running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        self._running = False
        self._phase = PHASE_WORK
        self._remaining_seconds = self._work_duration_seconds
        self._logger.info("Timer reset: remaining=%ss", self._remaining_seconds)

    def set_remaining(self, seconds: int) -> None:
        """Overwrite the countdown position without touching the running flag."""
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            raise InvalidArgumentError(f"seconds must be an integer, got: {seconds!r}")
        if seconds < 0:
            raise InvalidArgumentError(f"seconds must be >= 0, got: {seconds}")
        self._remaining_seconds = seconds
        self._logger.debug("Timer remaining set to %ss", seconds)

    def tick(self) -> Optional[TimerTick]:
        """Advance the countdown by one second; ignored while paused."""
        if not self._running:
            return None

        if self._remaining_seconds > 1:
            self._remaining_seconds -= 1
            return TimerTick(snapshot=self.snapshot())

        concluded = self._phase
        alert_kind = self._alert_kind_for(concluded)
        self._fire_alert(alert_kind)

        if self._cycle == CYCLE_WORK_BREAK:
            if concluded == PHASE_WORK:
                self._phase = PHASE_INTERMISSION
                self._remaining_seconds = self._break_duration_seconds
            else:
                self._phase = PHASE_WORK
                self._remaining_seconds = self._work_duration_seconds
            self._logger.info(
                "Phase %s completed, %s started (%ss)",
                concluded,
                self._phase,
                self._remaining_seconds,
            )
        else:
            self._running = False
            self._remaining_seconds = 0
            self._logger.info("Focus session completed")

        return TimerTick(
            snapshot=self.snapshot(),
            completed=True,
            alert_kind=alert_kind,
        )

    def _alert_kind_for(self, concluded: TimerPhase) -> AlertKind:
        if self._cycle == CYCLE_NONE:
            return ALERT_SESSION_COMPLETE
        if concluded == PHASE_WORK:
            return ALERT_WORK_COMPLETE
        return ALERT_BREAK_COMPLETE

    def _fire_alert(self, kind: AlertKind) -> None:
        if self._alert_sink is None:
            return
        try:
            self._alert_sink.fire(kind)
        except Exception as error:
            self._logger.error("Alert sink failed for %s: %s", kind, error, exc_info=True)
