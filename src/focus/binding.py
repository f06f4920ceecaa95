"""Binds the live countdown to one persisted task and reconciles it on switches."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from tasks.errors import TaskNotFoundError, TaskStoreError

from .engine import TimerEngine, TimerSnapshot, TimerTick
from .errors import InvalidArgumentError

if TYPE_CHECKING:
    from tasks import Task, TaskStore


@dataclass(frozen=True)
class BindingSnapshot:
    """Timer snapshot enriched with the bound task, for UI publishing."""
    active_task_id: Optional[str]
    active_task_title: Optional[str]
    timer: TimerSnapshot


class ActiveTaskBinding:
    """Keeps one task's saved remaining time in step with the timer engine.

    All user actions enter here. The runtime calls `on_tick` in the same
    step as `TimerEngine.tick`, so a task switch can never land between a
    decrement and its write.
    """

    def __init__(
        self,
        engine: TimerEngine,
        store: "TaskStore",
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._engine = engine
        self._store = store
        self._logger = logger or logging.getLogger("focus.binding")
        self._active_task_id: Optional[str] = None

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def active_task_id(self) -> Optional[str]:
        return self._active_task_id

    def active_task(self) -> Optional["Task"]:
        if self._active_task_id is None:
            return None
        try:
            return self._store.read_task(self._active_task_id)
        except TaskStoreError:
            return None

    def snapshot(self) -> BindingSnapshot:
        task = self.active_task()
        return BindingSnapshot(
            active_task_id=self._active_task_id,
            active_task_title=task.title if task is not None else None,
            timer=self._engine.snapshot(),
        )

    def select_task(self, task_id: str) -> Optional["Task"]:
        """Load a task's saved position into the engine.

        Returns None and changes nothing when the task cannot be read.
        Switching to a different task pauses the engine; re-selecting the
        active task keeps it running.
        """
        try:
            task = self._store.read_task(task_id)
        except TaskStoreError as error:
            self._logger.warning("Cannot select task %s: %s", task_id, error)
            return None

        try:
            self._engine.set_remaining(
                task.remaining_seconds or self._engine.work_duration_seconds
            )
        except InvalidArgumentError as error:
            self._logger.warning("Cannot select task %s: %s", task_id, error)
            return None

        previous_id = self._active_task_id
        self._active_task_id = task.id
        if task.id != previous_id:
            self._engine.pause()
        self._logger.info(
            "Active task: id=%s title=%s remaining=%ss",
            task.id,
            task.title,
            self._engine.remaining_seconds,
        )
        return task

    def clear_active_task(self) -> None:
        if self._active_task_id is not None:
            self._logger.info("Active task cleared: id=%s", self._active_task_id)
        self._active_task_id = None

    def task_deleted(self, task_id: str) -> bool:
        """Unbind and pause when the deleted task is the active one."""
        if task_id != self._active_task_id:
            return False
        self._active_task_id = None
        self._engine.pause()
        self._logger.info("Active task %s deleted; timer paused", task_id)
        return True

    def start(self) -> None:
        self._engine.start()

    def pause(self) -> None:
        self._engine.pause()

    def toggle(self) -> None:
        if self._engine.running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        self._engine.reset()
        self.sync_now()

    def on_tick(self, tick: Optional[TimerTick]) -> None:
        """Persist the countdown for the tick that just fired."""
        if tick is None:
            return
        if not tick.snapshot.running and not tick.completed:
            return
        self._write_remaining(tick.snapshot.remaining_seconds)

    def sync_now(self) -> None:
        self._write_remaining(self._engine.remaining_seconds)

    def _write_remaining(self, seconds: int) -> None:
        task_id = self._active_task_id
        if task_id is None:
            return
        try:
            self._store.write_remaining(task_id, seconds)
        except TaskNotFoundError:
            self._logger.warning(
                "Active task %s no longer exists; clearing binding", task_id
            )
            self._active_task_id = None
            self._engine.pause()
        except TaskStoreError as error:
            self._logger.error("Failed to save remaining time for %s: %s", task_id, error)
