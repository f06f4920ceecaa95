"""Dispatcher that applies parsed console commands to the binding and task store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from focus import ActiveTaskBinding
from focus.constants import (
    ACTION_CLEAR,
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_SELECT,
    ACTION_START,
    ACTION_TOGGLE,
    REASON_ALREADY_RUNNING,
    REASON_CLEARED,
    REASON_IMPORT_FAILED,
    REASON_IMPORT_UNAVAILABLE,
    REASON_INVALID_ARGUMENT,
    REASON_NOT_RUNNING,
    REASON_PAUSED,
    REASON_RESET,
    REASON_SELECTED,
    REASON_STARTED,
    REASON_STATUS,
    REASON_STORE_ERROR,
    REASON_TASK_ADDED,
    REASON_TASK_DELETED,
    REASON_TASK_NOT_FOUND,
    REASON_TASK_UPDATED,
    REASON_TASKS_IMPORTED,
    REASON_TASKS_LISTED,
)
from integrations import IntegrationError
from tasks import Task, TaskNotFoundError, TaskStore, TaskStoreError, TaskValidationError

from .commands import (
    COMMAND_ADD,
    COMMAND_CLEAR,
    COMMAND_DELETE,
    COMMAND_DONE,
    COMMAND_IMPORT,
    COMMAND_LIST,
    COMMAND_PAUSE,
    COMMAND_RESET,
    COMMAND_SELECT,
    COMMAND_START,
    COMMAND_STATUS,
    COMMAND_TOGGLE,
    Command,
)
from .contracts import TaskImporterLike
from .messages import rejection_text, task_list_lines, timer_status_message
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command: whether it was applied and a text for the console."""
    accepted: bool
    reason: str
    message: str


class CommandDispatcher:
    """Routes console commands to timer, binding, and task store operations."""
    def __init__(
        self,
        *,
        logger: logging.Logger,
        binding: ActiveTaskBinding,
        store: TaskStore,
        ui: RuntimeUIPublisher,
        importer: Optional[TaskImporterLike] = None,
    ):
        self._logger = logger
        self._binding = binding
        self._store = store
        self._ui = ui
        self._importer = importer
        self._handlers: dict[str, Callable[[str], CommandResult]] = {
            COMMAND_START: self._start,
            COMMAND_PAUSE: self._pause,
            COMMAND_TOGGLE: self._toggle,
            COMMAND_RESET: self._reset,
            COMMAND_SELECT: self._select,
            COMMAND_CLEAR: self._clear,
            COMMAND_ADD: self._add,
            COMMAND_DELETE: self._delete,
            COMMAND_DONE: self._done,
            COMMAND_LIST: self._list,
            COMMAND_IMPORT: self._import,
            COMMAND_STATUS: self._status,
        }

    def status_message(self) -> str:
        return timer_status_message(self._binding.snapshot())

    def publish_snapshots(self, *, action: str, reason: str, message: str = "") -> None:
        """Publish the current timer and task list to connected UIs."""
        self._ui.publish_timer_update(
            self._binding.snapshot(),
            action=action,
            accepted=True,
            reason=reason,
            message=message or None,
        )
        self.publish_tasks()

    def publish_tasks(self) -> None:
        try:
            tasks = self._store.list_tasks()
        except TaskStoreError as error:
            self._logger.error("Failed to list tasks: %s", error)
            return
        self._ui.publish_tasks(tasks, active_task_id=self._binding.active_task_id)

    def dispatch(self, command: Command) -> CommandResult:
        handler = self._handlers.get(command.name)
        if handler is None:
            self._logger.warning("Unsupported command: %s", command.name)
            return CommandResult(
                accepted=False,
                reason=REASON_INVALID_ARGUMENT,
                message=f"Unsupported command: {command.name}",
            )
        result = handler(command.argument)
        self._logger.debug(
            "Command %s(%s): accepted=%s reason=%s",
            command.name,
            command.argument,
            result.accepted,
            result.reason,
        )
        return result

    def _start(self, argument: str) -> CommandResult:
        del argument
        if self._binding.engine.running:
            return self._reject(ACTION_START, REASON_ALREADY_RUNNING)
        self._binding.start()
        return self._accept(ACTION_START, REASON_STARTED)

    def _pause(self, argument: str) -> CommandResult:
        del argument
        if not self._binding.engine.running:
            return self._reject(ACTION_PAUSE, REASON_NOT_RUNNING)
        self._binding.pause()
        return self._accept(ACTION_PAUSE, REASON_PAUSED)

    def _toggle(self, argument: str) -> CommandResult:
        del argument
        self._binding.toggle()
        reason = REASON_STARTED if self._binding.engine.running else REASON_PAUSED
        return self._accept(ACTION_TOGGLE, reason)

    def _reset(self, argument: str) -> CommandResult:
        del argument
        self._binding.reset()
        return self._accept(ACTION_RESET, REASON_RESET)

    def _select(self, argument: str) -> CommandResult:
        task = self._resolve_task(argument)
        if task is None or self._binding.select_task(task.id) is None:
            return self._reject(ACTION_SELECT, REASON_TASK_NOT_FOUND, argument)
        return self._accept(ACTION_SELECT, REASON_SELECTED)

    def _clear(self, argument: str) -> CommandResult:
        del argument
        self._binding.clear_active_task()
        return self._accept(ACTION_CLEAR, REASON_CLEARED)

    def _add(self, argument: str) -> CommandResult:
        try:
            task = self._store.add_task(argument)
        except TaskValidationError:
            return self._reject(COMMAND_ADD, REASON_INVALID_ARGUMENT, argument)
        except TaskStoreError as error:
            self._logger.error("Failed to add task: %s", error)
            return self._reject(COMMAND_ADD, REASON_STORE_ERROR)
        message = f"Added task '{task.title}'."
        self.publish_snapshots(action=COMMAND_ADD, reason=REASON_TASK_ADDED)
        return CommandResult(accepted=True, reason=REASON_TASK_ADDED, message=message)

    def _delete(self, argument: str) -> CommandResult:
        task = self._resolve_task(argument)
        if task is None:
            return self._reject(COMMAND_DELETE, REASON_TASK_NOT_FOUND, argument)
        try:
            self._store.delete_task(task.id)
        except TaskNotFoundError:
            return self._reject(COMMAND_DELETE, REASON_TASK_NOT_FOUND, argument)
        except TaskStoreError as error:
            self._logger.error("Failed to delete task %s: %s", task.id, error)
            return self._reject(COMMAND_DELETE, REASON_STORE_ERROR)

        was_active = self._binding.task_deleted(task.id)
        message = f"Deleted task '{task.title}'."
        if was_active:
            message += " Timer paused."
        self.publish_snapshots(action=COMMAND_DELETE, reason=REASON_TASK_DELETED)
        return CommandResult(accepted=True, reason=REASON_TASK_DELETED, message=message)

    def _done(self, argument: str) -> CommandResult:
        task = self._resolve_task(argument)
        if task is None:
            return self._reject(COMMAND_DONE, REASON_TASK_NOT_FOUND, argument)
        try:
            updated = self._store.toggle_task(task.id)
        except TaskNotFoundError:
            return self._reject(COMMAND_DONE, REASON_TASK_NOT_FOUND, argument)
        except TaskStoreError as error:
            self._logger.error("Failed to update task %s: %s", task.id, error)
            return self._reject(COMMAND_DONE, REASON_STORE_ERROR)

        state = "done" if updated.completed else "open"
        self.publish_snapshots(action=COMMAND_DONE, reason=REASON_TASK_UPDATED)
        return CommandResult(
            accepted=True,
            reason=REASON_TASK_UPDATED,
            message=f"Marked '{updated.title}' as {state}.",
        )

    def _list(self, argument: str) -> CommandResult:
        del argument
        try:
            tasks = self._store.list_tasks()
        except TaskStoreError as error:
            self._logger.error("Failed to list tasks: %s", error)
            return self._reject(COMMAND_LIST, REASON_STORE_ERROR)
        lines = task_list_lines(tasks, self._binding.active_task_id)
        return CommandResult(
            accepted=True,
            reason=REASON_TASKS_LISTED,
            message="\n".join(lines),
        )

    def _import(self, argument: str) -> CommandResult:
        del argument
        if self._importer is None:
            return self._reject(COMMAND_IMPORT, REASON_IMPORT_UNAVAILABLE)
        try:
            created = self._importer.import_titles()
        except (IntegrationError, TaskStoreError) as error:
            self._logger.error("Task import failed: %s", error)
            return self._reject(COMMAND_IMPORT, REASON_IMPORT_FAILED)

        self.publish_snapshots(action=COMMAND_IMPORT, reason=REASON_TASKS_IMPORTED)
        return CommandResult(
            accepted=True,
            reason=REASON_TASKS_IMPORTED,
            message=f"Imported {len(created)} task(s).",
        )

    def _status(self, argument: str) -> CommandResult:
        del argument
        return CommandResult(
            accepted=True,
            reason=REASON_STATUS,
            message=self.status_message(),
        )

    def _resolve_task(self, reference: str) -> Optional[Task]:
        """Resolve a 1-based list index or a task id."""
        reference = reference.strip()
        try:
            tasks = self._store.list_tasks()
        except TaskStoreError as error:
            self._logger.error("Failed to list tasks: %s", error)
            return None

        if reference.isdigit():
            index = int(reference) - 1
            if 0 <= index < len(tasks):
                return tasks[index]

        for task in tasks:
            if task.id == reference:
                return task
        return None

    def _accept(self, action: str, reason: str) -> CommandResult:
        message = self.status_message()
        self.publish_snapshots(action=action, reason=reason, message=message)
        return CommandResult(accepted=True, reason=reason, message=message)

    def _reject(self, action: str, reason: str, argument: str = "") -> CommandResult:
        message = rejection_text(action, reason, argument)
        self._ui.publish_timer_update(
            self._binding.snapshot(),
            action=action,
            accepted=False,
            reason=reason,
            message=message,
        )
        return CommandResult(accepted=False, reason=reason, message=message)
