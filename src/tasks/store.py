"""Task stores: an in-memory store and a JSON file store with atomic writes."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import uuid
from pathlib import Path
from typing import Optional, Protocol

from focus.constants import WORK_DURATION_SECONDS

from .errors import TaskNotFoundError, TaskStoreError, TaskValidationError
from .models import Task, sanitize_title


class TaskStore(Protocol):
    """Task persistence interface used by the binding and command dispatch."""
    def read_task(self, task_id: str) -> Task:
        ...

    def write_remaining(self, task_id: str, seconds: int) -> None:
        ...

    def list_tasks(self) -> list[Task]:
        ...

    def add_task(self, title: str) -> Task:
        ...

    def delete_task(self, task_id: str) -> None:
        ...

    def toggle_task(self, task_id: str) -> Task:
        ...


class InMemoryTaskStore:
    """Ordered task store kept in process memory; newest tasks come first."""

    def __init__(
        self,
        tasks: Optional[list[Task]] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._tasks: list[Task] = list(tasks or [])
        self._logger = logger or logging.getLogger("tasks")

    def read_task(self, task_id: str) -> Task:
        return self._tasks[self._index_of(task_id)]

    def write_remaining(self, task_id: str, seconds: int) -> None:
        if seconds < 0:
            raise TaskValidationError(f"remaining_seconds must be >= 0, got: {seconds}")
        index = self._index_of(task_id)
        self._tasks[index] = self._tasks[index].with_remaining(int(seconds))
        self._changed()

    def list_tasks(self) -> list[Task]:
        return list(self._tasks)

    def add_task(self, title: str) -> Task:
        clean_title = sanitize_title(title or "")
        if not clean_title:
            raise TaskValidationError("Task title cannot be empty.")
        task = Task(
            id=uuid.uuid4().hex,
            title=clean_title,
            completed=False,
            remaining_seconds=WORK_DURATION_SECONDS,
        )
        self._tasks.insert(0, task)
        self._changed()
        self._logger.info("Task added: id=%s title=%s", task.id, task.title)
        return task

    def delete_task(self, task_id: str) -> None:
        index = self._index_of(task_id)
        removed = self._tasks.pop(index)
        self._changed()
        self._logger.info("Task deleted: id=%s title=%s", removed.id, removed.title)

    def toggle_task(self, task_id: str) -> Task:
        index = self._index_of(task_id)
        task = self._tasks[index].toggled()
        self._tasks[index] = task
        self._changed()
        return task

    def _index_of(self, task_id: str) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise TaskNotFoundError(f"Task not found: {task_id}")

    def _changed(self) -> None:
        """Hook for subclasses that persist after every mutation."""


class JsonTaskStore(InMemoryTaskStore):
    """Task store persisted as a JSON list; every mutation rewrites the file."""

    def __init__(
        self,
        path: str | Path,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._path = Path(path).expanduser()
        super().__init__(logger=logger)
        self._tasks = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[Task]:
        if not self._path.exists():
            return []

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as error:
            self._logger.error("Failed to parse tasks file %s: %s", self._path, error)
            return []

        if not isinstance(raw, list):
            self._logger.error("Tasks file %s must contain a JSON list", self._path)
            return []

        tasks: list[Task] = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            try:
                tasks.append(Task.from_dict(item))
            except TaskValidationError as error:
                self._logger.warning("Skipping invalid task entry: %s", error)
        self._logger.info("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def _changed(self) -> None:
        payload = json.dumps([task.to_dict() for task in self._tasks], indent=2)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self._path.parent),
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as error:
            raise TaskStoreError(
                f"Failed to write tasks file {self._path}: {error}"
            ) from error
