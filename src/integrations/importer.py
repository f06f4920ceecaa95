"""Copies remote task titles into the local task store."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from tasks import Task, TaskStore, TaskValidationError

from .google_tasks import GoogleTasks


class RemoteTaskSource(Protocol):
    def list_open_tasks(self, *, max_results: int = 10) -> list[dict[str, Any]]:
        ...


class RemoteTaskImporter:
    """Adds remote titles that are not yet present locally (case-insensitive)."""

    def __init__(
        self,
        source: RemoteTaskSource,
        store: TaskStore,
        *,
        max_results: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        self._source = source
        self._store = store
        self._max_results = max_results
        self._logger = logger or logging.getLogger("integrations.importer")

    def import_titles(self) -> list[Task]:
        remote = self._source.list_open_tasks(max_results=self._max_results)
        existing = {task.title.casefold() for task in self._store.list_tasks()}

        created: list[Task] = []
        # The store prepends new tasks, so walk backwards to keep remote order on top.
        for item in reversed(remote):
            title = str(item.get("title") or "").strip()
            if not title or title.casefold() in existing:
                continue
            try:
                task = self._store.add_task(title)
            except TaskValidationError as error:
                self._logger.warning("Skipping remote task %r: %s", title, error)
                continue
            existing.add(title.casefold())
            created.append(task)

        created.reverse()
        self._logger.info(
            "Imported %d of %d remote tasks",
            len(created),
            len(remote),
        )
        return created


def build_remote_importer(
    settings,
    *,
    token_file: Optional[str],
    store: TaskStore,
    logger: logging.Logger,
) -> Optional[RemoteTaskImporter]:
    """Create the Google Tasks importer when enabled; degrade gracefully on failures."""
    if not settings.enabled:
        logger.info("Google Tasks import disabled")
        return None
    if not token_file:
        logger.warning(
            "Google Tasks import enabled but GOOGLE_TASKS_TOKEN_FILE is missing."
        )
        return None

    try:
        client = GoogleTasks(token_file=token_file, logger=logger.getChild("google_tasks"))
    except Exception as error:
        logger.warning("Google Tasks unavailable: %s", error)
        return None

    logger.info("Google Tasks import enabled")
    return RemoteTaskImporter(
        client,
        store,
        max_results=settings.max_results,
        logger=logger,
    )
