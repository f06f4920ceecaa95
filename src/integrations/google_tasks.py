"""Read-only Google Tasks client used to import externally authored titles."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import (
    IntegrationConfigurationError,
    IntegrationDependencyError,
    IntegrationReadError,
)


class GoogleTasks:
    """Google Tasks wrapper that lists open tasks from the first task list."""

    READONLY_SCOPE = "https://www.googleapis.com/auth/tasks.readonly"

    def __init__(
        self,
        token_file: str,
        logger: Optional[logging.Logger] = None,
        api: Any = None,
    ):
        self._logger = logger or logging.getLogger(__name__)
        if api is not None:
            self._api = api
            return

        if not token_file.strip():
            raise IntegrationConfigurationError("token_file cannot be empty")
        token_path = Path(token_file).expanduser()
        if not token_path.exists():
            raise IntegrationConfigurationError(f"Token file not found: {token_path}")
        if not token_path.is_file():
            raise IntegrationConfigurationError(
                f"Token path is not a file: {token_path}"
            )
        self._api = self._build_api(str(token_path))

    def _build_api(self, token_file: str):
        try:
            from google.oauth2.credentials import Credentials
            from googleapiclient.discovery import build
        except ImportError as error:  # pragma: no cover - optional dependency
            raise IntegrationDependencyError(
                "Google Tasks dependencies missing. Install google-auth and "
                "google-api-python-client."
            ) from error

        try:
            credentials = Credentials.from_authorized_user_file(
                token_file,
                scopes=[self.READONLY_SCOPE],
            )
        except (ValueError, OSError) as error:
            raise IntegrationConfigurationError(
                f"Invalid Google token file {token_file}: {error}"
            ) from error
        return build("tasks", "v1", credentials=credentials, cache_discovery=False)

    def default_task_list_id(self) -> Optional[str]:
        try:
            result = self._api.tasklists().list(maxResults=1).execute()
        except Exception as error:  # pragma: no cover - network/API dependent
            raise IntegrationReadError(
                f"Failed to fetch Google task lists: {error}"
            ) from error

        items = result.get("items", []) or []
        if not items:
            return None
        return items[0].get("id")

    def list_open_tasks(self, *, max_results: int = 10) -> List[Dict[str, Any]]:
        """Fetch incomplete tasks from the default list with normalized fields."""
        if max_results < 1:
            raise ValueError(f"max_results must be >= 1, got: {max_results}")

        task_list_id = self.default_task_list_id()
        if not task_list_id:
            self._logger.info("No Google task list available")
            return []

        try:
            result = (
                self._api.tasks()
                .list(
                    tasklist=task_list_id,
                    showCompleted=False,
                    maxResults=max_results,
                )
                .execute()
            )
        except Exception as error:  # pragma: no cover - network/API dependent
            raise IntegrationReadError(
                f"Failed to fetch Google tasks: {error}"
            ) from error

        items = result.get("items", []) or []
        return [
            normalized
            for normalized in (self._normalize_task(item) for item in items)
            if normalized["title"]
        ]

    @staticmethod
    def _normalize_task(task: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": task.get("id"),
            "title": " ".join(str(task.get("title") or "").split()),
        }
