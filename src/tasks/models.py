"""Task record persisted by the task stores."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping

from focus.constants import WORK_DURATION_SECONDS

from .errors import TaskValidationError

MAX_TITLE_LENGTH = 200


@dataclass(frozen=True)
class Task:
    """A user task with its saved countdown position."""
    id: str
    title: str
    completed: bool = False
    remaining_seconds: int = WORK_DURATION_SECONDS

    def with_remaining(self, seconds: int) -> "Task":
        return replace(self, remaining_seconds=seconds)

    def toggled(self) -> "Task":
        return replace(self, completed=not self.completed)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Task":
        task_id = raw.get("id")
        if not isinstance(task_id, str) or not task_id.strip():
            raise TaskValidationError("Task id must be a non-empty string.")

        remaining = raw.get("remaining_seconds")
        if isinstance(remaining, bool) or not isinstance(remaining, int) or remaining < 0:
            remaining = WORK_DURATION_SECONDS

        return cls(
            id=task_id,
            title=sanitize_title(str(raw.get("title") or "")),
            completed=bool(raw.get("completed", False)),
            remaining_seconds=remaining,
        )


def sanitize_title(title: str) -> str:
    compact = " ".join(title.split())
    return compact[:MAX_TITLE_LENGTH]
