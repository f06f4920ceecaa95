"""Task records and their persistence."""

from .errors import TaskNotFoundError, TaskStoreError, TaskValidationError
from .models import Task
from .store import InMemoryTaskStore, JsonTaskStore, TaskStore

__all__ = [
    "InMemoryTaskStore",
    "JsonTaskStore",
    "Task",
    "TaskNotFoundError",
    "TaskStore",
    "TaskStoreError",
    "TaskValidationError",
]
