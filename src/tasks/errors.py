class TaskStoreError(Exception):
    """Base exception for task store operations."""


class TaskNotFoundError(TaskStoreError):
    """Raised when a task id does not exist in the store."""


class TaskValidationError(TaskStoreError):
    """Raised when task input is rejected."""
