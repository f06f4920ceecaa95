class FocusError(Exception):
    """Base exception for the focus timer core."""


class InvalidArgumentError(FocusError, ValueError):
    """Raised when an engine operation receives an invalid value."""
