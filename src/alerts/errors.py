class AlertError(Exception):
    """Raised when an alert cannot be delivered."""


class AlertConfigurationError(AlertError):
    """Raised when alert configuration is invalid."""


class AlertDependencyError(AlertError):
    """Raised when an optional audio or notification dependency is unavailable."""
