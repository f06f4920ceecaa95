class IntegrationError(Exception):
    """Base exception for remote task integrations."""


class IntegrationConfigurationError(IntegrationError):
    """Raised when integration configuration is invalid."""


class IntegrationDependencyError(IntegrationError):
    """Raised when an optional dependency for an integration is missing."""


class IntegrationReadError(IntegrationError):
    """Raised when reading from a remote provider fails."""
