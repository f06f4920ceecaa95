"""Remote task sources that feed titles into the local task store."""

from .errors import (
    IntegrationConfigurationError,
    IntegrationDependencyError,
    IntegrationError,
    IntegrationReadError,
)
from .google_tasks import GoogleTasks
from .importer import RemoteTaskImporter, build_remote_importer

__all__ = [
    "GoogleTasks",
    "IntegrationConfigurationError",
    "IntegrationDependencyError",
    "IntegrationError",
    "IntegrationReadError",
    "RemoteTaskImporter",
    "build_remote_importer",
]
