"""Public exports for completion alert components."""

from .config import AlertConfig
from .errors import AlertConfigurationError, AlertDependencyError, AlertError
from .notifier import DesktopNotifier
from .output import SoundDeviceAudioOutput
from .service import (
    AlertService,
    NotificationAlertSink,
    SoundAlertSink,
    UIAlertSink,
    build_alert_service,
)
from .tone import ToneGenerator

__all__ = [
    "AlertConfig",
    "AlertConfigurationError",
    "AlertDependencyError",
    "AlertError",
    "AlertService",
    "DesktopNotifier",
    "NotificationAlertSink",
    "SoundAlertSink",
    "SoundDeviceAudioOutput",
    "ToneGenerator",
    "UIAlertSink",
    "build_alert_service",
]
