"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettings:
    """Countdown durations and cycle policy from `[timer]`."""
    cycle: str = "work_break"
    work_duration_seconds: int = 25 * 60
    break_duration_seconds: int = 5 * 60
    tick_interval_seconds: float = 1.0


@dataclass(frozen=True)
class TaskSettings:
    """Task persistence settings from `[tasks]`."""
    store_file: str = "tasks.json"


@dataclass(frozen=True)
class AlertSettings:
    """Completion sound and notification settings from `[alerts]`."""
    sound_enabled: bool = True
    notifications_enabled: bool = True
    ui_enabled: bool = True
    tone_frequency_hz: float = 880.0
    tone_duration_seconds: float = 0.6
    volume: float = 0.4
    output_device: Optional[int] = None


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class GoogleTasksSettings:
    """Read-only Google Tasks import settings from `[google_tasks]`."""
    enabled: bool = False
    max_results: int = 10


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    timer: TimerSettings = field(default_factory=TimerSettings)
    tasks: TaskSettings = field(default_factory=TaskSettings)
    alerts: AlertSettings = field(default_factory=AlertSettings)
    ui_server: UIServerSettings = field(default_factory=UIServerSettings)
    google_tasks: GoogleTasksSettings = field(default_factory=GoogleTasksSettings)
    source_file: str = ""


@dataclass(frozen=True)
class SecretConfig:
    """Environment-provided secrets kept out of `config.toml`."""
    google_tasks_token_file: Optional[str] = None
