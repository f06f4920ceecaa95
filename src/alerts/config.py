"""Configuration model for completion sounds and notifications."""

from dataclasses import dataclass
from typing import Optional

from .errors import AlertConfigurationError


@dataclass(frozen=True)
class AlertConfig:
    """Validated alert settings derived from the `[alerts]` section."""
    sound_enabled: bool = True
    notifications_enabled: bool = True
    ui_enabled: bool = True
    tone_frequency_hz: float = 880.0
    tone_duration_seconds: float = 0.6
    volume: float = 0.4
    output_device_index: Optional[int] = None

    def __post_init__(self) -> None:
        if not 20.0 <= self.tone_frequency_hz <= 20000.0:
            raise AlertConfigurationError(
                f"tone_frequency_hz must be in [20, 20000], got: {self.tone_frequency_hz}"
            )
        if not 0.05 <= self.tone_duration_seconds <= 10.0:
            raise AlertConfigurationError(
                "tone_duration_seconds must be in [0.05, 10], "
                f"got: {self.tone_duration_seconds}"
            )
        if not 0.0 <= self.volume <= 1.0:
            raise AlertConfigurationError(f"volume must be in [0, 1], got: {self.volume}")

    @classmethod
    def from_settings(cls, settings) -> "AlertConfig":
        return cls(
            sound_enabled=bool(settings.sound_enabled),
            notifications_enabled=bool(settings.notifications_enabled),
            ui_enabled=bool(getattr(settings, "ui_enabled", True)),
            tone_frequency_hz=float(settings.tone_frequency_hz),
            tone_duration_seconds=float(settings.tone_duration_seconds),
            volume=float(settings.volume),
            output_device_index=settings.output_device,
        )
