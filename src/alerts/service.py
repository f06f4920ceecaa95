"""Alert sinks and the composite service handed to the timer engine."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence

from contracts.ui_protocol import EVENT_ALERT

from .config import AlertConfig
from .messages import ALERT_TITLE, alert_body
from .notifier import DesktopNotifier
from .output import SoundDeviceAudioOutput
from .tone import ToneGenerator


class AlertSink(Protocol):
    def fire(self, kind: str) -> None: ...


class EventPublisherLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None: ...


class SoundAlertSink:
    """Plays the synthesized chime."""
    def __init__(self, tone: ToneGenerator, output: SoundDeviceAudioOutput):
        self._tone = tone
        self._output = output

    def fire(self, kind: str) -> None:
        wav, sample_rate_hz = self._tone.synthesize()
        self._output.play(wav, sample_rate_hz)


class NotificationAlertSink:
    def __init__(self, notifier: DesktopNotifier):
        self._notifier = notifier

    def fire(self, kind: str) -> None:
        self._notifier.notify(ALERT_TITLE, alert_body(kind))


class UIAlertSink:
    """Forwards alerts to connected browsers, which raise their own notification."""
    def __init__(self, publisher: EventPublisherLike):
        self._publisher = publisher

    def fire(self, kind: str) -> None:
        self._publisher.publish(
            EVENT_ALERT,
            kind=kind,
            title=ALERT_TITLE,
            body=alert_body(kind),
        )


class AlertService:
    """Fans an alert out to every sink; a failing sink never stops the others."""
    def __init__(
        self,
        sinks: Sequence[AlertSink] = (),
        logger: Optional[logging.Logger] = None,
    ):
        self._sinks = list(sinks)
        self._logger = logger or logging.getLogger("alerts")

    @property
    def sinks(self) -> list[AlertSink]:
        return list(self._sinks)

    def fire(self, kind: str) -> None:
        self._logger.info("Alert: %s (%s)", kind, alert_body(kind))
        for sink in self._sinks:
            try:
                sink.fire(kind)
            except Exception as error:
                self._logger.error(
                    "%s failed for %s: %s",
                    type(sink).__name__,
                    kind,
                    error,
                )


def build_alert_service(
    config: AlertConfig,
    *,
    publisher: Optional[EventPublisherLike] = None,
    logger: logging.Logger,
) -> AlertService:
    """Initialize configured alert sinks and degrade gracefully on failures."""
    sinks: list[AlertSink] = []

    if config.sound_enabled:
        try:
            output = SoundDeviceAudioOutput(
                output_device_index=config.output_device_index,
                logger=logger.getChild("sound"),
            )
            tone = ToneGenerator(
                frequency_hz=config.tone_frequency_hz,
                duration_seconds=config.tone_duration_seconds,
                volume=config.volume,
            )
            sinks.append(SoundAlertSink(tone, output))
            logger.info("Sound alerts enabled")
        except Exception as error:
            logger.warning("Sound alerts unavailable: %s", error)

    if config.notifications_enabled:
        try:
            notifier = DesktopNotifier(logger=logger.getChild("notifier"))
            sinks.append(NotificationAlertSink(notifier))
            logger.info("Desktop notifications enabled")
        except Exception as error:
            logger.warning("Desktop notifications unavailable: %s", error)

    if config.ui_enabled and publisher is not None:
        sinks.append(UIAlertSink(publisher))

    return AlertService(sinks, logger=logger)
