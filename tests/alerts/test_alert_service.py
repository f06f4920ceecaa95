import logging
import unittest
from unittest.mock import MagicMock, patch

import numpy as np

from alerts import (
    AlertConfig,
    AlertConfigurationError,
    AlertDependencyError,
    AlertError,
    AlertService,
    DesktopNotifier,
    NotificationAlertSink,
    SoundAlertSink,
    ToneGenerator,
    UIAlertSink,
    build_alert_service,
)
from alerts.messages import ALERT_TITLE, alert_body
from app_config_schema import AlertSettings


class _RecordingSink:
    def __init__(self):
        self.kinds: list[str] = []

    def fire(self, kind: str) -> None:
        self.kinds.append(kind)


class _BrokenSink:
    def fire(self, kind: str) -> None:
        raise AlertError("no audio device")


class _PublisherStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []

    def publish(self, event_type: str, **payload):
        self.events.append((event_type, payload))


class AlertMessagesTests(unittest.TestCase):
    def test_bodies_match_completion_kind(self) -> None:
        self.assertEqual("Time for a break!", alert_body("work_complete"))
        self.assertEqual("Break is over! Back to work.", alert_body("break_complete"))
        self.assertEqual("Focus session complete.", alert_body("session_complete"))
        self.assertEqual("Time's up!", ALERT_TITLE)


class AlertServiceTests(unittest.TestCase):
    def test_fire_reaches_every_sink_even_after_a_failure(self) -> None:
        recorder = _RecordingSink()
        service = AlertService(
            [_BrokenSink(), recorder],
            logger=logging.getLogger("test.alerts"),
        )

        with self.assertLogs("test.alerts", level="ERROR"):
            service.fire("work_complete")

        self.assertEqual(["work_complete"], recorder.kinds)

    def test_ui_sink_publishes_alert_event(self) -> None:
        publisher = _PublisherStub()

        UIAlertSink(publisher).fire("break_complete")

        self.assertEqual(
            [
                (
                    "alert",
                    {
                        "kind": "break_complete",
                        "title": "Time's up!",
                        "body": "Break is over! Back to work.",
                    },
                )
            ],
            publisher.events,
        )

    def test_notification_sink_uses_title_and_body(self) -> None:
        notifier = MagicMock()

        NotificationAlertSink(notifier).fire("work_complete")

        notifier.notify.assert_called_once_with("Time's up!", "Time for a break!")

    def test_sound_sink_plays_synthesized_tone(self) -> None:
        output = MagicMock()
        tone = ToneGenerator(duration_seconds=0.2, sample_rate_hz=8000)

        SoundAlertSink(tone, output).fire("session_complete")

        wav, sample_rate = output.play.call_args.args
        self.assertEqual(8000, sample_rate)
        self.assertEqual(1, wav.ndim)


class BuildAlertServiceTests(unittest.TestCase):
    def test_unavailable_sound_backend_is_skipped(self) -> None:
        config = AlertConfig(sound_enabled=True, notifications_enabled=False, ui_enabled=False)
        logger = logging.getLogger("test.alerts.build")

        with patch(
            "alerts.service.SoundDeviceAudioOutput",
            side_effect=AlertDependencyError("PortAudio missing"),
        ):
            with self.assertLogs("test.alerts.build", level="WARNING"):
                service = build_alert_service(config, logger=logger)

        self.assertEqual([], service.sinks)

    def test_ui_sink_added_only_with_publisher(self) -> None:
        config = AlertConfig(sound_enabled=False, notifications_enabled=False, ui_enabled=True)
        logger = logging.getLogger("test.alerts.build")

        without = build_alert_service(config, logger=logger)
        with_publisher = build_alert_service(config, publisher=_PublisherStub(), logger=logger)

        self.assertEqual([], without.sinks)
        self.assertEqual(1, len(with_publisher.sinks))
        self.assertIsInstance(with_publisher.sinks[0], UIAlertSink)


class AlertConfigTests(unittest.TestCase):
    def test_from_settings_maps_output_device(self) -> None:
        config = AlertConfig.from_settings(AlertSettings(output_device=3, volume=0.2))
        self.assertEqual(3, config.output_device_index)
        self.assertEqual(0.2, config.volume)

    def test_rejects_out_of_range_volume(self) -> None:
        with self.assertRaises(AlertConfigurationError):
            AlertConfig(volume=1.5)

    def test_rejects_inaudible_frequency(self) -> None:
        with self.assertRaises(AlertConfigurationError):
            AlertConfig(tone_frequency_hz=5.0)


class ToneGeneratorTests(unittest.TestCase):
    def test_synthesize_returns_float32_mono_within_volume(self) -> None:
        tone = ToneGenerator(frequency_hz=440.0, duration_seconds=0.5, volume=0.3)

        wav, sample_rate = tone.synthesize()

        self.assertEqual(np.float32, wav.dtype)
        self.assertEqual(1, wav.ndim)
        self.assertEqual(44100, sample_rate)
        self.assertAlmostEqual(0.5 * 44100, len(wav), delta=2)
        self.assertLessEqual(float(np.max(np.abs(wav))), 0.3 + 1e-6)
        self.assertAlmostEqual(0.0, float(wav[0]), places=6)


class DesktopNotifierTests(unittest.TestCase):
    def test_linux_uses_notify_send(self) -> None:
        notifier = DesktopNotifier(platform="linux", which=lambda name: f"/usr/bin/{name}")

        command = notifier.build_command("Time's up!", "Time for a break!")

        self.assertEqual("/usr/bin/notify-send", command[0])
        self.assertEqual(["Time's up!", "Time for a break!"], command[-2:])

    def test_macos_uses_osascript_with_quoted_text(self) -> None:
        notifier = DesktopNotifier(platform="darwin", which=lambda name: f"/usr/bin/{name}")

        command = notifier.build_command('Say "hi"', "Body")

        self.assertEqual(["/usr/bin/osascript", "-e"], command[:2])
        self.assertIn('with title "Say \\"hi\\""', command[2])

    def test_missing_binary_raises_dependency_error(self) -> None:
        with self.assertRaises(AlertDependencyError):
            DesktopNotifier(platform="linux", which=lambda name: None)

    def test_notify_launches_subprocess(self) -> None:
        notifier = DesktopNotifier(platform="linux", which=lambda name: f"/usr/bin/{name}")

        with patch("alerts.notifier.subprocess.Popen") as popen:
            notifier.notify("Title", "Body")

        popen.assert_called_once()
        self.assertEqual(notifier.build_command("Title", "Body"), popen.call_args.args[0])

    def test_notify_wraps_os_errors(self) -> None:
        notifier = DesktopNotifier(platform="linux", which=lambda name: f"/usr/bin/{name}")

        with patch("alerts.notifier.subprocess.Popen", side_effect=OSError("boom")):
            with self.assertRaises(AlertError):
                notifier.notify("Title", "Body")


if __name__ == "__main__":
    unittest.main()
