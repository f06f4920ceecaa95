"""Sounddevice-backed playback for the completion chime."""

import logging
from typing import Optional

import numpy as np

from .errors import AlertDependencyError, AlertError


class SoundDeviceAudioOutput:
    """Plays mono PCM arrays through a selected sounddevice output without blocking."""
    def __init__(
        self,
        output_device_index: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._output_device_index = output_device_index
        self._logger = logger or logging.getLogger(__name__)
        self._sd = self._load_backend()

    @staticmethod
    def _load_backend():
        try:
            import sounddevice as sd
        except (ImportError, OSError) as error:  # pragma: no cover - host audio dependent
            raise AlertDependencyError(
                f"Audio playback unavailable (sounddevice/PortAudio): {error}"
            ) from error
        return sd

    def play(self, wav: np.ndarray, sample_rate_hz: int) -> None:
        if wav.ndim != 1:
            raise AlertError("Expected mono PCM array for playback")
        if len(wav) == 0:
            raise AlertError("Cannot play empty audio buffer")

        try:
            self._sd.play(
                wav,
                samplerate=sample_rate_hz,
                device=self._output_device_index,
                blocking=False,
            )
        except Exception as error:
            raise AlertError(f"Audio playback failed: {error}") from error
        self._logger.debug(
            "Playing %d samples of alert audio at %d Hz",
            len(wav),
            sample_rate_hz,
        )
