"""Numpy synthesis of the short completion chime."""

from __future__ import annotations

import numpy as np

DEFAULT_SAMPLE_RATE_HZ = 44100


class ToneGenerator:
    """Builds a two-note sine chime with a short fade to avoid clicks."""
    def __init__(
        self,
        *,
        frequency_hz: float = 880.0,
        duration_seconds: float = 0.6,
        volume: float = 0.4,
        sample_rate_hz: int = DEFAULT_SAMPLE_RATE_HZ,
    ):
        self._frequency_hz = frequency_hz
        self._duration_seconds = duration_seconds
        self._volume = volume
        self._sample_rate_hz = sample_rate_hz

    @property
    def sample_rate_hz(self) -> int:
        return self._sample_rate_hz

    def synthesize(self) -> tuple[np.ndarray, int]:
        half = self._duration_seconds / 2
        first = self._note(self._frequency_hz, half)
        second = self._note(self._frequency_hz * 1.5, half)
        wav = np.concatenate([first, second]).astype(np.float32)
        return wav, self._sample_rate_hz

    def _note(self, frequency_hz: float, seconds: float) -> np.ndarray:
        sample_count = max(1, int(self._sample_rate_hz * seconds))
        t = np.arange(sample_count) / self._sample_rate_hz
        wave = np.sin(2 * np.pi * frequency_hz * t) * self._volume

        fade = min(sample_count // 2, int(self._sample_rate_hz * 0.01))
        if fade > 0:
            ramp = np.linspace(0.0, 1.0, fade)
            wave[:fade] *= ramp
            wave[-fade:] *= ramp[::-1]
        return wave
