from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True, eq=False)
class AudioSampleBuffer:
    """Decoded audio handed over by the loader.

    Attributes:
        channels:   One contiguous float array per channel, normalised to
                    [-1, 1].  All channels share the same length.
        samplerate: Sample rate in Hz.
    """
    channels: list = field(default_factory=list)
    samplerate: int = 44100

    @classmethod
    def from_array(cls, data: np.ndarray | None,
                   samplerate: int) -> AudioSampleBuffer:
        """Split a ``(n,)`` or ``(n, ch)`` array into per-channel arrays."""
        if data is None or data.size == 0:
            return cls([], samplerate)
        if data.ndim == 1:
            channels = [np.ascontiguousarray(data)]
        else:
            channels = [
                np.ascontiguousarray(data[:, ch])
                for ch in range(data.shape[1])
            ]
        return cls(channels, samplerate)

    @property
    def num_channels(self) -> int:
        return len(self.channels)

    @property
    def total_samples(self) -> int:
        return len(self.channels[0]) if self.channels else 0

    @property
    def duration(self) -> float:
        if self.samplerate <= 0:
            return 0.0
        return self.total_samples / self.samplerate

    @property
    def is_empty(self) -> bool:
        return self.total_samples == 0


@dataclass(frozen=True)
class AmplitudePoint:
    """One RMS window of the amplitude profile.

    Attributes:
        time:      Window start in seconds.
        amplitude: RMS magnitude in [0, 1].
        decibels:  RMS level in dB, clamped to the configured floor.
    """
    time: float
    amplitude: float
    decibels: float


@dataclass
class FrequencySnapshot:
    """Byte arrays published by the streaming analyser every frame.

    ``magnitudes`` holds frequency bins (0-255), ``time_domain`` holds
    waveform samples centred at 128.  The producer overwrites both arrays
    in place; consumers call :meth:`copy` before keeping any values.
    """
    magnitudes: np.ndarray
    time_domain: np.ndarray

    def copy(self) -> FrequencySnapshot:
        return FrequencySnapshot(
            np.array(self.magnitudes, dtype=np.uint8, copy=True),
            np.array(self.time_domain, dtype=np.uint8, copy=True),
        )


@dataclass(frozen=True)
class TooltipState:
    """Hover readout for the amplitude chart (``None`` when hidden)."""
    screen_x: float
    screen_y: float
    label: str
    value: str
