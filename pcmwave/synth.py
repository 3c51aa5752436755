"""Generate normalized sample sequences for the encoder."""

from __future__ import annotations

import numpy as np


WAVEFORMS = ("sine", "square", "sawtooth")


def _frame_count(duration_s: float, sample_rate: int) -> int:
    if duration_s < 0:
        raise ValueError(f"duration must be non-negative, got {duration_s}")
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    return int(round(float(duration_s) * int(sample_rate)))


def silence(duration_s: float, *, sample_rate: int) -> np.ndarray:
    return np.zeros(_frame_count(duration_s, sample_rate), dtype=np.float64)


def tone(
    frequency: float,
    duration_s: float,
    *,
    sample_rate: int,
    amplitude: float = 1.0,
    waveform: str = "sine",
) -> np.ndarray:
    """Return `duration_s` seconds of a periodic waveform in [-amplitude, amplitude]."""
    if waveform not in WAVEFORMS:
        raise ValueError(
            f"unknown waveform {waveform!r}; expected one of {', '.join(WAVEFORMS)}"
        )
    n = _frame_count(duration_s, sample_rate)
    t = np.arange(n, dtype=np.float64) / float(sample_rate)
    phase = np.mod(t * float(frequency), 1.0)

    if waveform == "sine":
        wave = np.sin(2.0 * np.pi * phase)
    elif waveform == "square":
        wave = np.where(phase < 0.5, 1.0, -1.0)
    else:
        wave = 2.0 * phase - 1.0
    return float(amplitude) * wave
