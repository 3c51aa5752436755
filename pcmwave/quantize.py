"""Quantize normalized float samples to PCM integers.

Values are truncated toward zero and never clamped: anything outside
[-1.0, 1.0] wraps into the target width the same way packing an oversized
integer into 8 or 16 bits keeps only the low bits.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from pcmwave.errors import UnsupportedBitDepthError


_SCALE = {8: 127.0, 16: 32767.0}
_OFFSET_8BIT = 127


def as_sample_array(samples: Iterable[float] | np.ndarray) -> np.ndarray:
    """Return an owned 1-D float64 copy of `samples`."""
    if isinstance(samples, np.ndarray):
        arr = np.array(samples, dtype=np.float64, copy=True)
    else:
        arr = np.array(list(samples), dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"samples must be a flat sequence, got shape {arr.shape}")
    return arr


def _truncate(samples: np.ndarray, scale: float) -> np.ndarray:
    scaled = samples * scale
    if not np.all(np.isfinite(scaled)):
        bad = int(np.flatnonzero(~np.isfinite(scaled))[0])
        raise ValueError(f"sample at index {bad} is not finite: {samples[bad]!r}")
    return np.trunc(scaled)


def quantize(samples: np.ndarray, bits_per_sample: int) -> np.ndarray:
    """Return the integer sample values for the given bit depth.

    8-bit yields uint8 (`trunc(s * 127) + 127`), 16-bit yields int16
    (`trunc(s * 32767)`). The input array is not modified.
    """
    scale = _SCALE.get(bits_per_sample)
    if scale is None:
        raise UnsupportedBitDepthError(bits_per_sample)

    truncated = _truncate(np.asarray(samples, dtype=np.float64), scale)
    # fmod on integral floats is exact, so reducing before the offset keeps
    # the low bits correct even for huge inputs.
    if bits_per_sample == 8:
        low = np.mod(truncated, 256.0)
        return np.mod(low + _OFFSET_8BIT, 256.0).astype(np.uint8)
    return np.mod(truncated, 65536.0).astype(np.uint16).view(np.int16)


def encode(quantized: np.ndarray, bits_per_sample: int) -> bytes:
    """Pack quantized values as PCM bytes (16-bit is little-endian)."""
    if bits_per_sample == 8:
        return np.asarray(quantized, dtype=np.uint8).tobytes()
    if bits_per_sample == 16:
        return np.asarray(quantized, dtype=np.int16).astype("<i2").tobytes()
    raise UnsupportedBitDepthError(bits_per_sample)


def out_of_range_indices(samples: np.ndarray) -> np.ndarray:
    """Return indices of samples outside [-1.0, 1.0] (NaN included)."""
    arr = np.asarray(samples, dtype=np.float64)
    return np.flatnonzero(~((arr >= -1.0) & (arr <= 1.0)))
