"""In-memory PCM sample buffer that serializes to a canonical WAVE file.

Typical use::

    encoder = WaveEncoder(num_channels=1, sample_rate=44100, bits_per_sample=16)
    encoder.samples = tone(440.0, 1.0, sample_rate=44100)
    written = encoder.save("a440.wav")

Samples are normalized floats. Nothing is validated when they are assigned;
out-of-range values wrap during quantization unless `strict=True`.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np

from pcmwave import header as wav_header
from pcmwave.errors import OutOfRangeSampleError, UnsupportedBitDepthError
from pcmwave.quantize import as_sample_array, encode, out_of_range_indices, quantize
from pcmwave.sink import Destination, write_bytes


logger = logging.getLogger(__name__)


def _positive_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return int(value)


def _check_bit_depth(bits_per_sample: object) -> int:
    if (
        isinstance(bits_per_sample, bool)
        or bits_per_sample not in wav_header.SUPPORTED_BIT_DEPTHS
    ):
        raise UnsupportedBitDepthError(bits_per_sample)
    return int(bits_per_sample)  # type: ignore[arg-type]


class WaveEncoder:
    """Format parameters plus a buffered sample sequence."""

    def __init__(
        self,
        num_channels: int,
        sample_rate: int,
        bits_per_sample: int,
        *,
        strict: bool = False,
    ) -> None:
        self.bits_per_sample = _check_bit_depth(bits_per_sample)
        self._num_channels = _positive_int("num_channels", num_channels)
        self._sample_rate = _positive_int("sample_rate", sample_rate)
        self._check_format(self._num_channels, self._sample_rate)
        self.strict = bool(strict)
        self._samples = np.zeros(0, dtype=np.float64)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(num_channels={self.num_channels}, "
            f"sample_rate={self.sample_rate}, bits_per_sample={self.bits_per_sample}, "
            f"samples={self.sample_count})"
        )

    def _check_format(self, num_channels: int, sample_rate: int) -> None:
        wav_header.WaveHeader(
            num_channels=num_channels,
            sample_rate=sample_rate,
            bits_per_sample=self.bits_per_sample,
            data_size=0,
        ).validate()

    @property
    def num_channels(self) -> int:
        return self._num_channels

    @num_channels.setter
    def num_channels(self, value: int) -> None:
        value = _positive_int("num_channels", value)
        self._check_format(value, self._sample_rate)
        self._num_channels = value

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @sample_rate.setter
    def sample_rate(self, value: int) -> None:
        value = _positive_int("sample_rate", value)
        self._check_format(self._num_channels, value)
        self._sample_rate = value

    @property
    def byte_rate(self) -> int:
        return wav_header.byte_rate(
            sample_rate=self.sample_rate,
            num_channels=self.num_channels,
            bits_per_sample=self.bits_per_sample,
        )

    @property
    def block_align(self) -> int:
        return wav_header.block_align(
            num_channels=self.num_channels, bits_per_sample=self.bits_per_sample
        )

    @property
    def samples(self) -> np.ndarray:
        """Read-only view of the buffered normalized samples."""
        view = self._samples.view()
        view.flags.writeable = False
        return view

    @samples.setter
    def samples(self, values: Iterable[float] | np.ndarray) -> None:
        self._samples = as_sample_array(values)

    def set_samples(self, values: Iterable[float] | np.ndarray) -> None:
        self.samples = values

    @property
    def sample_count(self) -> int:
        return int(self._samples.size)

    @property
    def data_size(self) -> int:
        return wav_header.data_size(
            sample_count=self.sample_count,
            num_channels=self.num_channels,
            bits_per_sample=self.bits_per_sample,
        )

    @property
    def duration_s(self) -> float:
        return float(self.sample_count) / float(self.sample_rate)

    def wave_header(self) -> wav_header.WaveHeader:
        _check_bit_depth(self.bits_per_sample)
        return wav_header.WaveHeader(
            num_channels=self.num_channels,
            sample_rate=self.sample_rate,
            bits_per_sample=self.bits_per_sample,
            data_size=self.data_size,
        )

    def header(self) -> bytes:
        """Return the 44-byte RIFF/WAVE header for the current state."""
        return self.wave_header().pack()

    def _check_range(self, samples: np.ndarray) -> None:
        bad = out_of_range_indices(samples)
        if bad.size == 0:
            return
        first = int(bad[0])
        if self.strict:
            raise OutOfRangeSampleError(int(bad.size), first, float(samples[first]))
        logger.warning(
            "%d sample(s) outside [-1.0, 1.0] will wrap; first at index %d: %r",
            bad.size,
            first,
            float(samples[first]),
        )

    def quantized(self) -> np.ndarray:
        """Return one integer value per sample (a new array)."""
        _check_bit_depth(self.bits_per_sample)
        samples = self._samples
        self._check_range(samples)
        return quantize(samples, self.bits_per_sample)

    def _render(self) -> tuple[bytes, np.ndarray]:
        # The single sample stream is shared: every channel of a frame
        # carries the same value.
        frames = np.repeat(self.quantized(), self.num_channels)
        return self.header() + encode(frames, self.bits_per_sample), frames

    def to_bytes(self) -> bytes:
        """Return the complete WAVE file as bytes."""
        data, _values = self._render()
        return data

    def save(self, dest: Destination) -> list[int]:
        """Serialize to `dest` (a path or binary writer) in a single write.

        Returns the quantized values in payload order, one per channel for
        each sample. Calling it again with unchanged samples produces
        identical bytes.
        """
        data, values = self._render()
        write_bytes(dest, data)
        logger.debug(
            "Saved WAVE: channels=%s rate=%s bits=%s samples=%s bytes=%s",
            self.num_channels,
            self.sample_rate,
            self.bits_per_sample,
            self.sample_count,
            len(data),
        )
        return [int(v) for v in values]


def encode_wave(
    samples: Iterable[float] | np.ndarray,
    *,
    num_channels: int = 1,
    sample_rate: int = 44100,
    bits_per_sample: int = 16,
    dest: Optional[Destination] = None,
    strict: bool = False,
) -> bytes:
    """One-shot helper: encode `samples`, optionally writing them to `dest`."""
    encoder = WaveEncoder(num_channels, sample_rate, bits_per_sample, strict=strict)
    encoder.samples = samples
    data = encoder.to_bytes()
    if dest is not None:
        write_bytes(dest, data)
    return data
