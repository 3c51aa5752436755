"""Exception types raised by pcmwave."""

from __future__ import annotations


class PcmWaveError(Exception):
    pass


class UnsupportedBitDepthError(PcmWaveError, ValueError):
    def __init__(self, bits_per_sample: object) -> None:
        self.bits_per_sample = bits_per_sample
        super().__init__(
            f"unsupported bits_per_sample: {bits_per_sample!r} (expected 8 or 16)"
        )


class OutOfRangeSampleError(PcmWaveError, ValueError):
    """Raised in strict mode when a sample falls outside [-1.0, 1.0]."""

    def __init__(self, count: int, first_index: int, first_value: float) -> None:
        self.count = count
        self.first_index = first_index
        self.first_value = first_value
        super().__init__(
            f"{count} sample(s) outside [-1.0, 1.0]; "
            f"first at index {first_index}: {first_value!r}"
        )


class WaveFormatError(PcmWaveError, ValueError):
    """A format value or derived size does not fit its header field."""


class WaveIOError(PcmWaveError, OSError):
    pass


class PcmWaveConfigError(PcmWaveError, RuntimeError):
    pass
