"""pcmwave - buffer normalized samples and write canonical PCM WAVE files."""

from pcmwave.errors import (
    OutOfRangeSampleError,
    PcmWaveConfigError,
    PcmWaveError,
    UnsupportedBitDepthError,
    WaveFormatError,
    WaveIOError,
)
from pcmwave.synth import silence, tone
from pcmwave.wave_file import WaveEncoder, encode_wave

__all__ = [
    "OutOfRangeSampleError",
    "PcmWaveConfigError",
    "PcmWaveError",
    "UnsupportedBitDepthError",
    "WaveEncoder",
    "WaveFormatError",
    "WaveIOError",
    "encode_wave",
    "silence",
    "tone",
]

__version__ = "0.1.0"
