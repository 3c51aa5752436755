"""Canonical RIFF/WAVE (PCM) header layout.

The header is always 44 bytes:

    0   "RIFF"          ChunkID
    4   u32 LE          ChunkSize (36 + data size)
    8   "WAVE"          Format
    12  "fmt "          Subchunk1ID
    16  u32 LE          Subchunk1Size (16 for PCM)
    20  u16 LE          AudioFormat (1 = PCM)
    22  u16 LE          NumChannels
    24  u32 LE          SampleRate
    28  u32 LE          ByteRate
    32  u16 LE          BlockAlign
    34  u16 LE          BitsPerSample
    36  "data"          Subchunk2ID
    40  u32 LE          Subchunk2Size (data size)
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from pcmwave.errors import WaveFormatError


CHUNK_ID = b"RIFF"
FORMAT = b"WAVE"
SUB_CHUNK1_ID = b"fmt "
SUB_CHUNK1_SIZE = 16
AUDIO_FORMAT_PCM = 1
SUB_CHUNK2_ID = b"data"

# Bytes counted by ChunkSize before the data payload.
CHUNK_SIZE_BASE = 36
HEADER_SIZE = 44

SUPPORTED_BIT_DEPTHS = (8, 16)

_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")

U16_MAX = 0xFFFF
U32_MAX = 0xFFFFFFFF


def bytes_per_sample(bits_per_sample: int) -> int:
    return int(bits_per_sample) // 8


def byte_rate(*, sample_rate: int, num_channels: int, bits_per_sample: int) -> int:
    return int(sample_rate) * int(num_channels) * bytes_per_sample(bits_per_sample)


def block_align(*, num_channels: int, bits_per_sample: int) -> int:
    return int(num_channels) * bytes_per_sample(bits_per_sample)


def data_size(*, sample_count: int, num_channels: int, bits_per_sample: int) -> int:
    """Size of the data chunk as declared in the header.

    Every sample is written once per channel, so one sample is one frame.
    """
    return int(sample_count) * block_align(
        num_channels=num_channels, bits_per_sample=bits_per_sample
    )


@dataclass(frozen=True)
class WaveHeader:
    num_channels: int
    sample_rate: int
    bits_per_sample: int
    data_size: int

    @property
    def byte_rate(self) -> int:
        return byte_rate(
            sample_rate=self.sample_rate,
            num_channels=self.num_channels,
            bits_per_sample=self.bits_per_sample,
        )

    @property
    def block_align(self) -> int:
        return block_align(
            num_channels=self.num_channels, bits_per_sample=self.bits_per_sample
        )

    @property
    def chunk_size(self) -> int:
        return CHUNK_SIZE_BASE + self.data_size

    def validate(self) -> None:
        """Raise WaveFormatError if any field overflows its u16/u32 slot."""
        limits = (
            ("num_channels", self.num_channels, U16_MAX),
            ("sample_rate", self.sample_rate, U32_MAX),
            ("byte_rate", self.byte_rate, U32_MAX),
            ("block_align", self.block_align, U16_MAX),
            ("chunk_size", self.chunk_size, U32_MAX),
        )
        for name, value, maximum in limits:
            if not 0 <= value <= maximum:
                raise WaveFormatError(
                    f"{name} {value} does not fit the header (max {maximum})"
                )

    def pack(self) -> bytes:
        """Return the 44-byte little-endian header."""
        self.validate()
        return _HEADER_STRUCT.pack(
            CHUNK_ID,
            self.chunk_size,
            FORMAT,
            SUB_CHUNK1_ID,
            SUB_CHUNK1_SIZE,
            AUDIO_FORMAT_PCM,
            self.num_channels,
            self.sample_rate,
            self.byte_rate,
            self.block_align,
            self.bits_per_sample,
            SUB_CHUNK2_ID,
            self.data_size,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "chunk_id": CHUNK_ID.decode("ascii"),
            "chunk_size": self.chunk_size,
            "format": FORMAT.decode("ascii"),
            "subchunk1_id": SUB_CHUNK1_ID.decode("ascii"),
            "subchunk1_size": SUB_CHUNK1_SIZE,
            "audio_format": AUDIO_FORMAT_PCM,
            "num_channels": self.num_channels,
            "sample_rate": self.sample_rate,
            "byte_rate": self.byte_rate,
            "block_align": self.block_align,
            "bits_per_sample": self.bits_per_sample,
            "subchunk2_id": SUB_CHUNK2_ID.decode("ascii"),
            "subchunk2_size": self.data_size,
        }
