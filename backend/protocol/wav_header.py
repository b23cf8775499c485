# backend/protocol/wav_header.py
"""
Canonical WAV header helpers.

Layout (44 bytes, all integers little-endian):

    0   4  "RIFF"
    4   4  ChunkSize      (u32) = file size - 8
    8   4  "WAVE"
    12  4  "fmt "
    16  4  Subchunk1Size  (u32) = 16
    20  2  AudioFormat    (u16) = 1 (PCM)
    22  2  NumChannels    (u16)
    24  4  SampleRate     (u32)
    28  4  ByteRate       (u32)
    32  2  BlockAlign     (u16)
    34  2  BitsPerSample  (u16)
    36  4  "data"
    40  4  Subchunk2Size  (u32) = data size

Usage example:

    header = build_header(len(pcm_bytes))
    wav = header + pcm_bytes

    info = parse_header(wav)
    pcm_bytes = wav[info.data_offset : info.data_offset + info.data_size]

Parsing is permissive by default: it assumes the 44-byte layout and derives
the data size from the buffer length without reading any field. Pass
`strict=True` to validate tags, format fields and declared sizes.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from constants import (
    AUDIO_FORMAT_V1,
    AudioFormat,
    U32_MAX,
    WAV_DATA_TAG,
    WAV_FMT_CHUNK_SIZE,
    WAV_FMT_TAG,
    WAV_FORMAT_PCM,
    WAV_HEADER_BYTES,
    WAV_MAX_DATA_BYTES,
    WAV_RIFF_PREAMBLE_BYTES,
    WAV_RIFF_SIZE_OVERHEAD,
    WAV_RIFF_TAG,
    WAV_WAVE_TAG,
)


# -------------------------
# Exceptions
# -------------------------

class WavCodecError(Exception):
    """Base class for WAV codec errors."""


class FormatError(WavCodecError):
    """
    Raised when a payload size cannot be represented in the header.

    The RIFF and data size fields are u32; a data chunk larger than
    `WAV_MAX_DATA_BYTES` (or a negative size) has no valid encoding.
    """


class MalformedHeaderError(WavCodecError):
    """
    Raised by strict parsing when a buffer is not a canonical WAV file.

    Covers buffers shorter than the header, mismatched chunk tags,
    unexpected format fields, and declared sizes that disagree with the
    bytes actually present.
    """


# -------------------------
# Layout
# -------------------------

# tag, size, tag, tag, fmt size, format, channels, rate, byte rate, align, bits, tag, size
_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")

assert _HEADER_STRUCT.size == WAV_HEADER_BYTES


@dataclass(frozen=True)
class WavHeaderInfo:
    """
    Location of the sample data inside a WAV buffer.

    data_offset:
        Byte offset of the first sample. Always WAV_HEADER_BYTES.

    data_size:
        Number of sample bytes following the header.
    """
    data_offset: int
    data_size: int


# -------------------------
# Build
# -------------------------

def build_header(data_size: int, *, fmt: AudioFormat = AUDIO_FORMAT_V1) -> bytes:
    """
    Build the 44-byte header for a data chunk of `data_size` bytes.
    """
    if data_size < 0:
        raise FormatError(f"Negative data size: {data_size}")

    if data_size > WAV_MAX_DATA_BYTES:
        raise FormatError(
            f"Data size {data_size} exceeds u32 header limit {WAV_MAX_DATA_BYTES}"
        )

    return _HEADER_STRUCT.pack(
        WAV_RIFF_TAG,
        data_size + WAV_RIFF_SIZE_OVERHEAD,
        WAV_WAVE_TAG,
        WAV_FMT_TAG,
        WAV_FMT_CHUNK_SIZE,
        WAV_FORMAT_PCM,
        fmt.channels,
        fmt.sample_rate_hz,
        fmt.byte_rate,
        fmt.block_align,
        fmt.bits_per_sample,
        WAV_DATA_TAG,
        data_size,
    )


# -------------------------
# Parse
# -------------------------

def parse_header(
    buffer: bytes,
    *,
    strict: bool = False,
    fmt: AudioFormat = AUDIO_FORMAT_V1,
) -> WavHeaderInfo:
    """
    Locate the sample data in `buffer`.

    Permissive mode never raises: a buffer shorter than the header is
    treated as carrying no samples.
    """
    if strict:
        _validate_strict(buffer, fmt)

    data_size = max(0, len(buffer) - WAV_HEADER_BYTES)

    return WavHeaderInfo(data_offset=WAV_HEADER_BYTES, data_size=data_size)


def _validate_strict(buffer: bytes, fmt: AudioFormat) -> None:
    if len(buffer) < WAV_HEADER_BYTES:
        raise MalformedHeaderError(
            f"WAV length {len(buffer)} < header length {WAV_HEADER_BYTES}"
        )

    (
        riff_tag,
        riff_size,
        wave_tag,
        fmt_tag,
        fmt_size,
        audio_format,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        bits_per_sample,
        data_tag,
        data_size,
    ) = _HEADER_STRUCT.unpack_from(buffer, 0)

    for name, actual, expected in (
        ("ChunkID", riff_tag, WAV_RIFF_TAG),
        ("Format", wave_tag, WAV_WAVE_TAG),
        ("Subchunk1ID", fmt_tag, WAV_FMT_TAG),
        ("Subchunk2ID", data_tag, WAV_DATA_TAG),
    ):
        if actual != expected:
            raise MalformedHeaderError(f"{name} {actual!r} != {expected!r}")

    for name, actual, expected in (
        ("Subchunk1Size", fmt_size, WAV_FMT_CHUNK_SIZE),
        ("AudioFormat", audio_format, WAV_FORMAT_PCM),
        ("NumChannels", channels, fmt.channels),
        ("SampleRate", sample_rate, fmt.sample_rate_hz),
        ("ByteRate", byte_rate, fmt.byte_rate),
        ("BlockAlign", block_align, fmt.block_align),
        ("BitsPerSample", bits_per_sample, fmt.bits_per_sample),
    ):
        if actual != expected:
            raise MalformedHeaderError(f"{name} {actual} != {expected}")

    actual_riff_size = len(buffer) - WAV_RIFF_PREAMBLE_BYTES
    if riff_size != actual_riff_size or actual_riff_size > U32_MAX:
        raise MalformedHeaderError(
            f"ChunkSize {riff_size} != actual {actual_riff_size}"
        )

    remaining = len(buffer) - WAV_HEADER_BYTES
    if data_size != remaining:
        raise MalformedHeaderError(
            f"Subchunk2Size {data_size} != remaining bytes {remaining}"
        )

    if data_size % fmt.block_align != 0:
        raise MalformedHeaderError(
            f"Subchunk2Size {data_size} is not a multiple of BlockAlign {fmt.block_align}"
        )
