"""
FORMAT CONSTANTS
----------------
Single source of truth for the WAV container produced and consumed by the codec.

Rules:
- If changing a value changes the bytes on disk, it belongs here.
- No magic numbers elsewhere in the codebase.
- Other modules MUST import from this file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

# =============================================================================
# Audio Format (PCM16 mono @ 44.1kHz)
# =============================================================================

AUDIO_SAMPLE_RATE_HZ: Final[int] = 44_100
AUDIO_CHANNELS: Final[int] = 1
AUDIO_BITS_PER_SAMPLE: Final[int] = 16
AUDIO_SAMPLE_WIDTH_BYTES: Final[int] = AUDIO_BITS_PER_SAMPLE // 8

AUDIO_BLOCK_ALIGN: Final[int] = AUDIO_CHANNELS * AUDIO_SAMPLE_WIDTH_BYTES
AUDIO_BYTE_RATE: Final[int] = AUDIO_SAMPLE_RATE_HZ * AUDIO_BLOCK_ALIGN

# =============================================================================
# Canonical RIFF/WAVE Header (44 bytes, little-endian)
# =============================================================================

WAV_RIFF_TAG: Final[bytes] = b"RIFF"
WAV_WAVE_TAG: Final[bytes] = b"WAVE"
WAV_FMT_TAG: Final[bytes] = b"fmt "
WAV_DATA_TAG: Final[bytes] = b"data"

WAV_FMT_CHUNK_SIZE: Final[int] = 16
WAV_FORMAT_PCM: Final[int] = 1

WAV_HEADER_BYTES: Final[int] = 44

# RIFF ChunkSize counts everything after its own 8-byte preamble
WAV_RIFF_PREAMBLE_BYTES: Final[int] = 8
WAV_RIFF_SIZE_OVERHEAD: Final[int] = WAV_HEADER_BYTES - WAV_RIFF_PREAMBLE_BYTES

U32_MAX: Final[int] = 2**32 - 1

# Largest data chunk whose RIFF ChunkSize still fits a u32 field
WAV_MAX_DATA_BYTES: Final[int] = U32_MAX - WAV_RIFF_SIZE_OVERHEAD

# =============================================================================
# Sample Mapping (byte <-> PCM16)
# =============================================================================

BYTE_MIN: Final[int] = 0
BYTE_MAX: Final[int] = 255

PCM16_MIN: Final[int] = -32_768
PCM16_MAX: Final[int] = 32_767

# Width of the full int16 range; byte 255 scales to exactly this value
PCM16_SPAN: Final[int] = PCM16_MAX - PCM16_MIN

# =============================================================================
# Tool Layer Defaults
# =============================================================================

WAV_SUFFIX: Final[str] = ".wav"
DECODED_FALLBACK_SUFFIX: Final[str] = ".decoded"
DECODED_DEFAULT_FILENAME: Final[str] = "decoded_output.txt"

# =============================================================================
# Helper Functions
# =============================================================================

def wav_file_size(payload_len: int) -> int:
    """
    Total WAV size in bytes for a payload of `payload_len` bytes.

    One PCM16 sample is emitted per payload byte.
    """
    return WAV_HEADER_BYTES + payload_len * AUDIO_SAMPLE_WIDTH_BYTES


def samples_to_seconds(num_samples: int) -> float:
    """
    Playback duration of `num_samples` mono samples.

    Defensive behavior:
    - Non-positive input returns 0.0.
    """
    if num_samples <= 0:
        return 0.0
    return num_samples / AUDIO_SAMPLE_RATE_HZ


# =============================================================================
# Convenience Bundles
# =============================================================================

@dataclass(frozen=True)
class AudioFormat:
    """
    Immutable bundle describing the PCM audio format.

    This is a convenience wrapper for passing format metadata around;
    it is NOT a second source of truth.
    """
    sample_rate_hz: int = AUDIO_SAMPLE_RATE_HZ
    channels: int = AUDIO_CHANNELS
    bits_per_sample: int = AUDIO_BITS_PER_SAMPLE

    @property
    def sample_width_bytes(self) -> int:
        """Return bytes per single-channel sample."""
        return self.bits_per_sample // 8

    @property
    def block_align(self) -> int:
        """Return bytes per sample frame (all channels)."""
        return self.channels * self.sample_width_bytes

    @property
    def byte_rate(self) -> int:
        """Return bytes of audio per second of playback."""
        return self.sample_rate_hz * self.block_align


AUDIO_FORMAT_V1: Final[AudioFormat] = AudioFormat()
