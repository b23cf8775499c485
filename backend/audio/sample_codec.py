"""
Byte <-> PCM16 sample mapping (pure).

Forward (encode), one sample per payload byte:

    sample = trunc( (b / 255) * 65535 - 32768 )

Inverse (decode):

    byte = floor( ((s + 32768) / 65535) * 255 + 0.5 )

The two directions round differently. The forward path truncates toward
zero (a float narrowed into an int16 slot); the inverse path rounds half
away from zero. Existing WAV files decode bit-exactly only with this pair,
so neither side may be changed to match the other.

Both directions are computed in IEEE double precision, in exactly the
operation order shown above. The vectorised helpers repeat the scalar
arithmetic element-wise with numpy and produce identical results.
"""

from __future__ import annotations

import math

import numpy as np

from constants import (
    BYTE_MAX,
    BYTE_MIN,
    PCM16_MAX,
    PCM16_MIN,
    PCM16_SPAN,
)

_INT16_MASK = 0xFFFF
_UINT8_MASK = 0xFF


# -------------------------
# Scalar mapping
# -------------------------

def encode_sample(value: int) -> int:
    """
    Map one payload byte to a signed 16-bit sample.

    Truncates toward zero, then wraps into the int16 range the way a
    narrowing store into an int16 slot would.

    Raises:
        ValueError if `value` is not a byte.
    """
    if value < BYTE_MIN or value > BYTE_MAX:
        raise ValueError(f"byte value out of range: {value}")

    scaled = (value / BYTE_MAX) * PCM16_SPAN + PCM16_MIN
    return _wrap_int16(int(scaled))


def decode_sample(sample: int) -> int:
    """
    Map one signed 16-bit sample back to a payload byte.

    Rounds half away from zero. The scaled operand is never negative, so
    this is floor(x + 0.5).

    Raises:
        ValueError if `sample` is outside the int16 range.
    """
    if sample < PCM16_MIN or sample > PCM16_MAX:
        raise ValueError(f"sample out of int16 range: {sample}")

    scaled = ((sample - PCM16_MIN) / PCM16_SPAN) * BYTE_MAX
    return math.floor(scaled + 0.5) & _UINT8_MASK


def _wrap_int16(value: int) -> int:
    return ((value - PCM16_MIN) & _INT16_MASK) + PCM16_MIN


def stable_byte_values() -> frozenset[int]:
    """
    Byte values that survive encode -> decode unchanged.

    Any value missing from this set is a lossy boundary of the scaling
    scheme, not a decoding bug.
    """
    return frozenset(
        b for b in range(BYTE_MIN, BYTE_MAX + 1)
        if decode_sample(encode_sample(b)) == b
    )


# -------------------------
# Vectorised mapping
# -------------------------

def bytes_to_samples(data: bytes) -> np.ndarray:
    """
    Apply `encode_sample` to every byte of `data`.

    Returns:
        int16 array with len(data) elements.
    """
    if not data:
        return np.zeros(0, dtype=np.int16)

    values = np.frombuffer(data, dtype=np.uint8).astype(np.float64)
    scaled = (values / BYTE_MAX) * PCM16_SPAN + PCM16_MIN

    truncated = np.trunc(scaled).astype(np.int64)
    wrapped = ((truncated - PCM16_MIN) & _INT16_MASK) + PCM16_MIN

    return wrapped.astype(np.int16)


def samples_to_bytes(samples: np.ndarray) -> bytes:
    """
    Apply `decode_sample` to every element of an int16 sample buffer.
    """
    samples = np.asarray(samples, dtype=np.int16)
    if samples.size == 0:
        return b""

    scaled = ((samples.astype(np.float64) - PCM16_MIN) / PCM16_SPAN) * BYTE_MAX
    rounded = np.floor(scaled + 0.5).astype(np.int64)

    return (rounded & _UINT8_MASK).astype(np.uint8).tobytes()
