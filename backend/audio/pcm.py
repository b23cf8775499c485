"""PCM16 little-endian packing utilities."""
import numpy as np


def samples_to_pcm16le(samples: np.ndarray) -> bytes:
    """
    Serialize an int16 sample buffer as PCM16 little-endian bytes.

    Byte order is fixed regardless of host endianness.
    """
    audio_i16 = np.asarray(samples, dtype=np.int16)
    return audio_i16.astype("<i2", copy=False).tobytes()


def pcm16le_to_samples(pcm_bytes: bytes) -> np.ndarray:
    """
    Convert PCM16 little-endian mono bytes to an int16 sample buffer.

    No resampling. No channel mixing.
    """
    if len(pcm_bytes) % 2 != 0:
        # Truncated sample; dropped rather than padded.
        pcm_bytes = pcm_bytes[: len(pcm_bytes) - 1]

    audio_i16 = np.frombuffer(pcm_bytes, dtype="<i2")  # little-endian int16
    return audio_i16.astype(np.int16)
