"""
Bytes <-> WAV converter.

Encode:
    payload bytes
      -> one int16 sample per byte       (audio.sample_codec)
      -> PCM16 little-endian             (audio.pcm)
      -> 44-byte header + PCM            (protocol.wav_header)

Decode:
    WAV bytes
      -> locate data chunk               (protocol.wav_header)
      -> int16 samples                   (audio.pcm)
      -> payload bytes                   (audio.sample_codec)

Both directions are pure functions of their input buffer: no shared state,
safe to call concurrently on independent buffers. Errors propagate to the
caller; nothing is returned on failure.
"""

from __future__ import annotations

from typing import Any

from audio.pcm import pcm16le_to_samples, samples_to_pcm16le
from audio.sample_codec import bytes_to_samples, samples_to_bytes
from codec.payload import StructuredPayload, coerce_payload, reinterpret_structured
from constants import AUDIO_FORMAT_V1, AudioFormat, wav_file_size
from observability.metrics import timed
from protocol.wav_header import build_header, parse_header


def encode_to_wav(data: bytes, *, fmt: AudioFormat = AUDIO_FORMAT_V1) -> bytes:
    """
    Encode raw bytes as a WAV file of exactly 44 + 2 * len(data) bytes.

    Raises:
        FormatError if the payload is too large for the u32 size fields.
    """
    details = {"payload_bytes": len(data), "wav_bytes": wav_file_size(len(data))}

    with timed("wav_encode", details=details):
        # Size limit is enforced before any sample conversion
        header = build_header(len(data) * fmt.block_align, fmt=fmt)

        samples = bytes_to_samples(data)
        wav = header + samples_to_pcm16le(samples)

    return wav


def decode_from_wav(
    wav: bytes,
    *,
    strict: bool = False,
    fmt: AudioFormat = AUDIO_FORMAT_V1,
) -> bytes:
    """
    Recover the raw payload bytes from a WAV buffer.

    Permissive mode (default) trusts the 44-byte layout: a header-only or
    shorter buffer yields b"", and a trailing odd byte is dropped.

    Raises:
        MalformedHeaderError (strict mode only).
    """
    with timed("wav_decode", details={"wav_bytes": len(wav), "strict": strict}) as details:
        info = parse_header(wav, strict=strict, fmt=fmt)

        pcm = wav[info.data_offset : info.data_offset + info.data_size]
        data = samples_to_bytes(pcm16le_to_samples(pcm))

        details["payload_bytes"] = len(data)

    return data


class DataToWavConverter:
    """
    Convenience wrapper bundling the format and header strictness.

    Stateless beyond its constructor arguments; one instance may be shared.
    """

    def __init__(
        self,
        *,
        fmt: AudioFormat = AUDIO_FORMAT_V1,
        strict: bool = False,
    ) -> None:
        self._fmt = fmt
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def encode(self, data: Any) -> bytes:
        """
        Encode bytes, text, or a JSON-serializable object.
        """
        return encode_to_wav(coerce_payload(data), fmt=self._fmt)

    def decode(self, wav: bytes) -> bytes:
        return decode_from_wav(wav, strict=self._strict, fmt=self._fmt)

    def decode_structured(self, wav: bytes) -> StructuredPayload:
        """
        Decode, then reinterpret the payload as JSON or text.
        """
        return reinterpret_structured(self.decode(wav))
