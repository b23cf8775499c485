# pylint: disable=missing-module-docstring,missing-function-docstring

import json
import struct
import wave

import pytest

from codec import converter as converter_mod
from codec.converter import DataToWavConverter, decode_from_wav, encode_to_wav
from constants import wav_file_size
from observability import logger
from protocol import wav_header
from protocol.wav_header import FormatError, MalformedHeaderError, build_header, parse_header


@pytest.fixture(autouse=True)
def captured_logs(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    captured: list[str] = []
    monkeypatch.setattr(logger, "_enabled", True)
    monkeypatch.setattr(logger, "_print", captured.append)
    return captured


PAYLOADS = [
    b"",
    b"\x00",
    b"hello world",
    bytes(range(256)),
    bytes(range(256)) * 7 + b"\xff",
]


# ---------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------

@pytest.mark.parametrize("payload", PAYLOADS)
def test_wav_length_is_header_plus_two_bytes_per_byte(payload: bytes):
    assert len(encode_to_wav(payload)) == 44 + 2 * len(payload)
    assert len(encode_to_wav(payload)) == wav_file_size(len(payload))


@pytest.mark.parametrize("payload", PAYLOADS)
def test_declared_sizes_match_payload(payload: bytes):
    wav = encode_to_wav(payload)

    assert parse_header(wav).data_size == 2 * len(payload)
    assert struct.unpack_from("<I", wav, 40)[0] == 2 * len(payload)
    assert struct.unpack_from("<I", wav, 4)[0] == len(wav) - 8


def test_encode_is_deterministic():
    payload = bytes(range(256)) * 3

    assert encode_to_wav(payload) == encode_to_wav(payload)


def test_encoded_file_passes_strict_parse():
    wav = encode_to_wav(b"strict me")

    assert parse_header(wav, strict=True).data_size == 18


def test_encode_writes_pinned_boundary_samples():
    wav = encode_to_wav(b"\x00\xff")

    assert struct.unpack_from("<hh", wav, 44) == (-32768, 32767)


# ---------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------

@pytest.mark.parametrize("payload", PAYLOADS)
def test_roundtrip_recovers_bytes(payload: bytes):
    assert decode_from_wav(encode_to_wav(payload)) == payload


def test_header_only_wav_decodes_to_empty():
    wav = encode_to_wav(b"")

    assert len(wav) == 44
    assert decode_from_wav(wav) == b""
    assert decode_from_wav(wav, strict=True) == b""


def test_short_buffer_permissive_is_empty():
    assert decode_from_wav(b"RIFF\x00\x00") == b""
    assert decode_from_wav(b"") == b""


def test_short_buffer_strict_raises():
    with pytest.raises(MalformedHeaderError):
        decode_from_wav(b"RIFF\x00\x00", strict=True)


def test_permissive_ignores_garbage_header():
    wav = b"\xaa" * 44 + encode_to_wav(b"abc")[44:]

    assert decode_from_wav(wav) == b"abc"


def test_permissive_drops_odd_trailing_byte():
    wav = encode_to_wav(b"xyz") + b"\x01"

    assert decode_from_wav(wav) == b"xyz"


def test_decode_returns_raw_bytes_even_for_json():
    payload = b'{"a": 1}'

    assert decode_from_wav(encode_to_wav(payload)) == payload


# ---------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------

def test_encode_and_decode_emit_timers(captured_logs: list[str]):
    decode_from_wav(encode_to_wav(b"abcd"))

    events = [json.loads(line) for line in captured_logs]
    metrics = [e["metric"] for e in events if e["event_type"] == "METRIC_TIMER"]

    assert metrics == ["wav_encode", "wav_decode"]
    assert events[0]["details"] == {"payload_bytes": 4, "wav_bytes": 52}
    assert events[1]["details"]["payload_bytes"] == 4


def test_failed_decode_still_emits_timer(captured_logs: list[str]):
    with pytest.raises(MalformedHeaderError):
        decode_from_wav(b"", strict=True)

    assert len(captured_logs) == 1
    assert json.loads(captured_logs[0])["metric"] == "wav_decode"


# ---------------------------------------------------------------------
# Converter wrapper
# ---------------------------------------------------------------------

def test_converter_accepts_text_and_objects():
    converter = DataToWavConverter()

    assert converter.decode(converter.encode("héllo")) == "héllo".encode("utf-8")
    assert converter.decode(converter.encode({"a": [1, 2]})) == b'{"a":[1,2]}'


def test_converter_strict_flag():
    assert DataToWavConverter().strict is False

    converter = DataToWavConverter(strict=True)
    with pytest.raises(MalformedHeaderError):
        converter.decode(b"\x00" * 10)


def test_converter_structured_decode():
    converter = DataToWavConverter()

    json_payload = converter.decode_structured(converter.encode({"k": "v"}))
    text_payload = converter.decode_structured(converter.encode("plain text"))

    assert json_payload.kind == "json"
    assert json_payload.value == {"k": "v"}
    assert text_payload.kind == "text"
    assert text_payload.value == "plain text"


# ---------------------------------------------------------------------
# Playability
# ---------------------------------------------------------------------

def test_encoded_file_opens_as_standard_wav(tmp_path):
    path = tmp_path / "payload.wav"
    path.write_bytes(encode_to_wav(b"0123456789"))

    with wave.open(str(path), "rb") as wf:
        assert wf.getframerate() == 44_100
        assert wf.getnchannels() == 1
        assert wf.getsampwidth() == 2
        assert wf.getnframes() == 10
        frames = wf.readframes(10)

    assert decode_from_wav(build_header(len(frames)) + frames) == b"0123456789"


# ---------------------------------------------------------------------
# Size limits
# ---------------------------------------------------------------------

def test_oversize_payload_fails_before_sample_conversion(monkeypatch: pytest.MonkeyPatch):
    def fail_if_called(_: bytes):
        raise AssertionError("samples converted for an unencodable payload")

    monkeypatch.setattr(wav_header, "WAV_MAX_DATA_BYTES", 4)
    monkeypatch.setattr(converter_mod, "bytes_to_samples", fail_if_called)

    with pytest.raises(FormatError):
        encode_to_wav(b"abc")
