# pylint: disable=missing-module-docstring,missing-function-docstring

import dataclasses

import pytest

from config import AppConfig


def test_defaults_from_empty_environment():
    config = AppConfig.load_from_env({})

    assert config.env == "dev"
    assert config.enable_json_logs is False
    assert config.strict_header is False
    assert config.decoded_default_name == "decoded_output.txt"


def test_flags_enabled_by_one():
    config = AppConfig.load_from_env({
        "ENV": "prod",
        "ENABLE_JSON_LOGS": "1",
        "WAV_STRICT_HEADER": "1",
        "WAV_DECODED_DEFAULT_NAME": "payload.bin",
    })

    assert config.env == "prod"
    assert config.enable_json_logs is True
    assert config.strict_header is True
    assert config.decoded_default_name == "payload.bin"


def test_flags_other_values_are_false():
    config = AppConfig.load_from_env({"ENABLE_JSON_LOGS": "true"})

    assert config.enable_json_logs is False


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("WAV_STRICT_HEADER", "1")

    assert AppConfig.load_from_env().strict_header is True


def test_config_is_immutable():
    config = AppConfig.load_from_env({})

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.env = "other"  # type: ignore[misc]
