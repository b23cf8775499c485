"""
Application configuration.

Responsibilities:
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No codec logic
- No format constants
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from constants import DECODED_DEFAULT_FILENAME


def _env_flag(environ: Mapping[str, str], name: str, default: str) -> bool:
    return environ.get(name, default) == "1"


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Constructed once at process startup.
    Passed downward to the CLI; the codec itself takes plain arguments.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool

    # ------------------------------------------------------------------
    # Codec
    # ------------------------------------------------------------------

    strict_header: bool

    # ------------------------------------------------------------------
    # Tool layer
    # ------------------------------------------------------------------

    decoded_default_name: str

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env(environ: Mapping[str, str] | None = None) -> AppConfig:
        """
        Load configuration from environment variables.

        `environ` defaults to os.environ; tests pass a plain dict.
        """
        if environ is None:
            environ = os.environ

        return AppConfig(
            env=environ.get("ENV", "dev"),
            enable_json_logs=_env_flag(environ, "ENABLE_JSON_LOGS", "0"),
            strict_header=_env_flag(environ, "WAV_STRICT_HEADER", "0"),
            decoded_default_name=environ.get(
                "WAV_DECODED_DEFAULT_NAME", DECODED_DEFAULT_FILENAME
            ),
        )
