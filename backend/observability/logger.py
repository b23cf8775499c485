"""
JSONL event logger.

- Write one JSON object per line
- Output to stderr (stdout stays free for CLI output)
- No buffering, no batching
- No side effects beyond logging
"""

from __future__ import annotations

import json
import sys
from typing import Any, Mapping, Callable


# ------------------------------------------------------------------
# Explicit output sink (patchable in tests)
# ------------------------------------------------------------------

def _stderr_print(line: str) -> None:
    sys.stderr.write(line + "\n")
    sys.stderr.flush()

_print: Callable[[str], None] = _stderr_print

# Matches the AppConfig.enable_json_logs default
_enabled: bool = False


def set_enabled(enabled: bool) -> None:
    """
    Turn event emission on or off for the whole process.

    Called once at startup from AppConfig.enable_json_logs.
    """
    global _enabled  # pylint: disable=global-statement
    _enabled = enabled


def is_enabled() -> bool:
    return _enabled


def log_event(event: Mapping[str, Any]) -> None:
    """
    Write a single JSONL event to the output sink.

    The caller is responsible for:
    - Supplying a fully-formed event dict
    - Including ts_ms and event_type

    This function:
    - Serializes to JSON
    - Writes exactly one line
    - Flushes immediately (no buffering)
    - Never raises
    """
    if not _enabled:
        return

    try:
        line = json.dumps(event, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        # Last-resort fallback; logging must never crash the codec
        fallback: dict[str, Any] = {
            "ts_ms": event.get("ts_ms"),
            "event_type": "LOGGER_SERIALIZATION_ERROR",
            "error": str(e),
            "original_event_repr": repr(event),
        }
        line = json.dumps(fallback, ensure_ascii=False, separators=(",", ":"))

    _print(line)
