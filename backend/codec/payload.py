"""
Payload coercion and structured reinterpretation.

Responsibilities:
- Turn caller-supplied data (bytes, text, JSON-like objects) into raw bytes
  before encoding.
- Optionally reinterpret decoded bytes as JSON or text.

Non-responsibilities:
- No WAV framing
- No sample mapping
- No file I/O

Reinterpretation is an explicit post-processing step. The core decode path
always returns raw bytes; callers opt in by calling `reinterpret_structured`
on its result.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal

StructuredKind = Literal["json", "text"]


def coerce_payload(data: Any) -> bytes:
    """
    Convert encoder input into raw bytes.

    - bytes / bytearray / memoryview: copied as-is
    - str: UTF-8
    - anything else: compact JSON, UTF-8

    Raises:
        TypeError / ValueError if the object is not JSON-serializable.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)

    if isinstance(data, str):
        return data.encode("utf-8")

    return json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


@dataclass(frozen=True)
class StructuredPayload:
    """
    Decoded payload after reinterpretation.

    kind:
        "json" if the text parsed as JSON, otherwise "text".

    value:
        Parsed JSON value, or the decoded string.
    """
    kind: StructuredKind
    value: Any

    def to_bytes(self) -> bytes:
        """Serialize for writing to disk (pretty JSON or UTF-8 text)."""
        if self.kind == "json":
            text = json.dumps(self.value, ensure_ascii=False, indent=2)
            return text.encode("utf-8")
        return str(self.value).encode("utf-8")


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"non-standard JSON constant: {name}")


def reinterpret_structured(raw: bytes) -> StructuredPayload:
    """
    Attempt to read decoded bytes as JSON, falling back to text.

    Invalid UTF-8 sequences are replaced with U+FFFD rather than raising.
    Never raises.
    """
    text = raw.decode("utf-8", errors="replace")

    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return StructuredPayload(kind="text", value=text)

    return StructuredPayload(kind="json", value=value)
