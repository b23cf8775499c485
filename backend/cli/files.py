"""
File-system glue for the CLI.

Responsibilities:
- Suggest default output paths
- Read input files and write output files
- Create missing output directories

Non-responsibilities:
- No codec logic (bytes in, bytes out)
- No error presentation; OSError propagates to the caller
"""

from __future__ import annotations

import os
from pathlib import Path

from constants import DECODED_DEFAULT_FILENAME, DECODED_FALLBACK_SUFFIX, WAV_SUFFIX


def suggest_wav_path(input_path: str | os.PathLike[str]) -> Path:
    """
    Default WAV destination: the input path with ".wav" appended.

    "notes.txt" -> "notes.txt.wav"
    """
    path = Path(input_path)
    return path.with_name(path.name + WAV_SUFFIX)


def suggest_decoded_path(wav_path: str | os.PathLike[str]) -> Path:
    """
    Default decode destination: the WAV path with a trailing ".wav" removed.

    "notes.txt.wav" -> "notes.txt"
    "clip.WAV"      -> "clip"
    "clip.bin"      -> "clip.bin.decoded"
    """
    path = Path(wav_path)
    name = path.name

    if name.lower().endswith(WAV_SUFFIX) and len(name) > len(WAV_SUFFIX):
        return path.with_name(name[: -len(WAV_SUFFIX)])

    return path.with_name(name + DECODED_FALLBACK_SUFFIX)


def resolve_decoded_output(
    output_path: str | os.PathLike[str],
    default_name: str = DECODED_DEFAULT_FILENAME,
) -> Path:
    """
    Turn a directory destination into a file inside it.

    A path that is an existing directory, or that is written with a
    trailing separator, receives `default_name`. Anything else is
    returned unchanged.
    """
    raw = os.fspath(output_path)
    path = Path(raw)

    # A missing extension does not mark a directory: the default decode
    # target for "clip.wav" is the extension-less file "clip".
    if raw.endswith(("/", os.sep)) or path.is_dir():
        return path / default_name

    return path


def read_input(path: str | os.PathLike[str]) -> bytes:
    return Path(path).read_bytes()


def write_output(path: str | os.PathLike[str], data: bytes) -> Path:
    """
    Write `data` to `path`, creating parent directories as needed.

    Returns:
        The path written.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return target
