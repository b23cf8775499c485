"""
Command-line front-end for the bytes <-> WAV codec.

Responsibilities:
- Parse arguments / run the interactive Convert / Decode / Exit menu
- Resolve default output paths and read/write files (cli.files)
- Present codec and I/O errors to the operator

Non-responsibilities:
- No sample mapping or header logic (codec.converter)

A failed action never terminates the interactive loop; one-shot
subcommands report the failure and exit with status 1.

Usage:

    wavcodec encode notes.txt                 # -> notes.txt.wav
    wavcodec decode notes.txt.wav -o out/     # -> out/decoded_output.txt
    wavcodec decode clip.wav --strict --structured
    wavcodec                                  # interactive menu
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Callable, Sequence, TextIO

from cli.files import (
    read_input,
    resolve_decoded_output,
    suggest_decoded_path,
    suggest_wav_path,
    write_output,
)
from codec.converter import DataToWavConverter
from config import AppConfig
from constants import DECODED_DEFAULT_FILENAME, samples_to_seconds
from observability import logger
from observability.logger import log_event
from protocol.wav_header import WavCodecError

PromptFn = Callable[[str], str]

MENU_CONVERT = "Convert file to WAV"
MENU_DECODE = "Decode WAV file"
MENU_EXIT = "Exit"

MENU_CHOICES: tuple[str, ...] = (MENU_CONVERT, MENU_DECODE, MENU_EXIT)


# ------------------------------------------------------------------
# Actions
# ------------------------------------------------------------------

def run_encode(
    converter: DataToWavConverter,
    input_path: str | Path,
    output_path: str | Path | None = None,
) -> Path:
    """
    Encode `input_path` into a WAV file and return the path written.
    """
    data = read_input(input_path)
    wav = converter.encode(data)

    target = Path(output_path) if output_path else suggest_wav_path(input_path)
    written = write_output(target, wav)

    log_event({
        "ts_ms": _now_ms(),
        "event_type": "WAV_ENCODED",
        "input_path": str(input_path),
        "output_path": str(written),
        "payload_bytes": len(data),
        "wav_bytes": len(wav),
        "duration_s": round(samples_to_seconds(len(data)), 3),
    })
    return written


def run_decode(
    converter: DataToWavConverter,
    input_path: str | Path,
    output_path: str | Path | None = None,
    *,
    structured: bool = False,
    default_name: str = DECODED_DEFAULT_FILENAME,
) -> Path:
    """
    Decode the WAV at `input_path` and return the path written.

    With `structured`, JSON payloads are written pretty-printed and other
    payloads as UTF-8 text; otherwise the raw bytes are written.
    """
    wav = read_input(input_path)

    if structured:
        payload = converter.decode_structured(wav)
        data = payload.to_bytes()
        kind = payload.kind
    else:
        data = converter.decode(wav)
        kind = "raw"

    if output_path:
        target = resolve_decoded_output(output_path, default_name)
    else:
        target = suggest_decoded_path(input_path)

    written = write_output(target, data)

    log_event({
        "ts_ms": _now_ms(),
        "event_type": "WAV_DECODED",
        "input_path": str(input_path),
        "output_path": str(written),
        "wav_bytes": len(wav),
        "payload_bytes": len(data),
        "kind": kind,
        "strict": converter.strict,
    })
    return written


def _report_failure(action: str, exc: Exception, err: TextIO) -> None:
    print(f"Error {action}: {exc}", file=err)
    log_event({
        "ts_ms": _now_ms(),
        "event_type": "CLI_ACTION_FAILED",
        "action": action,
        "error": f"{type(exc).__name__}: {exc}",
    })


# ------------------------------------------------------------------
# Interactive loop
# ------------------------------------------------------------------

def _ask(prompt: PromptFn, message: str, default: str | None = None) -> str:
    suffix = f" [{default}]" if default else ""
    answer = prompt(f"{message}{suffix}: ").strip()
    if not answer and default:
        return default
    return answer


def _choose_action(prompt: PromptFn, out: TextIO) -> str | None:
    print("What would you like to do?", file=out)
    for index, choice in enumerate(MENU_CHOICES, start=1):
        print(f"  {index}) {choice}", file=out)

    answer = prompt("> ").strip()

    if answer.isdigit() and 1 <= int(answer) <= len(MENU_CHOICES):
        return MENU_CHOICES[int(answer) - 1]

    for choice in MENU_CHOICES:
        if answer.lower() == choice.lower():
            return choice

    return None


def interactive_loop(
    converter: DataToWavConverter,
    config: AppConfig,
    *,
    prompt: PromptFn = input,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> None:
    """
    Run the Convert / Decode / Exit menu until Exit or end of input.
    """
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err

    while True:
        try:
            action = _choose_action(prompt, out)
        except (EOFError, KeyboardInterrupt):
            print(file=out)
            return

        if action is None:
            print("Please pick one of the listed options.", file=err)
            continue

        if action == MENU_EXIT:
            return

        try:
            if action == MENU_CONVERT:
                source = _ask(prompt, "Enter the path to the file you want to convert")
                if not source:
                    print("No input path given.", file=err)
                    continue
                target = _ask(prompt, "Save WAV to", str(suggest_wav_path(source)))
                written = run_encode(converter, source, target)
                print(f"Successfully converted! Saved to: {written}", file=out)

            else:
                source = _ask(prompt, "Enter the path to the WAV file")
                if not source:
                    print("No input path given.", file=err)
                    continue
                target = _ask(
                    prompt,
                    "Save decoded file to (file or directory)",
                    str(suggest_decoded_path(source)),
                )
                written = run_decode(
                    converter,
                    source,
                    target,
                    default_name=config.decoded_default_name,
                )
                print(f"Successfully decoded! Saved to: {written}", file=out)

        except (EOFError, KeyboardInterrupt):
            print(file=out)
            return

        except (WavCodecError, OSError, ValueError) as exc:
            verb = "converting file" if action == MENU_CONVERT else "decoding file"
            _report_failure(verb, exc, err)


# ------------------------------------------------------------------
# Argument parsing
# ------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wavcodec",
        description="Store arbitrary files as 16-bit mono WAV audio and recover them.",
    )
    subparsers = parser.add_subparsers(dest="command")

    enc = subparsers.add_parser("encode", help="convert a file to WAV")
    enc.add_argument("input", help="file to convert")
    enc.add_argument(
        "-o", "--output",
        help="destination WAV (default: <input>.wav)",
    )

    dec = subparsers.add_parser("decode", help="recover a file from WAV")
    dec.add_argument("input", help="WAV file to decode")
    dec.add_argument(
        "-o", "--output",
        help="destination file or directory (default: input without .wav)",
    )
    dec.add_argument(
        "--strict",
        action="store_true",
        help="validate header tags and sizes before decoding",
    )
    dec.add_argument(
        "--structured",
        action="store_true",
        help="write JSON payloads pretty-printed and others as UTF-8 text",
    )

    subparsers.add_parser("interactive", help="menu-driven mode (default)")

    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    config: AppConfig | None = None,
    prompt: PromptFn = input,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err

    args = build_parser().parse_args(argv)

    if config is None:
        config = AppConfig.load_from_env()
    logger.set_enabled(config.enable_json_logs)

    strict = config.strict_header or bool(getattr(args, "strict", False))
    converter = DataToWavConverter(strict=strict)

    if args.command in (None, "interactive"):
        interactive_loop(converter, config, prompt=prompt, out=out, err=err)
        return 0

    try:
        if args.command == "encode":
            written = run_encode(converter, args.input, args.output)
            print(f"Successfully converted! Saved to: {written}", file=out)
        else:
            written = run_decode(
                converter,
                args.input,
                args.output,
                structured=args.structured,
                default_name=config.decoded_default_name,
            )
            print(f"Successfully decoded! Saved to: {written}", file=out)
    except (WavCodecError, OSError, ValueError) as exc:
        verb = "converting file" if args.command == "encode" else "decoding file"
        _report_failure(verb, exc, err)
        return 1

    return 0


def _now_ms() -> int:
    return int(time.time() * 1000)


if __name__ == "__main__":
    sys.exit(main())
