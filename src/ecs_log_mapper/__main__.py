"""Main CLI entry point for ecs-log-mapper.

This module provides a command-line interface using Typer to convert generic
JSON-lines log entries into ECS JSON lines:
1.  Loading configuration (environment / `.env`).
2.  Reading one JSON object per line from a file or stdin.
3.  Validating each object as a `LogEntry` (invalid lines are logged and skipped).
4.  Mapping and writing each entry through an `EcsDevice`.

Input line shape:
    {"time": "2024-05-01T12:00:00+02:00", "severity": "INFO", "message": "...",
     "progname": "web", "pid": 123, "attributes": {"http.request.method": "GET"}}
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Optional

import typer
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

# Load .env file if present (before any config access)
env_file = find_dotenv(usecwd=True)
if env_file:
    load_dotenv(env_file)
    logging.debug("Loaded environment from %s", env_file)

from .config import get_settings  # noqa: E402
from .device import EcsDevice  # noqa: E402
from .models.log_entry import LogEntry  # noqa: E402

app = typer.Typer(help="Convert structured log entries to Elastic Common Schema JSON")

logger = logging.getLogger(__name__)


@app.callback()
def main() -> None:  # pragma: no cover - simple callback
    """ecs-log-mapper CLI.

    Use a subcommand like 'convert' to run a conversion.
    """
    pass


def _convert_stream(source: BinaryIO, device: EcsDevice) -> tuple[int, int]:
    processed = 0
    skipped = 0
    for lineno, line in enumerate(source, start=1):
        if not line.strip():
            continue
        try:
            entry = LogEntry.model_validate(json.loads(line.decode("utf-8")))
        except UnicodeDecodeError as e:
            logger.warning("Line %d: not valid UTF-8 (%s); skipping", lineno, e.reason)
            skipped += 1
            continue
        except json.JSONDecodeError as e:
            logger.warning("Line %d: invalid JSON (%s); skipping", lineno, e.msg)
            skipped += 1
            continue
        except ValidationError as e:
            logger.warning(
                "Line %d: not a valid log entry (%d error(s)); skipping",
                lineno,
                e.error_count(),
            )
            logger.debug("Line %d validation errors: %s", lineno, e.errors())
            skipped += 1
            continue
        device.write(entry)
        processed += 1
    device.flush()
    return processed, skipped


@app.command(help="Convert JSON-lines log entries to ECS JSON lines.")
def convert(
    input_path: Optional[Path] = typer.Argument(
        None, help="JSON-lines file with log entries (defaults to stdin)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write ECS documents to this file instead of stdout"
    ),
    max_message_length: Optional[int] = typer.Option(
        None,
        help="Truncate string messages to this many characters (0 disables). Overrides ECS_MAX_MESSAGE_LENGTH.",
    ),
    datetime_format: Optional[str] = typer.Option(
        None, help="strftime format for @timestamp (supports %6N style fractions). Overrides ECS_DATETIME_FORMAT."
    ),
) -> None:
    """Read log entries, map them to ECS and write them out, one per line."""
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    overrides = {}
    if max_message_length is not None:
        if max_message_length < 0:
            raise typer.BadParameter("must be >= 0", param_hint="--max-message-length")
        overrides["max_message_length"] = max_message_length or None
    if datetime_format:
        overrides["datetime_format"] = datetime_format

    # Input is decoded per line so one bad byte sequence only skips its own line.
    source = input_path.open("rb") if input_path else sys.stdin.buffer
    sink = output.open("w", encoding="utf-8") if output else sys.stdout
    try:
        device = EcsDevice.from_settings(sink, settings, **overrides)
        processed, skipped = _convert_stream(source, device)
    finally:
        if input_path:
            source.close()
        if output:
            sink.close()

    logger.info("Converted %d entries; skipped %d", processed, skipped)
    typer.echo(f"Processed {processed} entry(ies). skipped={skipped}", err=True)


if __name__ == "__main__":  # pragma: no cover
    app()
