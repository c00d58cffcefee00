"""Tab-separated text output for pasting the report into a spreadsheet."""
from __future__ import annotations

import subprocess
import sys
from decimal import Decimal
from typing import Iterable, Sequence, TextIO

from serial_list.domain.results import SerialReport
from serial_list.exceptions import SinkWriteError
from serial_list.logging_config import get_logger

logger = get_logger("clipboard")


def format_cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format(value, "f")
    text = str(value)
    if any(ch in text for ch in ("\t", "\n", '"')):
        return '"' + text.replace('"', '""') + '"'
    return text


def render_lines(rows: Iterable[Sequence[object]]) -> list[str]:
    return ["\t".join(format_cell(value) for value in row) for row in rows]


def render_tsv(report: SerialReport) -> str:
    lines = render_lines([tuple(report.header), *report.iter_values()])
    return "\n".join(lines)


def copy_to_clipboard(text: str, command: Sequence[str] = ("pbcopy",)) -> None:
    try:
        subprocess.run(list(command), input=text, text=True, check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise SinkWriteError(f"Clipboard command {' '.join(command)!r} failed: {exc}") from exc


class ClipboardSink:
    def __init__(self, command: Sequence[str] = ("pbcopy",)) -> None:
        self._command = tuple(command)

    def write(self, report: SerialReport) -> None:
        copy_to_clipboard(render_tsv(report), self._command)
        logger.info("Copied %d rows to the clipboard", len(report.rows))


class StreamSink:
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def write(self, report: SerialReport) -> None:
        stream = self._stream or sys.stdout
        try:
            stream.write(render_tsv(report) + "\n")
            stream.flush()
        except (OSError, ValueError) as exc:
            raise SinkWriteError(f"Cannot write report to stream: {exc}") from exc
