"""Excel output for the serial order report."""
from __future__ import annotations

import os
import tempfile
from decimal import Decimal
from io import BytesIO
from pathlib import Path

import pandas as pd
from xlsxwriter.exceptions import XlsxWriterException

from serial_list.domain.results import SerialReport
from serial_list.exceptions import SinkWriteError
from serial_list.logging_config import get_logger

DEFAULT_SHEET_NAME = "Serial_orders"
WRAPPED_COLUMN = "online_access"

logger = get_logger("spreadsheet")


def _cell(value: object) -> object:
    # Excel stores numbers as doubles; two-place currency survives the conversion.
    if isinstance(value, Decimal):
        return float(value)
    return value


def report_to_dataframe(report: SerialReport) -> pd.DataFrame:
    return pd.DataFrame(
        [[_cell(value) for value in values] for values in report.iter_values()],
        columns=list(report.header),
    )


def build_workbook(report: SerialReport, sheet_name: str = DEFAULT_SHEET_NAME) -> bytes:
    """Render the report as a single-sheet xlsx workbook.

    XlsxWriter stores text in the shared string table, and the holdings column
    gets a wrap format so its embedded line breaks show up in Excel.
    """
    df = report_to_dataframe(report)
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="xlsxwriter") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
        workbook = writer.book
        worksheet = writer.sheets[sheet_name]
        wrap = workbook.add_format({"text_wrap": True, "valign": "top"})
        if WRAPPED_COLUMN in df.columns:
            col_idx = df.columns.get_loc(WRAPPED_COLUMN)
            worksheet.set_column(col_idx, col_idx, 60, wrap)
            for r, value in enumerate(df[WRAPPED_COLUMN]):
                if value:
                    worksheet.write_string(r + 1, col_idx, value, wrap)
        worksheet.freeze_panes(1, 0)
    buf.seek(0)
    return buf.getvalue()


def write_workbook(report: SerialReport, out_path: Path, sheet_name: str = DEFAULT_SHEET_NAME) -> Path:
    """Write the workbook next to ``out_path`` and rename it into place."""
    out_path = Path(out_path)
    try:
        content = build_workbook(report, sheet_name=sheet_name)
    except (XlsxWriterException, ValueError) as exc:
        raise SinkWriteError(f"Cannot render workbook for {out_path}: {exc}") from exc
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{out_path.stem}.", suffix=".xlsx.tmp", dir=out_path.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)
            os.replace(tmp_name, out_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise SinkWriteError(f"Cannot write {out_path}: {exc}") from exc
    logger.info("Wrote %d rows to %s", len(report.rows), out_path)
    return out_path


class SpreadsheetSink:
    def __init__(self, out_path: Path, sheet_name: str = DEFAULT_SHEET_NAME) -> None:
        self._out_path = Path(out_path)
        self._sheet_name = sheet_name

    def write(self, report: SerialReport) -> None:
        write_workbook(report, self._out_path, sheet_name=self._sheet_name)
