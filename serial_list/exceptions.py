"""Typed errors raised by the serial order report pipeline."""
from __future__ import annotations


class SerialListError(Exception):
    """Base class for all report pipeline failures."""

    code = "serial_list_error"


class QueryError(SerialListError):
    """The order or holdings data store could not answer a query."""

    code = "query_error"


class MissingAssociationError(SerialListError):
    """An order lacks a bib record or fund association it needs for reporting."""

    code = "missing_association"

    def __init__(self, record_num: int, association: str) -> None:
        self.record_num = record_num
        self.association = association
        super().__init__(f"Order o{record_num}a has no {association} association")


class SinkWriteError(SerialListError):
    """The report could not be delivered to its spreadsheet or clipboard sink."""

    code = "sink_write_error"


class ReportStageError(SerialListError):
    """Wraps a failure with the pipeline stage it happened in."""

    code = "report_stage_error"

    def __init__(self, stage: str, cause: Exception) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage}: {cause}")
