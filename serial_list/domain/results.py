"""Domain-level results for a serial order report run."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Sequence

from .rows import ReportRow, ReportValue


@dataclass(frozen=True)
class SkippedOrder:
    record_num: int
    reason: str


@dataclass(frozen=True)
class SerialReport:
    header: Sequence[str]
    rows: Sequence[ReportRow] = field(default_factory=tuple)
    skipped: Sequence[SkippedOrder] = field(default_factory=tuple)
    excluded_deleted: int = 0
    candidates: int = 0
    as_of: date | None = None
    generated_at: datetime | None = None

    def has_skips(self) -> bool:
        return bool(self.skipped)

    def iter_values(self) -> Iterable[tuple[ReportValue, ...]]:
        for row in self.rows:
            yield row.values()
