"""Fiscal year arithmetic for a July to June fiscal calendar."""
from __future__ import annotations

from datetime import date

from .models import FiscalYear

FISCAL_YEAR_START_MONTH = 7


def fiscal_year_label(offset: int, today: date) -> int:
    """Label of the fiscal year ``offset`` years before the one containing ``today``."""
    year = today.year - offset
    if today.month < FISCAL_YEAR_START_MONTH:
        return year
    return year + 1


def fiscal_year_for_label(label: int) -> FiscalYear:
    return FiscalYear(label=label, start=date(label - 1, 7, 1), end=date(label, 6, 30))


def fiscal_year_range(offset: int, today: date) -> tuple[date, date]:
    window = fiscal_year_for_label(fiscal_year_label(offset, today))
    return (window.start, window.end)


class FiscalYearCalculator:
    """Fiscal year lookups anchored to an injected ``today``."""

    def __init__(self, today: date) -> None:
        self._today = today

    @property
    def today(self) -> date:
        return self._today

    def fiscal_year_label(self, offset: int) -> int:
        return fiscal_year_label(offset, self._today)

    def fiscal_year_range(self, offset: int) -> tuple[date, date]:
        return fiscal_year_range(offset, self._today)

    def fiscal_year(self, offset: int) -> FiscalYear:
        return fiscal_year_for_label(self.fiscal_year_label(offset))

    def recent_fiscal_years(self, count: int) -> tuple[FiscalYear, ...]:
        """The ``count`` most recent fiscal years, current one first."""
        return tuple(self.fiscal_year(offset) for offset in range(count))
