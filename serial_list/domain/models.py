"""Domain models for the serial order report.

These dataclasses are read-only projections of the acquisitions database and
the holdings catalog. Nothing in the package creates or changes them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class VarField:
    """One variable-length catalog field of a bib record."""

    marc_tag: str
    content: str


@dataclass(frozen=True)
class BibRecord:
    record_num: int
    title: str
    varfields: tuple[VarField, ...] = ()

    def fields_tagged(self, marc_tag: str) -> tuple[VarField, ...]:
        return tuple(item for item in self.varfields if item.marc_tag == marc_tag)


@dataclass(frozen=True)
class Fund:
    """A budget line; ``code`` is the numeric code, ``name`` the short code shown to staff."""

    code: str
    name: str


@dataclass(frozen=True)
class PaymentRecord:
    paid_amount: Decimal
    paid_date: datetime


@dataclass(frozen=True)
class Order:
    """An acquisition order with its bib, fund and payment associations."""

    record_num: int
    status_code: str
    jurisdiction_code: str
    material_type_code: str | None = None
    vendor_code: str | None = None
    acq_type_code: str | None = None
    receiving_action_code: str | None = None
    deleted_at: datetime | None = None
    bib: BibRecord | None = None
    fund: Fund | None = None
    payments: tuple[PaymentRecord, ...] = field(default_factory=tuple)

    @property
    def order_number(self) -> str:
        return f"o{self.record_num}a"


@dataclass(frozen=True)
class HoldingRecord:
    """A subscription or access record from the holdings catalog."""

    issn: str | None
    eissn: str | None
    start_date: str | None
    end_date: str | None
    resource: str | None


@dataclass(frozen=True)
class FiscalYear:
    """July 1 through June 30 window, labelled by its ending calendar year."""

    label: int
    start: date
    end: date

    def contains(self, value: date | datetime) -> bool:
        if isinstance(value, datetime):
            value = value.date()
        return self.start <= value <= self.end
