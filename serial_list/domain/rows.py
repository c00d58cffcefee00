"""Report row assembly for serial orders."""
from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal

from .filters import require_associations
from .fiscal import FiscalYearCalculator
from .holdings import HoldingsResolver
from .identifiers import ISSN_MARC_TAG, extract_identifiers
from .models import FiscalYear, Order
from .payments import total_for_window

PARTIAL_RECEIVING_CODE = "p"
DEFAULT_FISCAL_YEAR_COUNT = 5

ReportValue = str | bool | Decimal | None


@dataclass(frozen=True)
class ReportRow:
    """One report line; field order is column order, fiscal totals come last."""

    order_number: str
    title: str
    issn1: str | None
    issn2: str | None
    online_access: str
    format: str | None
    fund: str
    vendor: str | None
    acquisition_type: str | None
    split: bool
    fiscal_totals: tuple[Decimal | None, ...] = ()

    def values(self) -> tuple[ReportValue, ...]:
        fixed = tuple(getattr(self, name) for name in STATIC_COLUMNS)
        return fixed + tuple(self.fiscal_totals)


STATIC_COLUMNS: tuple[str, ...] = tuple(item.name for item in fields(ReportRow) if item.name != "fiscal_totals")


def fiscal_column_label(window: FiscalYear) -> str:
    return f"FY{window.label}"


class ReportRowBuilder:
    """Enriches an order with ISSNs, holdings and fiscal year totals."""

    def __init__(
        self,
        holdings_resolver: HoldingsResolver,
        calendar: FiscalYearCalculator,
        fiscal_year_count: int = DEFAULT_FISCAL_YEAR_COUNT,
        partial_receiving_code: str = PARTIAL_RECEIVING_CODE,
        issn_marc_tag: str = ISSN_MARC_TAG,
    ) -> None:
        self._holdings = holdings_resolver
        self._windows = calendar.recent_fiscal_years(fiscal_year_count)
        self._partial_code = partial_receiving_code
        self._issn_tag = issn_marc_tag

    def build_header(self) -> tuple[str, ...]:
        return STATIC_COLUMNS + tuple(fiscal_column_label(window) for window in self._windows)

    def build_record(self, order: Order) -> ReportRow:
        require_associations(order)
        issn1, issn2 = extract_identifiers(order.bib, self._issn_tag)
        holdings = self._holdings.resolve_holdings((issn1, issn2))
        return ReportRow(
            order_number=order.order_number,
            title=order.bib.title,
            issn1=issn1,
            issn2=issn2,
            online_access="\n".join(holdings),
            format=order.material_type_code,
            fund=order.fund.name,
            vendor=order.vendor_code,
            acquisition_type=order.acq_type_code,
            split=order.receiving_action_code == self._partial_code,
            fiscal_totals=tuple(total_for_window(order, window) for window in self._windows),
        )

    def build_row(self, order: Order) -> tuple[ReportValue, ...]:
        return self.build_record(order).values()
