"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Collection, Protocol, Sequence

from .models import Fund, HoldingRecord, Order


class OrderCatalog(Protocol):
    """Provides orders with their bib, fund and payment associations loaded."""

    def find_orders(
        self,
        status_codes: Collection[str],
        jurisdiction_codes: Collection[str],
        fund_codes: Collection[str] | None = None,
    ) -> Sequence[Order]:
        ...

    def find_by_record_nums(self, record_nums: Collection[int]) -> Sequence[Order]:
        ...


class HoldingsCatalog(Protocol):
    """Exact-match lookups against the holdings catalog."""

    def find_by_issn(self, issn: str) -> Sequence[HoldingRecord]:
        ...

    def find_by_eissn(self, eissn: str) -> Sequence[HoldingRecord]:
        ...


class FundReference(Protocol):
    """Resolves fund short codes to funds carrying their numeric codes."""

    def find_funds(self, short_codes: Collection[str]) -> Sequence[Fund]:
        ...
