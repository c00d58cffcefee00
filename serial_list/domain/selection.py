"""Selection of potential serial orders."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from serial_list.logging_config import get_logger

from .models import Order
from .repositories import FundReference, OrderCatalog

logger = get_logger("selection")


@dataclass(frozen=True)
class SelectionCriteria:
    serial_status_codes: tuple[str, ...]
    monograph_status_codes: tuple[str, ...]
    jurisdiction_codes: tuple[str, ...]
    fund_codes: tuple[str, ...]


def pad_fund_code(code: str | int) -> str:
    """Fund associations store fund codes as 5-digit, zero-padded strings."""
    return "%05d" % int(code)


def dedupe_orders(orders: Iterable[Order]) -> tuple[Order, ...]:
    unique: dict[int, Order] = {}
    for order in orders:
        unique.setdefault(order.record_num, order)
    return tuple(unique.values())


class OrderSelector:
    """Finds orders by serial status, plus monograph-status orders on serial funds."""

    def __init__(self, catalog: OrderCatalog, fund_reference: FundReference, criteria: SelectionCriteria) -> None:
        self._catalog = catalog
        self._fund_reference = fund_reference
        self._criteria = criteria

    def select_candidate_orders(self) -> tuple[Order, ...]:
        by_status = self.orders_by_status_code()
        by_fund = self.orders_by_fund()
        candidates = dedupe_orders([*by_status, *by_fund])
        logger.info(
            "Selected %d candidate orders (%d by status, %d by fund)",
            len(candidates),
            len(by_status),
            len(by_fund),
        )
        return candidates

    def orders_by_status_code(self) -> Sequence[Order]:
        return self._catalog.find_orders(
            status_codes=self._criteria.serial_status_codes,
            jurisdiction_codes=self._criteria.jurisdiction_codes,
        )

    def orders_by_fund(self) -> Sequence[Order]:
        fund_codes = self.padded_fund_codes()
        if not fund_codes:
            logger.info("No serial fund codes resolved; skipping fund query")
            return ()
        return self._catalog.find_orders(
            status_codes=self._criteria.monograph_status_codes,
            jurisdiction_codes=self._criteria.jurisdiction_codes,
            fund_codes=fund_codes,
        )

    def padded_fund_codes(self) -> tuple[str, ...]:
        if not self._criteria.fund_codes:
            return ()
        funds = self._fund_reference.find_funds(self._criteria.fund_codes)
        return tuple(dict.fromkeys(pad_fund_code(fund.code) for fund in funds))
