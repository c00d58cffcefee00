"""Application services orchestrating the serial order report."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol, Sequence

from serial_list.config import Settings
from serial_list.domain.filters import is_active
from serial_list.domain.fiscal import FiscalYearCalculator
from serial_list.domain.holdings import HoldingsResolver
from serial_list.domain.models import Order
from serial_list.domain.repositories import FundReference, HoldingsCatalog, OrderCatalog
from serial_list.domain.results import SerialReport, SkippedOrder
from serial_list.domain.rows import ReportRow, ReportRowBuilder
from serial_list.domain.selection import OrderSelector, SelectionCriteria
from serial_list.exceptions import MissingAssociationError, ReportStageError, SerialListError
from serial_list.logging_config import get_logger

logger = get_logger("use_cases")

SELECTION = "selection"
ENRICHMENT = "enrichment"
SINK = "sink"


class ReportSink(Protocol):
    def write(self, report: SerialReport) -> None:
        ...


@dataclass(slots=True)
class ReportContext:
    order_catalog: OrderCatalog
    fund_reference: FundReference
    holdings_catalog: HoldingsCatalog
    settings: Settings
    today: date = field(default_factory=date.today)


def criteria_from_settings(settings: Settings) -> SelectionCriteria:
    return SelectionCriteria(
        serial_status_codes=tuple(settings.serial_status_codes),
        monograph_status_codes=tuple(settings.monograph_status_codes),
        jurisdiction_codes=tuple(settings.jurisdiction_codes),
        fund_codes=tuple(settings.fund_codes),
    )


class BuildSerialReportUseCase:
    def __init__(self, context: ReportContext) -> None:
        self._context = context
        settings = context.settings
        self._selector = OrderSelector(
            context.order_catalog,
            context.fund_reference,
            criteria_from_settings(settings),
        )
        self._builder = ReportRowBuilder(
            HoldingsResolver(context.holdings_catalog),
            FiscalYearCalculator(context.today),
            fiscal_year_count=settings.fiscal_year_count,
            partial_receiving_code=settings.partial_receiving_code,
            issn_marc_tag=settings.issn_marc_tag,
        )

    def execute(self) -> SerialReport:
        try:
            candidates = self._selector.select_candidate_orders()
        except SerialListError as exc:
            raise ReportStageError(SELECTION, exc) from exc

        try:
            rows, skipped, excluded = self._build_rows(candidates)
        except SerialListError as exc:
            raise ReportStageError(ENRICHMENT, exc) from exc

        logger.info(
            "Built %d rows from %d candidates (%d deleted, %d skipped)",
            len(rows),
            len(candidates),
            excluded,
            len(skipped),
        )
        return SerialReport(
            header=self._builder.build_header(),
            rows=tuple(rows),
            skipped=tuple(skipped),
            excluded_deleted=excluded,
            candidates=len(candidates),
            as_of=self._context.today,
            generated_at=datetime.now(),
        )

    def _build_rows(self, candidates: Sequence[Order]) -> tuple[list[ReportRow], list[SkippedOrder], int]:
        rows: list[ReportRow] = []
        skipped: list[SkippedOrder] = []
        excluded = 0
        for order in candidates:
            if not is_active(order):
                logger.debug("Excluding deleted order %s", order.order_number)
                excluded += 1
                continue
            try:
                rows.append(self._builder.build_record(order))
            except MissingAssociationError as exc:
                if self._context.settings.strict:
                    raise
                logger.warning("Skipping order %s: %s", order.order_number, exc)
                skipped.append(SkippedOrder(record_num=order.record_num, reason=str(exc)))
        return rows, skipped, excluded


class DeliverReportUseCase:
    def __init__(self, sink: ReportSink) -> None:
        self._sink = sink

    def execute(self, report: SerialReport) -> None:
        try:
            self._sink.write(report)
        except SerialListError as exc:
            raise ReportStageError(SINK, exc) from exc


class OrderLookupUseCase:
    """Tab-separated title, last payment, fund, format and status for given orders."""

    def __init__(self, catalog: OrderCatalog) -> None:
        self._catalog = catalog

    def execute(self, record_nums: Sequence[int]) -> list[str]:
        found = {order.record_num: order for order in self._catalog.find_by_record_nums(record_nums)}
        lines: list[str] = []
        for record_num in record_nums:
            order = found.get(record_num)
            if order is None:
                logger.warning("Order o%sa not found", record_num)
                continue
            lines.append(self._describe(order))
        return lines

    @staticmethod
    def _describe(order: Order) -> str:
        if order.bib is None or order.fund is None:
            logger.warning("Order %s is missing its bib or fund association", order.order_number)
        title = order.bib.title if order.bib else ""
        payment = ""
        if order.payments:
            latest = max(order.payments, key=lambda item: item.paid_date)
            payment = str(latest.paid_amount)
        fund = order.fund.name if order.fund else ""
        return "\t".join([title, payment, fund, order.material_type_code or "", order.status_code])
