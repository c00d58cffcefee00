"""SQLAlchemy-backed repositories for orders, funds and holdings."""
from __future__ import annotations

from typing import Callable, Collection, Sequence, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from serial_list.domain.models import BibRecord, Fund, HoldingRecord, Order, PaymentRecord, VarField
from serial_list.domain.repositories import FundReference, HoldingsCatalog, OrderCatalog
from serial_list.exceptions import QueryError
from serial_list.infrastructure.database.models import (
    BibView,
    FundMaster,
    Holding,
    OrderRecordCmf,
    OrderView,
)

T = TypeVar("T")

_ORDER_LOADS = (
    selectinload(OrderView.record_metadata),
    selectinload(OrderView.bib_views).selectinload(BibView.varfield_views),
    selectinload(OrderView.order_record_cmfs),
    selectinload(OrderView.order_record_paids),
)


def _run(description: str, query: Callable[[], T]) -> T:
    try:
        return query()
    except SQLAlchemyError as exc:
        raise QueryError(f"{description} failed: {exc}") from exc


def bib_to_domain(row: BibView) -> BibRecord:
    return BibRecord(
        record_num=row.record_num,
        title=row.title or "",
        varfields=tuple(
            VarField(marc_tag=field.marc_tag or "", content=field.field_content or "")
            for field in row.varfield_views
        ),
    )


def order_to_domain(row: OrderView) -> Order:
    bib = bib_to_domain(row.bib_views[0]) if row.bib_views else None
    fund = None
    if row.order_record_cmfs:
        cmf = row.order_record_cmfs[0]
        fund = Fund(code=cmf.fund_code, name=cmf.fund or cmf.fund_code)
    deleted_at = row.record_metadata.deletion_date_gmt if row.record_metadata else None
    return Order(
        record_num=row.record_num,
        status_code=row.order_status_code,
        jurisdiction_code=row.ocode1 or "",
        material_type_code=row.material_type_code,
        vendor_code=row.vendor_record_code,
        acq_type_code=row.acq_type_code,
        receiving_action_code=row.receiving_action_code,
        deleted_at=deleted_at,
        bib=bib,
        fund=fund,
        payments=tuple(
            PaymentRecord(paid_amount=paid.paid_amount, paid_date=paid.paid_date_gmt)
            for paid in row.order_record_paids
        ),
    )


def holding_to_domain(row: Holding) -> HoldingRecord:
    return HoldingRecord(
        issn=row.issn,
        eissn=row.eissn,
        start_date=row.startdate,
        end_date=row.enddate,
        resource=row.resource,
    )


class SqlOrderCatalog(OrderCatalog):
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_orders(
        self,
        status_codes: Collection[str],
        jurisdiction_codes: Collection[str],
        fund_codes: Collection[str] | None = None,
    ) -> Sequence[Order]:
        if fund_codes is not None and not fund_codes:
            return []
        stmt = (
            select(OrderView)
            .options(*_ORDER_LOADS)
            .where(
                OrderView.order_status_code.in_(list(status_codes)),
                OrderView.ocode1.in_(list(jurisdiction_codes)),
            )
            .order_by(OrderView.record_num)
        )
        if fund_codes is not None:
            stmt = stmt.where(OrderView.order_record_cmfs.any(OrderRecordCmf.fund_code.in_(list(fund_codes))))
        return _run(
            "Order query",
            lambda: [order_to_domain(row) for row in self._session.scalars(stmt).all()],
        )

    def find_by_record_nums(self, record_nums: Collection[int]) -> Sequence[Order]:
        if not record_nums:
            return []
        stmt = select(OrderView).options(*_ORDER_LOADS).where(OrderView.record_num.in_(list(record_nums)))
        return _run(
            "Order lookup",
            lambda: [order_to_domain(row) for row in self._session.scalars(stmt).all()],
        )


class SqlHoldingsCatalog(HoldingsCatalog):
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_issn(self, issn: str) -> Sequence[HoldingRecord]:
        return self._find(Holding.issn == issn)

    def find_by_eissn(self, eissn: str) -> Sequence[HoldingRecord]:
        return self._find(Holding.eissn == eissn)

    def _find(self, condition) -> Sequence[HoldingRecord]:
        stmt = select(Holding).where(condition).order_by(Holding.id)
        return _run(
            "Holdings query",
            lambda: [holding_to_domain(row) for row in self._session.scalars(stmt).all()],
        )


class SqlFundReference(FundReference):
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_funds(self, short_codes: Collection[str]) -> Sequence[Fund]:
        if not short_codes:
            return []
        stmt = select(FundMaster).where(FundMaster.code.in_(list(short_codes))).order_by(FundMaster.code_num)
        return _run(
            "Fund query",
            lambda: [Fund(code=str(row.code_num), name=row.code) for row in self._session.scalars(stmt).all()],
        )
