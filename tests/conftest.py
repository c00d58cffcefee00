from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Collection, Sequence

import pytest

from serial_list.domain.models import BibRecord, Fund, HoldingRecord, Order, PaymentRecord, VarField
from serial_list.logging_config import reset_logging


class FakeOrderCatalog:
    def __init__(self, orders: Sequence[Order]) -> None:
        self.orders = list(orders)
        self.calls: list[dict] = []

    def find_orders(
        self,
        status_codes: Collection[str],
        jurisdiction_codes: Collection[str],
        fund_codes: Collection[str] | None = None,
    ) -> list[Order]:
        self.calls.append(
            {"status_codes": status_codes, "jurisdiction_codes": jurisdiction_codes, "fund_codes": fund_codes}
        )
        found = []
        for order in self.orders:
            if order.status_code not in status_codes or order.jurisdiction_code not in jurisdiction_codes:
                continue
            if fund_codes is not None and (order.fund is None or order.fund.code not in fund_codes):
                continue
            found.append(order)
        return found

    def find_by_record_nums(self, record_nums: Collection[int]) -> list[Order]:
        return [order for order in self.orders if order.record_num in record_nums]


class FakeHoldingsCatalog:
    def __init__(self, holdings: Sequence[HoldingRecord] = ()) -> None:
        self.holdings = list(holdings)
        self.queries: list[tuple[str, str]] = []

    def find_by_issn(self, issn: str) -> list[HoldingRecord]:
        self.queries.append(("issn", issn))
        return [holding for holding in self.holdings if holding.issn == issn]

    def find_by_eissn(self, eissn: str) -> list[HoldingRecord]:
        self.queries.append(("eissn", eissn))
        return [holding for holding in self.holdings if holding.eissn == eissn]


class FakeFundReference:
    def __init__(self, funds: dict[str, int]) -> None:
        self.funds = funds
        self.requests: list[Collection[str]] = []

    def find_funds(self, short_codes: Collection[str]) -> list[Fund]:
        self.requests.append(short_codes)
        return [Fund(code=str(self.funds[code]), name=code) for code in short_codes if code in self.funds]


def make_bib(title: str = "Journal of Testing", issn_text: str | None = "1234-567X") -> BibRecord:
    varfields = [VarField(marc_tag="245", content=title)]
    if issn_text is not None:
        varfields.append(VarField(marc_tag="022", content=issn_text))
    return BibRecord(record_num=9000, title=title, varfields=tuple(varfields))


def make_order(record_num: int = 1000001, **overrides) -> Order:
    values = dict(
        record_num=record_num,
        status_code="c",
        jurisdiction_code="u",
        material_type_code="s",
        vendor_code="ebsco",
        acq_type_code="p",
        receiving_action_code="1",
        deleted_at=None,
        bib=make_bib(),
        fund=Fund(code="00123", name="sbind"),
        payments=(),
    )
    values.update(overrides)
    return Order(**values)


def make_payment(amount: str, paid: datetime) -> PaymentRecord:
    return PaymentRecord(paid_amount=Decimal(amount), paid_date=paid)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


def seed_databases(orders_engine, holdings_engine) -> None:
    """Create the mapped tables and load a handful of orders and holdings."""
    from sqlalchemy.orm import Session

    from serial_list.infrastructure.database.engine import create_tables
    from serial_list.infrastructure.database.models import (
        BibView,
        FundMaster,
        Holding,
        OrderRecordCmf,
        OrderRecordPaid,
        OrderView,
        RecordMetadata,
        VarfieldView,
        bib_record_order_record_link,
    )

    create_tables(orders_engine, holdings_engine)

    with Session(orders_engine) as session:
        session.add_all(
            [
                FundMaster(id=1, code="sbind", code_num=123),
                FundMaster(id=2, code="scont", code_num=4567),
                FundMaster(id=3, code="mhist", code_num=999),
            ]
        )
        bibs = [
            BibView(id=501, record_num=3000001, title="Journal of Serials"),
            BibView(id=502, record_num=3000002, title="Monograph Series"),
            BibView(id=503, record_num=3000003, title="Deleted Quarterly"),
            BibView(id=504, record_num=3000004, title="History Monograph"),
        ]
        session.add_all(bibs)
        session.add_all(
            [
                VarfieldView(id=1, record_id=501, marc_tag="245", occ_num=0, field_content="Journal of Serials"),
                VarfieldView(id=2, record_id=501, marc_tag="022", occ_num=0, field_content="|a1234-567X|l1234-567X|y8765-4321"),
                VarfieldView(id=3, record_id=502, marc_tag="022", occ_num=0, field_content="|a2222-3333"),
                VarfieldView(id=4, record_id=503, marc_tag="022", occ_num=0, field_content="|a4444-5555"),
            ]
        )
        orders = [
            (101, 1000001, "c", "u", None, "p"),
            (102, 1000002, "a", "h", None, "1"),
            (103, 1000003, "e", "u", datetime(2024, 2, 1), "1"),
            (104, 1000004, "a", "u", None, "1"),
            (105, 1000005, "c", "z", None, "1"),
        ]
        for record_id, record_num, status, ocode1, deleted, receiving in orders:
            session.add(RecordMetadata(id=record_id, record_type_code="o", deletion_date_gmt=deleted))
            session.add(
                OrderView(
                    id=record_id,
                    record_num=record_num,
                    order_status_code=status,
                    ocode1=ocode1,
                    material_type_code="s",
                    vendor_record_code="ebsco",
                    acq_type_code="p",
                    receiving_action_code=receiving,
                )
            )
        session.flush()
        links = [(101, 501), (102, 502), (103, 503), (104, 504), (105, 501)]
        session.execute(
            bib_record_order_record_link.insert(),
            [
                {"id": index, "bib_record_id": bib_id, "order_record_id": order_id}
                for index, (order_id, bib_id) in enumerate(links, start=1)
            ],
        )
        session.add_all(
            [
                OrderRecordCmf(id=1, order_record_id=101, display_order=0, fund_code="00999", fund="mhist"),
                OrderRecordCmf(id=2, order_record_id=102, display_order=0, fund_code="04567", fund="scont"),
                OrderRecordCmf(id=3, order_record_id=103, display_order=0, fund_code="00123", fund="sbind"),
                OrderRecordCmf(id=4, order_record_id=104, display_order=0, fund_code="00999", fund="mhist"),
                OrderRecordCmf(id=5, order_record_id=105, display_order=0, fund_code="00123", fund="sbind"),
            ]
        )
        session.add_all(
            [
                OrderRecordPaid(id=1, order_record_id=101, paid_date_gmt=datetime(2024, 7, 15), paid_amount=Decimal("100.00")),
                OrderRecordPaid(id=2, order_record_id=101, paid_date_gmt=datetime(2025, 7, 1), paid_amount=Decimal("50.00")),
                OrderRecordPaid(id=3, order_record_id=101, paid_date_gmt=datetime(2023, 9, 1), paid_amount=Decimal("75.25")),
                OrderRecordPaid(id=4, order_record_id=102, paid_date_gmt=datetime(2024, 10, 1), paid_amount=Decimal("30.00")),
            ]
        )
        session.commit()

    with Session(holdings_engine) as session:
        session.add_all(
            [
                Holding(id=1, issn="1234-567X", eissn=None, startdate="1995", enddate="2010", resource="Print run"),
                Holding(id=2, issn=None, eissn="1234-567X", startdate="2005", enddate="", resource="ScienceDirect"),
                Holding(id=3, issn="8765-4321", eissn="1234-567X", startdate="2005", enddate="", resource="ScienceDirect"),
                Holding(id=4, issn="9999-0000", eissn=None, startdate="2000", enddate="2001", resource="Unrelated"),
            ]
        )
        session.commit()
