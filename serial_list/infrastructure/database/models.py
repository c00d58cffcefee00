"""SQLAlchemy mappings for the acquisitions views and the holdings catalog.

Table and column names follow the Sierra ILS reporting views so the package
can run directly against a read-only replica.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Table
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(30, 2),
        datetime: DateTime(timezone=True),
    }


class HoldingsBase(DeclarativeBase):
    """Separate metadata; the holdings catalog lives in its own database."""


bib_record_order_record_link = Table(
    "bib_record_order_record_link",
    Base.metadata,
    Column("id", Integer, primary_key=True),
    Column("bib_record_id", ForeignKey("bib_view.id"), nullable=False),
    Column("order_record_id", ForeignKey("order_view.id"), nullable=False),
)


class RecordMetadata(Base):
    __tablename__ = "record_metadata"

    id: Mapped[int] = mapped_column(primary_key=True)
    record_type_code: Mapped[str] = mapped_column(String(1), default="o")
    deletion_date_gmt: Mapped[datetime | None] = mapped_column(nullable=True)


class OrderView(Base):
    __tablename__ = "order_view"

    id: Mapped[int] = mapped_column(ForeignKey("record_metadata.id"), primary_key=True)
    record_num: Mapped[int] = mapped_column(index=True, unique=True)
    order_status_code: Mapped[str] = mapped_column(String(1))
    ocode1: Mapped[str | None] = mapped_column(String(1))
    material_type_code: Mapped[str | None] = mapped_column(String(3))
    vendor_record_code: Mapped[str | None] = mapped_column(String(5))
    acq_type_code: Mapped[str | None] = mapped_column(String(1))
    receiving_action_code: Mapped[str | None] = mapped_column(String(1))

    record_metadata: Mapped[RecordMetadata | None] = relationship()
    bib_views: Mapped[list["BibView"]] = relationship(
        secondary=bib_record_order_record_link,
        order_by="BibView.id",
    )
    order_record_cmfs: Mapped[list["OrderRecordCmf"]] = relationship(
        back_populates="order_view",
        order_by="OrderRecordCmf.display_order",
    )
    order_record_paids: Mapped[list["OrderRecordPaid"]] = relationship(
        back_populates="order_view",
        order_by="OrderRecordPaid.paid_date_gmt",
    )


class BibView(Base):
    __tablename__ = "bib_view"

    id: Mapped[int] = mapped_column(primary_key=True)
    record_num: Mapped[int] = mapped_column(index=True)
    title: Mapped[str | None] = mapped_column(String(1000))

    varfield_views: Mapped[list["VarfieldView"]] = relationship(
        back_populates="bib_view",
        order_by="[VarfieldView.occ_num, VarfieldView.id]",
    )


class VarfieldView(Base):
    __tablename__ = "varfield_view"

    id: Mapped[int] = mapped_column(primary_key=True)
    record_id: Mapped[int] = mapped_column(ForeignKey("bib_view.id"), index=True)
    marc_tag: Mapped[str | None] = mapped_column(String(3))
    occ_num: Mapped[int] = mapped_column(default=0)
    field_content: Mapped[str | None] = mapped_column(String(20000))

    bib_view: Mapped[BibView] = relationship(back_populates="varfield_views")


class OrderRecordCmf(Base):
    __tablename__ = "order_record_cmf"

    id: Mapped[int] = mapped_column(primary_key=True)
    order_record_id: Mapped[int] = mapped_column(ForeignKey("order_view.id"), index=True)
    display_order: Mapped[int] = mapped_column(default=0)
    fund_code: Mapped[str] = mapped_column(String(5), index=True)
    fund: Mapped[str | None] = mapped_column(String(20))

    order_view: Mapped[OrderView] = relationship(back_populates="order_record_cmfs")


class OrderRecordPaid(Base):
    __tablename__ = "order_record_paid"

    id: Mapped[int] = mapped_column(primary_key=True)
    order_record_id: Mapped[int] = mapped_column(ForeignKey("order_view.id"), index=True)
    paid_date_gmt: Mapped[datetime]
    paid_amount: Mapped[Decimal]

    order_view: Mapped[OrderView] = relationship(back_populates="order_record_paids")


class FundMaster(Base):
    __tablename__ = "fund_master"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(String(20), index=True)
    code_num: Mapped[int]


class Holding(HoldingsBase):
    __tablename__ = "holdings"

    id: Mapped[int] = mapped_column(primary_key=True)
    issn: Mapped[str | None] = mapped_column(String(9), index=True)
    eissn: Mapped[str | None] = mapped_column(String(9), index=True)
    startdate: Mapped[str | None] = mapped_column(String(20))
    enddate: Mapped[str | None] = mapped_column(String(20))
    resource: Mapped[str | None] = mapped_column(String(500))
