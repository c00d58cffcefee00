"""Potential serial order report for the acquisitions database."""
from serial_list.application.use_cases import (
    BuildSerialReportUseCase,
    DeliverReportUseCase,
    OrderLookupUseCase,
    ReportContext,
)
from serial_list.domain.rows import ReportRowBuilder
from serial_list.domain.selection import OrderSelector
from serial_list.infrastructure.repositories.sql_repositories import (
    SqlFundReference,
    SqlHoldingsCatalog,
    SqlOrderCatalog,
)

__all__ = [
    "BuildSerialReportUseCase",
    "DeliverReportUseCase",
    "OrderLookupUseCase",
    "ReportContext",
    "ReportRowBuilder",
    "OrderSelector",
    "SqlFundReference",
    "SqlHoldingsCatalog",
    "SqlOrderCatalog",
]
