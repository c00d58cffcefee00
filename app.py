"""Streamlit front-end for the serial order report."""
from __future__ import annotations

from dataclasses import replace
from datetime import date

import pandas as pd
import streamlit as st

from serial_list import (
    BuildSerialReportUseCase,
    ReportContext,
    SqlFundReference,
    SqlHoldingsCatalog,
    SqlOrderCatalog,
)
from serial_list.config import Settings, load_settings
from serial_list.domain.results import SerialReport
from serial_list.exceptions import ReportStageError
from serial_list.infrastructure.database.engine import create_session_factory, session_scope
from serial_list.presentation.clipboard import render_tsv
from serial_list.presentation.spreadsheet import build_workbook, report_to_dataframe


st.set_page_config(page_title="Serial Orders", layout="wide")
st.title("Potential Serial Orders")


def run_report(settings: Settings, as_of: date) -> SerialReport:
    orders_factory = create_session_factory(settings.database_url)
    holdings_factory = create_session_factory(settings.holdings_url)
    with session_scope(orders_factory) as orders_session, session_scope(holdings_factory) as holdings_session:
        context = ReportContext(
            order_catalog=SqlOrderCatalog(orders_session),
            fund_reference=SqlFundReference(orders_session),
            holdings_catalog=SqlHoldingsCatalog(holdings_session),
            settings=settings,
            today=as_of,
        )
        return BuildSerialReportUseCase(context).execute()


if "report" not in st.session_state:
    st.session_state["report"] = None

defaults = load_settings()
with st.sidebar:
    database_url = st.text_input("Order database URL", value=defaults.database_url)
    holdings_url = st.text_input("Holdings database URL", value=defaults.holdings_url)
    as_of = st.date_input("Fiscal years as of", value=date.today())
    strict = st.checkbox("Stop on orders missing a bib or fund", value=defaults.strict)
    fund_text = st.text_area("Serial fund codes", value=" ".join(defaults.fund_codes), height=150)

settings = replace(
    defaults,
    fund_codes=tuple(fund_text.split()),
    database_url=database_url,
    holdings_url=holdings_url,
    strict=strict,
)

if st.button("Build report"):
    with st.spinner("Querying orders..."):
        try:
            st.session_state["report"] = run_report(settings, as_of)
        except ReportStageError as exc:
            st.session_state["report"] = None
            st.error(f"Report failed during {exc.stage}: {exc.cause}")

report: SerialReport | None = st.session_state.get("report")
if report is None:
    st.info("Set the database URLs and build the report.")
else:
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Candidates", report.candidates)
    col2.metric("Rows", len(report.rows))
    col3.metric("Deleted", report.excluded_deleted)
    col4.metric("Skipped", len(report.skipped))

    tabs = st.tabs(["Report", "Skipped"])
    with tabs[0]:
        st.dataframe(report_to_dataframe(report), use_container_width=True)
        st.download_button(
            "Download spreadsheet",
            data=build_workbook(report, sheet_name=settings.sheet_name),
            file_name=settings.output_path,
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
        st.download_button(
            "Download tab-separated text",
            data=render_tsv(report).encode("utf-8"),
            file_name="serial_orders.tsv",
            mime="text/tab-separated-values",
        )
    with tabs[1]:
        st.dataframe(
            pd.DataFrame(
                [{"order": f"o{item.record_num}a", "reason": item.reason} for item in report.skipped],
                columns=["order", "reason"],
            )
        )
