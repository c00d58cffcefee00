"""Holdings lookups by ISSN."""
from __future__ import annotations

from typing import Iterable

from .models import HoldingRecord
from .repositories import HoldingsCatalog


def render_holding(holding: HoldingRecord) -> str:
    start = holding.start_date or ""
    end = holding.end_date or ""
    resource = holding.resource or ""
    return f"{start}-{end} | {resource}"


class HoldingsResolver:
    """Renders print and electronic holdings for a title's identifiers."""

    def __init__(self, catalog: HoldingsCatalog) -> None:
        self._catalog = catalog

    def resolve_holdings(self, identifiers: Iterable[str | None]) -> tuple[str, ...]:
        rendered: list[str] = []
        for identifier in identifiers:
            if not identifier:
                continue
            rendered.extend(self._holdings_for(identifier))
        return tuple(dict.fromkeys(rendered))

    def _holdings_for(self, identifier: str) -> list[str]:
        holdings = list(self._catalog.find_by_issn(identifier))
        holdings.extend(self._catalog.find_by_eissn(identifier))
        return [render_holding(holding) for holding in holdings if holding is not None]
