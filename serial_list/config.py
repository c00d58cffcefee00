"""Central configuration for the serial list package."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from serial_list.infrastructure.storage.settings_store import load_overrides

SERIAL_STATUS_CODES = ("c", "f", "d", "e", "g")
MONOGRAPH_STATUS_CODES = ("a", "o", "q")
JURISDICTION_CODES = ("u", "h")

# Serial funds; orders against these with a monograph status are still reported.
SERIAL_FUND_CODES = (
    "sbind", "scdnt", "scdrm", "scont", "sghum", "slanf", "smemb", "sp&pa",
    "sfren", "sgper", "slang", "sprof", "sspan", "ssocw", "scrce", "scrcl",
    "seduc", "slref", "senvi", "sgeog", "sgeol", "smath", "sphys", "sdaap",
    "sbiol", "schem", "sarch", "sdocs", "sccm", "sgerm", "sslav", "scrmj",
    "shums", "spsyc", "ssoci", "scoma", "sengl", "sling", "sthtr", "safro",
    "santh", "sasia", "shist", "sjuda", "slata", "sphil", "spols", "swoms",
    "scas", "scomp", "sengr", "sbusa", "secon", "halhs", "hhgms", "hhgps",
    "hhlos", "hhrcs", "hngs", "hnles", "hphs", "hygs", "hyss", "ysems",
    "ysmgs", "yells", "yoess", "ylecs", "yurbs", "ybots", "ydays", "yters",
)

DATABASE_URL_ENV = "SERIAL_LIST_DATABASE_URL"
HOLDINGS_URL_ENV = "SERIAL_LIST_HOLDINGS_URL"


@dataclass(slots=True, frozen=True)
class Settings:
    serial_status_codes: tuple[str, ...] = SERIAL_STATUS_CODES
    monograph_status_codes: tuple[str, ...] = MONOGRAPH_STATUS_CODES
    jurisdiction_codes: tuple[str, ...] = JURISDICTION_CODES
    fund_codes: tuple[str, ...] = SERIAL_FUND_CODES
    partial_receiving_code: str = "p"
    issn_marc_tag: str = "022"
    fiscal_year_count: int = 5
    sheet_name: str = "Serial_orders"
    output_path: str = "serial_orders.xlsx"
    database_url: str = "sqlite:///sierra.db"
    holdings_url: str = "sqlite:///holdings.db"
    clipboard_command: tuple[str, ...] = ("pbcopy",)
    strict: bool = False


def load_settings(path: Path | None = None, environ: dict[str, str] | None = None) -> Settings:
    """Build settings from defaults, a JSON override file and the environment."""
    env = os.environ if environ is None else environ
    settings = replace(Settings(), **load_overrides(path))
    if env.get(DATABASE_URL_ENV):
        settings = replace(settings, database_url=env[DATABASE_URL_ENV])
    if env.get(HOLDINGS_URL_ENV):
        settings = replace(settings, holdings_url=env[HOLDINGS_URL_ENV])
    return settings

