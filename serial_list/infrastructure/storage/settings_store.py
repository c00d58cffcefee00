"""Storage helpers for report setting overrides."""
from __future__ import annotations

from pathlib import Path
import json
from typing import Any

from serial_list.logging_config import get_logger

DEFAULT_PATH = Path.cwd() / "serial_list_settings.json"

_LIST_KEYS = {
    "serial_status_codes",
    "monograph_status_codes",
    "jurisdiction_codes",
    "fund_codes",
    "clipboard_command",
}
_STR_KEYS = {
    "partial_receiving_code",
    "issn_marc_tag",
    "sheet_name",
    "output_path",
    "database_url",
    "holdings_url",
}
_INT_KEYS = {"fiscal_year_count"}
_BOOL_KEYS = {"strict"}

logger = get_logger("settings_store")


def _normalize_overrides(raw: dict[str, Any] | None) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    if not isinstance(raw, dict):
        return normalized
    for key, value in raw.items():
        if value is None:
            continue
        if key in _LIST_KEYS and isinstance(value, (list, tuple)):
            normalized[key] = tuple(str(item).strip() for item in value if str(item).strip())
        elif key in _STR_KEYS:
            normalized[key] = str(value).strip()
        elif key in _INT_KEYS:
            try:
                normalized[key] = int(value)
            except (TypeError, ValueError):
                logger.warning("Ignoring non-integer setting %s=%r", key, value)
        elif key in _BOOL_KEYS:
            normalized[key] = bool(value)
        else:
            logger.debug("Ignoring unknown setting %s", key)
    return normalized


def load_overrides(path: Path | None = None) -> dict[str, Any]:
    override_path = path or DEFAULT_PATH
    if not override_path.exists():
        return {}
    try:
        data = json.loads(override_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.warning("Settings file %s is not valid JSON; using defaults", override_path)
        return {}
    return _normalize_overrides(data)


def save_overrides(overrides: dict[str, Any], path: Path | None = None) -> dict[str, Any]:
    override_path = path or DEFAULT_PATH
    normalized = _normalize_overrides(overrides)
    serializable = {key: list(value) if isinstance(value, tuple) else value for key, value in normalized.items()}
    override_path.write_text(
        json.dumps(serializable, ensure_ascii=False, indent=2, sort_keys=True),
        encoding="utf-8",
    )
    return normalized
