"""ISSN extraction from bibliographic variable fields."""
from __future__ import annotations

import re

from .models import BibRecord

ISSN_MARC_TAG = "022"
ISSN_PATTERN = re.compile(r"\d{4}-\d{3}[\dXx]")


def extract_identifiers(bib: BibRecord, marc_tag: str = ISSN_MARC_TAG) -> tuple[str | None, str | None]:
    """Return the first two ISSN-shaped strings of the first ``marc_tag`` field.

    Positions without a match are ``None`` so callers always get two slots.
    Check digits are not validated.
    """
    fields = bib.fields_tagged(marc_tag)
    if not fields:
        return (None, None)
    matches = ISSN_PATTERN.findall(fields[0].content or "")
    first = matches[0] if matches else None
    second = matches[1] if len(matches) > 1 else None
    return (first, second)
