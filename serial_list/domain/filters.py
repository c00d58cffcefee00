"""Predicates applied to candidate orders before their rows are built."""
from __future__ import annotations

from serial_list.exceptions import MissingAssociationError

from .models import Order


def is_active(order: Order) -> bool:
    return order.deleted_at is None


def require_associations(order: Order) -> Order:
    """Return ``order`` unchanged, or raise if its bib or fund is missing."""
    if order.bib is None:
        raise MissingAssociationError(order.record_num, "bib record")
    if order.fund is None:
        raise MissingAssociationError(order.record_num, "fund")
    return order
