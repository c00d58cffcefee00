"""Payment totals per fiscal year."""
from __future__ import annotations

from decimal import Decimal

from .fiscal import FiscalYearCalculator
from .models import FiscalYear, Order


def total_for_window(order: Order, window: FiscalYear) -> Decimal | None:
    """Sum of the order's payments dated inside ``window``; ``None`` when there are none."""
    amounts = [payment.paid_amount for payment in order.payments if window.contains(payment.paid_date)]
    if not amounts:
        return None
    return sum(amounts, Decimal("0"))


def fiscal_year_total(order: Order, offset: int, calendar: FiscalYearCalculator) -> Decimal | None:
    return total_for_window(order, calendar.fiscal_year(offset))
