"""Display formatting for dates and amounts."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

DEFAULT_CURRENCY = "₽"


def format_date(value: datetime) -> str:
    """Format a timestamp for the transaction list.

    Args:
        value: The transaction timestamp.

    Returns:
        A string like ``'10 March 2019 at 03:20'``.
    """
    return f"{value.day} {value:%B %Y} at {value:%H:%M}"


def format_amount(amount: Decimal, currency: str = DEFAULT_CURRENCY) -> str:
    """Format an amount with two decimals, digit grouping and currency.

    Args:
        amount: The amount to format; negative values keep their sign.
        currency: Currency symbol appended after the number.

    Returns:
        A string like ``'1,250.00 ₽'``.
    """
    return f"{amount:,.2f} {currency}"
