"""Shared utilities used across the booking wizard."""

import re
from typing import Optional

from toltimed.config import settings


def normalize_phone(value: str) -> str:
    """Normalize a phone number by stripping everything except digits and a leading +.

    Examples:
        >>> normalize_phone("0803 123 4567")
        '08031234567'
        >>> normalize_phone("+234 (803) 123-4567")
        '+2348031234567'
    """
    value = value.strip()
    if value.startswith("+"):
        return "+" + re.sub(r"[^\d]", "", value[1:])
    return re.sub(r"[^\d]", "", value)


def format_currency(amount: float, symbol: Optional[str] = None) -> str:
    """Render an amount with thousands separators, dropping a zero fraction.

    Examples:
        >>> format_currency(24500, "₦")
        '₦24,500'
        >>> format_currency(1234.5, "₦")
        '₦1,234.50'
    """
    symbol = settings.wizard.currency_symbol if symbol is None else symbol
    if float(amount).is_integer():
        return f"{symbol}{int(amount):,}"
    return f"{symbol}{amount:,.2f}"
