"""Currency and contact-number formatting helpers."""

import re
from typing import Optional


def format_brl(value: Optional[float]) -> str:
    """Format a number as Brazilian reais, e.g. ``R$ 1.250.000,00``."""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        amount = 0.0
    sign = "-" if amount < 0 else ""
    # en-US grouping first, then swap separators for pt-BR
    text = f"{abs(amount):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"


def digits_only(value: Optional[str]) -> str:
    """Strip every non-digit character from a phone number."""
    if not value:
        return ""
    return re.sub(r"\D", "", str(value))
