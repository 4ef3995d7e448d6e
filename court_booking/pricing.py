from typing import Sequence

from court_booking import config
from court_booking.models import Slot


def calculate_total(selection: Sequence[Slot], hourly_rate: float) -> float:
    """Total cost of a selection: one slot is one hour at the court's hourly rate."""
    if hourly_rate < 0:
        raise ValueError(f"Hourly rate cannot be negative, got {hourly_rate}")
    return len(selection) * hourly_rate


def format_price(amount: float, currency: str = config.CURRENCY) -> str:
    """Formats an amount with '.' as thousands separator, e.g. '150.000 VND'."""
    return f"{round(amount):,} {currency}".replace(",", ".")
