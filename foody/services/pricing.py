"""
Money helpers for checkout totals
"""
import math
from typing import Iterable, Tuple
from foody.config import TAX_RATE


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round to `digits` decimals with halves going up: 12.5 -> 13.
    The builtin round() would give 12.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def compute_tax(subtotal: float) -> float:
    """Tax on a subtotal, rounded half-up to a whole unit"""
    return round_half_up(subtotal * TAX_RATE)


def compute_totals(lines: Iterable[Tuple[float, int]]) -> Tuple[float, float, float]:
    """
    (subtotal, tax, total) for (unit_price, quantity) lines.
    total is always subtotal + tax.
    """
    subtotal = sum(price * quantity for price, quantity in lines)
    tax = compute_tax(subtotal)
    return subtotal, tax, subtotal + tax
