"""Rupee amount formatting with Indian digit grouping."""

from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOL = "₹"


def _group_indian(digits: str) -> str:
    # Last three digits form one group, the rest are grouped in pairs: 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_amount(value: float, max_fraction_digits: int = 3) -> str:
    """Format a number the way en-IN locale formatting does (no currency sign).

    Up to ``max_fraction_digits`` decimals are kept and trailing zeros dropped,
    so 1234567 -> "12,34,567" and 1499.5 -> "1,499.5".
    """
    quantum = Decimal(1).scaleb(-max_fraction_digits)
    amount = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    text = format(abs(amount), "f")
    whole, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0")
    out = sign + _group_indian(whole)
    if fraction:
        out += "." + fraction
    return out


def format_inr(value: float) -> str:
    """Format a rupee amount, e.g. 2500 -> "₹2,500"."""
    return f"{CURRENCY_SYMBOL}{format_amount(value)}"
