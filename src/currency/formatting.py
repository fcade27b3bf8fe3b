"""
formatting.py — Rendering of Money values as human readable strings.

Two layers:

    to_string(m)     canonical fixed-decimal string, e.g. "-1234.50"
                     (rounded to settings.rounding_increment, no symbol,
                     no grouping)

    format_money(m)  display string built from the pattern templates,
                     e.g. "-$1,234.50" or "1.234,50 €"

Digit grouping is an explicit function per Grouping member.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import TYPE_CHECKING, Callable, Optional

from .rounding import RoundingMode, apply_rounding
from .settings import Grouping

if TYPE_CHECKING:
    from .core import Money


SYMBOL_PLACEHOLDER = "!"
AMOUNT_PLACEHOLDER = "#"


def group_standard(digits: str, separator: str) -> str:
    """Insert $separator every 3 digits from the right: 1234567 -> 1,234,567."""
    head = len(digits) % 3 or 3
    groups = [digits[:head]]
    groups.extend(digits[i:i + 3] for i in range(head, len(digits), 3))
    return separator.join(groups)


def group_vedic(digits: str, separator: str) -> str:
    """Indian numbering: last 3 digits, then groups of 2: 1234567 -> 12,34,567."""
    if len(digits) <= 3:
        return digits

    head, tail = digits[:-3], digits[-3:]
    first = len(head) % 2 or 2
    groups = [head[:first]]
    groups.extend(head[i:i + 2] for i in range(first, len(head), 2))
    groups.append(tail)
    return separator.join(groups)


_GROUPERS: dict[Grouping, Callable[[str, str], str]] = {
    Grouping.STANDARD: group_standard,
    Grouping.VEDIC: group_vedic,
}


def group_digits(digits: str, separator: str, grouping: Grouping = Grouping.STANDARD) -> str:
    grouper = _GROUPERS.get(grouping)
    if grouper is None:
        raise ValueError(f"Unknown grouping: {grouping}")
    return grouper(digits, separator)


def _to_fixed(value: float, digits: int) -> str:
    # Ties on the exact binary expansion go away from zero
    exact = Decimal(value)
    quantum = Decimal(1).scaleb(-digits)
    with localcontext() as ctx:
        # Whole digits + fraction digits must fit the context precision
        ctx.prec = max(ctx.prec, exact.adjusted() + digits + 2)
        return str(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def to_string(money: Money) -> str:
    """Canonical numeric string, independent of symbol and pattern."""
    settings = money.settings
    increment = settings.rounding_increment
    rounded = apply_rounding(money.value / increment, RoundingMode.HALF_UP) * increment
    return _to_fixed(rounded, settings.precision)


def format_money(money: Money, use_symbol: Optional[bool] = None) -> str:
    settings = money.settings
    if use_symbol is None:
        use_symbol = settings.format_with_symbol

    text = to_string(money)
    if text.startswith("-"):
        text = text[1:]
    whole, _, fraction = text.partition(".")

    amount = group_digits(whole, settings.separator, settings.grouping)
    if fraction:
        amount += settings.decimal + fraction

    template = settings.pattern if money.value >= 0 else settings.negative_pattern
    return (
        template
        .replace(SYMBOL_PLACEHOLDER, settings.symbol if use_symbol else "", 1)
        .replace(AMOUNT_PLACEHOLDER, amount, 1)
    )
