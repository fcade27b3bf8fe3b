"""
currency — Fixed-point money arithmetic without floating-point drift

Amounts are stored as integers scaled by 10^precision; input may be a
number, a formatted string or another Money, and every result is rebuilt
from scratch so float errors never accumulate.

================================================================================
QUICK START
================================================================================

Basic usage:

    from currency import money

    >>> 0.1 + 0.2
    0.30000000000000004
    >>> money(0.1).add(0.2).value
    0.3

    # Parse formatted input
    price = money("$1,234.56")
    refund = money("(1.99)")            # -1.99

    # Distribute (sum ALWAYS equals original)
    parts = money(10).distribute(3)     # 3.34, 3.33, 3.33

    # Display
    money(1234.5).format(True)          # "$1,234.50"

Custom settings:

    from currency import money, Settings, Grouping

    euro = Settings(symbol="€", separator=".", decimal=",", pattern="# !")
    money("1.234,56", euro).format(True)                  # "1.234,56 €"
    money(1234567.89, grouping=Grouping.VEDIC).format()   # "12,34,567.89"

Events:

    from currency import EventEmitter

    emitter = EventEmitter()
    emitter.on("paid", lambda event, amount: print(event.type, amount))
    emitter.trigger("paid", money(5))

================================================================================
"""

from .core import (
    Money,
    money,
    parse,
)
from .errors import CurrencyError, InvalidInputError
from .events import Event, EventEmitter, Observable
from .formatting import group_digits, group_standard, group_vedic
from .rounding import RoundingMode
from .settings import DEFAULT_SETTINGS, Grouping, Settings

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Core
    "Money",
    "money",
    "parse",
    "Settings",
    "DEFAULT_SETTINGS",
    "Grouping",
    "RoundingMode",
    "group_digits",
    "group_standard",
    "group_vedic",
    # Errors
    "CurrencyError",
    "InvalidInputError",
    # Events
    "Event",
    "EventEmitter",
    "Observable",
]
