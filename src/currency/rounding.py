"""
rounding.py — Da importo scalato a intero in minor unit.

Il Parser arrotonda una sola volta per costruzione: l'importo reale viene
moltiplicato per 10^precision, troncato a 4 decimali e solo allora
convertito nell'intero memorizzato. Settings.rounding sceglie come.

    money(0.125)                                  -> 13 (12.5 -> 13)
    money(-0.125)                                 -> -12 (-12.5 -> -12)
    money(0.125, rounding=RoundingMode.HALF_EVEN) -> 12

Anche to_string() passa di qui, sempre con HALF_UP, per portare il valore
al multiplo di increment.
"""

from __future__ import annotations
from enum import Enum
import math


class RoundingMode(Enum):
    """
    Come il Parser porta l'importo scalato all'intero.

    - HALF_UP: floor(v + 0.5), il pareggio va verso +infinito (default)
    - HALF_EVEN: pareggio verso la cifra pari, 12.5 -> 12
    - DOWN: verso zero, scarta le frazioni di minor unit
    - UP: via da zero, ogni frazione vale una minor unit
    - HALF_DOWN: pareggio verso zero, 12.5 -> 12 e -12.5 -> -12
    """
    HALF_UP = "half_up"
    HALF_EVEN = "half_even"
    DOWN = "down"
    UP = "up"
    HALF_DOWN = "half_down"


_STRATEGIES = {
    RoundingMode.HALF_UP: lambda v: math.floor(v + 0.5),
    RoundingMode.HALF_EVEN: round,
    RoundingMode.DOWN: math.trunc,
    RoundingMode.UP: lambda v: math.ceil(v) if v >= 0 else math.floor(v),
    RoundingMode.HALF_DOWN: lambda v: math.ceil(v - 0.5) if v >= 0 else math.floor(v + 0.5),
}


def apply_rounding(value: float, mode: RoundingMode = RoundingMode.HALF_UP) -> int:
    """Intero in minor unit per $value già scalato."""
    strategy = _STRATEGIES.get(mode)
    if strategy is None:
        raise ValueError(f"Unknown rounding mode: {mode}")

    return strategy(value)
