"""
settings.py — Configurazione immutabile di un importo.

Ogni Money porta con sé un riferimento a un Settings. Le operazioni
aritmetiche riusano lo STESSO oggetto (nessuna copia); una copia nasce solo
quando si applica un override con with_overrides().
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Optional

from .rounding import RoundingMode


MAX_PRECISION = 15


class Grouping(Enum):
    """
    Raggruppamento delle cifre della parte intera.

    - STANDARD: gruppi di 3 da destra (1,234,567)
    - VEDIC: primo gruppo di 3, poi gruppi di 2 (12,34,567), sistema indiano
    """
    STANDARD = "standard"
    VEDIC = "vedic"


@dataclass(frozen=True)
class Settings:
    """
    Regole di parsing, arrotondamento e formattazione.

    Nei pattern `!` è il segnaposto del simbolo e `#` quello dell'importo.

    increment=None significa "una minor unit" (10^-precision); vedi
    rounding_increment.
    """
    symbol: str = "$"
    separator: str = ","
    decimal: str = "."
    format_with_symbol: bool = False
    error_on_invalid: bool = False
    precision: int = 2
    pattern: str = "!#"
    negative_pattern: str = "-!#"
    increment: Optional[float] = None
    grouping: Grouping = Grouping.STANDARD
    rounding: RoundingMode = RoundingMode.HALF_UP

    def __post_init__(self):
        for name in ("symbol", "separator", "decimal", "pattern", "negative_pattern"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"${name} must be a string, but provided value is: {value!r}")

        if not self.decimal:
            raise ValueError("$decimal must be a non-empty string, but provided value is: ''")

        for name in ("format_with_symbol", "error_on_invalid"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise TypeError(f"${name} must be a bool, but provided value is: {value!r}")

        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise TypeError(f"$precision must be an int, but provided value is: {self.precision!r}")
        if not 0 <= self.precision <= MAX_PRECISION:
            raise ValueError(
                f"$precision must be between 0 and {MAX_PRECISION}, but provided value is: {self.precision}"
            )

        if self.increment is not None:
            if isinstance(self.increment, bool) or not isinstance(self.increment, (int, float)):
                raise TypeError(f"$increment must be a number, but provided value is: {self.increment!r}")
            if not self.increment > 0:
                raise ValueError(f"$increment must be positive, but provided value is: {self.increment}")

        if not isinstance(self.grouping, Grouping):
            raise TypeError(f"$grouping must be a Grouping instance, but provided value is: {self.grouping!r}")
        if not isinstance(self.rounding, RoundingMode):
            raise TypeError(f"$rounding must be a RoundingMode instance, but provided value is: {self.rounding!r}")

    @property
    def scale(self) -> int:
        """Fattore di conversione major -> minor unit (10^precision)."""
        return 10 ** self.precision

    @property
    def rounding_increment(self) -> float:
        """Passo di arrotondamento usato in output."""
        if self.increment is None:
            return 1 / self.scale
        return self.increment

    def with_overrides(self, **overrides) -> Settings:
        """
        Restituisce un Settings con i campi indicati sostituiti.

        Senza override restituisce self: la copia avviene solo se serve.
        """
        if not overrides:
            return self

        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise TypeError(f"Unknown settings: {', '.join(unknown)}")

        return replace(self, **overrides)


DEFAULT_SETTINGS = Settings()
