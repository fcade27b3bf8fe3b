"""
core.py — Importi monetari a virgola fissa su interi scalati

================================================================================
DESIGN PRINCIPLES
================================================================================

1. RAPPRESENTAZIONE INTERNA
   Interi scalati: importo reale x 10^precision (centesimi con precision=2).
   Il float `value` è solo derivato: value == int_value / scale.

2. INPUT ETEROGENEO
   Numeri, stringhe ("$1,234.56", "(1.99)") e altri Money passano tutti
   dal Parser, che produce l'intero scalato.

3. IMMUTABILITA
   Frozen dataclass. Ogni operazione restituisce nuova istanza che
   condivide per riferimento lo stesso Settings dell'operando.

4. NESSUN DRIFT
   Ogni risultato è ricostruito da zero (parse -> scala -> tronca a 4
   decimali -> arrotonda). L'errore float di un passaggio non si accumula
   nel successivo:

       >>> 0.1 + 0.2
       0.30000000000000004
       >>> money(0.1).add(0.2).value
       0.3

5. DISTRIBUZIONE ESATTA
   distribute(n) garantisce sum(parts) == self, i centesimi di resto
   vanno alle prime parti.

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Optional, Union
import logging
import math
import re

from .errors import InvalidInputError
from .formatting import format_money, to_string
from .rounding import apply_rounding
from .settings import DEFAULT_SETTINGS, Settings

logger = logging.getLogger(__name__)


Number = Union[int, float, Decimal]
Value = Union[Number, str, "Money"]

# Cifre usate per assorbire gli artefatti float della moltiplicazione per scale
PARSE_DIGITS = 4

_PARENTHESES = re.compile(r"\((.*)\)")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


# ==============================================================================
# PARSER
# ==============================================================================

def _clean_numeric_string(text: str, decimal: str) -> str:
    """Riduce "($1,234.56)" a "-1234.56" secondo il separatore decimale."""
    text = _PARENTHESES.sub(r"-\1", text, count=1)
    text = re.sub(f"[^-0-9{re.escape(decimal)}]", "", text)
    return text.replace(decimal, ".")


def _invalid(value: object, settings: Settings) -> float:
    if settings.error_on_invalid:
        raise InvalidInputError(value)
    logger.debug(f"Unsupported input {type(value).__name__} ({value!r}) resolved to 0")
    return 0.0


def parse(value: Value, settings: Settings = DEFAULT_SETTINGS, use_rounding: bool = True) -> Number:
    """
    Converte un input in intero scalato.

    Args:
        value: numero (importo reale), stringa o Money
        settings: precision, separatore decimale, error_on_invalid, rounding
        use_rounding: se False restituisce il float troncato a 4 decimali,
            senza arrotondare (serve a divide())

    Returns:
        int se use_rounding, altrimenti float

    Raises:
        InvalidInputError: se l'input non è numero/stringa/Money e
            settings.error_on_invalid è True

    Stringhe non numeriche valgono 0: è una scelta, non un errore.
    """
    scale = settings.scale

    if isinstance(value, Money):
        v = value.value * scale
    elif _is_number(value):
        try:
            v = float(value) * scale
        except OverflowError:
            v = math.inf
        if not math.isfinite(v):
            v = _invalid(value, settings)
    elif isinstance(value, str):
        cleaned = _clean_numeric_string(value, settings.decimal)
        try:
            v = float(cleaned) * scale
        except ValueError:
            v = math.nan
        if not math.isfinite(v):
            logger.debug(f"Non numeric string {value!r} resolved to 0")
            v = 0.0
    else:
        v = _invalid(value, settings)

    v = round(v, PARSE_DIGITS)

    return apply_rounding(v, settings.rounding) if use_rounding else v


# ==============================================================================
# MONEY CLASS
# ==============================================================================

@dataclass(frozen=True, slots=True, eq=False)
class Money:
    """
    Importo monetario a virgola fissa.

    INVARIANTI:
    1. _int_value è sempre int
    2. value == _int_value / scale
    3. nessuna operazione modifica un'istanza esistente
    4. sum(distribute(n)) == self per ogni n >= 1
    5. ==, <, > confrontano l'importo esatto, non i Settings:
       money(1.5) == money(1.5, precision=3, symbol="€")

    USAGE:
        price = money("$1,234.56")
        total = price.multiply(3).subtract(10)
        total.format(True)              # "$3,693.68"
        [str(p) for p in money(10).distribute(3)]   # ["3.34", "3.33", "3.33"]
    """
    _int_value: int
    _settings: Settings = DEFAULT_SETTINGS

    # -------------------------------------------------------------------------
    # Costruttori
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, value: Value = 0, settings: Settings = DEFAULT_SETTINGS) -> Money:
        """Costruttore generico: passa dal Parser (con arrotondamento)."""
        return cls(_int_value=parse(value, settings), _settings=settings)

    @classmethod
    def of_minor(cls, int_value: int, settings: Settings = DEFAULT_SETTINGS) -> Money:
        """
        Costruttore da intero scalato (centesimi con precision=2).
        Nessuna conversione, massima precisione.
        """
        if isinstance(int_value, bool) or not isinstance(int_value, int):
            raise TypeError(f"$int_value must be an int, but provided value is: {int_value!r}")
        return cls(_int_value=int_value, _settings=settings)

    def _rebuild(self, real_value: Number) -> Money:
        return Money.of(real_value, self._settings)

    # -------------------------------------------------------------------------
    # Operazioni aritmetiche
    # -------------------------------------------------------------------------

    def add(self, other: Value) -> Money:
        return self._rebuild((self._int_value + parse(other, self._settings)) / self.scale)

    def subtract(self, other: Value) -> Money:
        return self._rebuild((self._int_value - parse(other, self._settings)) / self.scale)

    def multiply(self, factor: Number) -> Money:
        """
        Moltiplica per uno scalare.

        Il fattore è un rapporto, non un importo: NON passa dal Parser
        (money(2).multiply("3") è un TypeError, money(2).add("3") no).
        """
        if not _is_number(factor):
            raise TypeError(
                f"Money può essere moltiplicato solo per un numero, "
                f"non {type(factor).__name__}."
            )
        return self._rebuild(self._int_value * float(factor) / self.scale)

    def divide(self, divisor: Value) -> Money:
        """
        Divide per un numero, una stringa o un Money.

        Il divisore è scalato senza arrotondare; il quoziente è trattato
        come importo reale e arrotondato una sola volta, nella costruzione
        del risultato.

        Raises:
            ZeroDivisionError: se il divisore vale 0
        """
        scaled = parse(divisor, self._settings, use_rounding=False)
        if scaled == 0:
            raise ZeroDivisionError(f"Cannot divide Money by zero ({divisor!r})")
        return self._rebuild(self._int_value / scaled)

    # -------------------------------------------------------------------------
    # Distribuzione
    # -------------------------------------------------------------------------

    def distribute(self, count: int) -> list[Money]:
        """
        Distribuisce l'importo in count parti con somma ESATTA.

        Ogni parte vale int_value / count arrotondato verso zero; le minor
        unit di resto vanno, una ciascuna, alle prime parti (aggiunte se
        l'importo è positivo, sottratte se negativo).

        Args:
            count: numero di parti, count == 0 restituisce []

        Raises:
            TypeError: se count non è int
            ValueError: se count < 0
        """
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"$count must be an int, but provided value is: {count!r}")
        if count < 0:
            raise ValueError(f"$count must be >= 0, but provided value is: {count}")
        if count == 0:
            return []

        int_value = self._int_value
        if int_value >= 0:
            split = int_value // count
            step = 1
        else:
            split = -(-int_value // count)
            step = -1
        pennies = abs(int_value - split * count)

        return [
            Money.of_minor(split + (step if i < pennies else 0), self._settings)
            for i in range(count)
        ]

    # -------------------------------------------------------------------------
    # Operatori
    # -------------------------------------------------------------------------

    def __add__(self, other):
        if isinstance(other, Money) or _is_number(other):
            return self.add(other)
        return NotImplemented

    def __radd__(self, other):
        # sum(parts) parte da 0
        return self.__add__(other)

    def __sub__(self, other):
        if isinstance(other, Money) or _is_number(other):
            return self.subtract(other)
        return NotImplemented

    def __rsub__(self, other):
        if _is_number(other):
            return Money.of(other, self._settings).subtract(self)
        return NotImplemented

    def __mul__(self, factor):
        if _is_number(factor):
            return self.multiply(factor)
        return NotImplemented

    def __rmul__(self, factor):
        return self.__mul__(factor)

    def __truediv__(self, divisor):
        if isinstance(divisor, Money) or _is_number(divisor):
            return self.divide(divisor)
        return NotImplemented

    def __neg__(self) -> Money:
        return Money.of_minor(-self._int_value, self._settings)

    def __abs__(self) -> Money:
        return Money.of_minor(abs(self._int_value), self._settings)

    # -------------------------------------------------------------------------
    # Comparazione
    # -------------------------------------------------------------------------

    def _cross(self, other: Money) -> tuple[int, int]:
        # Confronto esatto anche tra precision diverse
        return self._int_value * other.scale, other._int_value * self.scale

    def __eq__(self, other) -> bool:
        # Stesso importo, anche con Settings diversi: coerente con < e >
        if not isinstance(other, Money):
            return NotImplemented
        a, b = self._cross(other)
        return a == b

    def __hash__(self) -> int:
        return hash(Fraction(self._int_value, self.scale))

    def __lt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        a, b = self._cross(other)
        return a < b

    def __le__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        a, b = self._cross(other)
        return a <= b

    def __gt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        a, b = self._cross(other)
        return a > b

    def __ge__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        a, b = self._cross(other)
        return a >= b

    # -------------------------------------------------------------------------
    # Proprietà e output
    # -------------------------------------------------------------------------

    @property
    def int_value(self) -> int:
        """Valore scalato (centesimi, ecc.). Per persistenza/calcoli."""
        return self._int_value

    @property
    def value(self) -> float:
        """
        Valore reale.

        ATTENZIONE: restituisce float, usare per display e serializzazione.
        """
        return self._int_value / self.scale

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def scale(self) -> int:
        return self._settings.scale

    def dollars(self) -> int:
        """Parte intera, troncata verso zero."""
        sign = -1 if self._int_value < 0 else 1
        return sign * (abs(self._int_value) // self.scale)

    def cents(self) -> int:
        """Parte frazionaria in minor unit, con il segno dell'importo."""
        sign = -1 if self._int_value < 0 else 1
        return sign * (abs(self._int_value) % self.scale)

    def is_positive(self) -> bool:
        return self._int_value > 0

    def is_negative(self) -> bool:
        return self._int_value < 0

    def is_zero(self) -> bool:
        return self._int_value == 0

    def format(self, use_symbol: Optional[bool] = None) -> str:
        """Stringa per display, secondo pattern/negative_pattern."""
        return format_money(self, use_symbol)

    def to_string(self) -> str:
        """Stringa numerica canonica ("1234.50"), senza simbolo né separatori."""
        return to_string(self)

    def to_json(self) -> float:
        return self.value

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Money('{self.to_string()}', precision={self._settings.precision})"


def money(value: Value = 0, settings: Optional[Settings] = None, **overrides) -> Money:
    """
    Factory pubblica.

        money(1.5)
        money("1.234,56", decimal=",", separator=".")
        money(10, my_settings, precision=3)

    Gli override clonano settings (o DEFAULT_SETTINGS); senza override il
    Settings passato è condiviso così com'è.
    """
    base = DEFAULT_SETTINGS if settings is None else settings
    return Money.of(value, base.with_overrides(**overrides))
