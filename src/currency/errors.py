"""Eccezioni del pacchetto currency."""


class CurrencyError(Exception):
    """Base per tutti gli errori sollevati da currency."""


class InvalidInputError(CurrencyError, TypeError):
    """
    Input non interpretabile come importo.

    Sollevato SOLO quando Settings.error_on_invalid è True e il valore non è
    né numero, né stringa, né Money. Stringhe malformate non sono errori:
    valgono zero.
    """

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid Input: {type(value).__name__} ({value!r})")
