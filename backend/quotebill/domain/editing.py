"""
Buffer di modifica per i campi importo
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Ogni campo numerico editabile è una piccola macchina a stati:

    Committed(value) --focus--> Editing(raw_text) --blur--> Committed(parse(raw_text))

Durante la modifica si mostra il testo grezzo (con le virgole inserite
mentre si digita); la formattazione canonica torna solo al blur.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union

from quotebill.domain.currency import (
    format_currency,
    group_digits,
    is_numeric_input,
    parse_currency,
)


@dataclass(frozen=True)
class Committed:
    value: float


@dataclass(frozen=True)
class Editing:
    raw_text: str


FieldState = Union[Committed, Editing]


def _identity(value: float) -> float:
    return value


def _seed(value: float) -> str:
    return "" if value == 0 else format_currency(value)


class NumericField:
    """
    Campo importo con buffer di modifica esplicito.

    Args:
        value: Valore iniziale confermato
        clamp: Funzione applicata al valore al blur (es. clamp_rate)
    """

    def __init__(self, value: float = 0.0, clamp: Optional[Callable[[float], float]] = None) -> None:
        self.state: FieldState = Committed(value)
        self._committed = value
        self._clamp = clamp or _identity

    @property
    def is_editing(self) -> bool:
        return isinstance(self.state, Editing)

    @property
    def value(self) -> float:
        """Ultimo valore confermato (invariato durante la modifica)."""
        if isinstance(self.state, Committed):
            return self.state.value
        return self._committed

    @property
    def display(self) -> str:
        """Testo da mostrare nel campo."""
        if isinstance(self.state, Editing):
            return self.state.raw_text
        return _seed(self.state.value)

    def focus(self) -> None:
        """Entra in modifica partendo dal valore formattato."""
        if isinstance(self.state, Editing):
            return
        self._committed = self.state.value
        self.state = Editing(_seed(self.state.value))

    def edit(self, text: str) -> bool:
        """
        Aggiorna il buffer con il testo digitato.

        Returns:
            bool: False se il testo contiene caratteri non ammessi (buffer invariato)
        """
        if not is_numeric_input(text):
            return False
        if not isinstance(self.state, Editing):
            self.focus()
        self.state = Editing(group_digits(text))
        return True

    def blur(self) -> float:
        """Conferma il buffer e torna allo stato Committed."""
        if isinstance(self.state, Editing):
            self.state = Committed(self._clamp(parse_currency(self.state.raw_text)))
        return self.state.value

    def set_value(self, value: float) -> None:
        """Imposta il valore dall'esterno, annullando un'eventuale modifica."""
        self.state = Committed(value)
