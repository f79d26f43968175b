"""
Righe documento (LineItem)
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Value object condiviso da preventivi e fatture, con i clamp applicati
al confine del form di modifica (mai dentro il calcolo dei totali).
"""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union


class DiscountType(str, Enum):
    """Modalità di sconto della riga."""
    PERCENTAGE = "percentage"
    AMOUNT = "amount"

    @classmethod
    def coerce(cls, value: Optional[Union[str, "DiscountType"]]) -> "DiscountType":
        """Valore mancante o sconosciuto → percentage (come i record storici)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.PERCENTAGE


@dataclass(frozen=True)
class LineItem:
    """
    Una riga fatturabile.

    Attributes:
        id: Identificativo univoco solo all'interno del documento
        description: Testo libero, può essere vuoto
        quantity: Quantità (>= 1 dopo il blur, valori transitori ammessi)
        rate: Prezzo unitario nella valuta operativa
        discount: Valore sconto, interpretato secondo discount_type
        discount_type: percentage (% del lordo) o amount (importo assoluto)
    """

    id: int
    description: str = ""
    quantity: float = 1
    rate: float = 0
    discount: float = 0
    discount_type: DiscountType = DiscountType.PERCENTAGE


def new_item_id() -> int:
    """Id riga: millisecondi correnti + rumore 0..999."""
    return int(time.time() * 1000) + random.randint(0, 999)


def with_discount_type(item: LineItem, discount_type: Union[str, DiscountType]) -> LineItem:
    """
    Cambia la modalità di sconto di una riga.

    Lo sconto viene sempre azzerato: il valore non viene convertito
    tra percentuale e importo.
    """
    return replace(item, discount_type=DiscountType.coerce(discount_type), discount=0)


# ------------------------------------------------------------
# Clamp al confine del form
# ------------------------------------------------------------

def clamp_quantity(text: str) -> int:
    """Quantità al blur: vuoto → 1, altrimenti max(1, parte intera)."""
    text = (text or "").strip()
    if not text:
        return 1
    try:
        value = float(text)
    except ValueError:
        return 1
    if not math.isfinite(value):
        return 1
    return max(1, int(value))


def clamp_rate(value: float) -> float:
    """Prezzo unitario al blur: mai negativo."""
    return max(0.0, value)


def clamp_discount(value: float, discount_type: Union[str, DiscountType]) -> float:
    """Sconto al blur: [0, 100] per percentage, >= 0 senza limite per amount."""
    upper = 100.0 if DiscountType.coerce(discount_type) is DiscountType.PERCENTAGE else math.inf
    return min(upper, max(0.0, value))
