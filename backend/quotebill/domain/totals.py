"""
Calcolo totali documento
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Funzioni pure: nessun clamp, nessun minimo a zero. Uno sconto a importo
superiore al lordo produce un netto (e un totale) negativo.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from quotebill.domain.line_item import DiscountType, LineItem


@dataclass(frozen=True)
class DocumentTotals:
    """Totali derivati da una lista di righe."""
    subtotal: float = 0.0
    total_discount: float = 0.0
    total: float = 0.0


def item_gross(item: LineItem) -> float:
    """Lordo riga: quantità × prezzo."""
    return item.quantity * item.rate


def item_discount_amount(item: LineItem) -> float:
    """Importo sconto riga secondo la modalità."""
    if DiscountType.coerce(item.discount_type) is DiscountType.PERCENTAGE:
        return (item_gross(item) * item.discount) / 100
    return item.discount


def item_net(item: LineItem) -> float:
    """Netto riga: lordo meno sconto."""
    return item_gross(item) - item_discount_amount(item)


def calculate_totals(items: Iterable[LineItem]) -> DocumentTotals:
    """
    Calcola subtotal, sconto totale e totale.

    L'ordine delle righe non influisce sul risultato. Lista vuota → zeri.

    Args:
        items: Righe del documento

    Returns:
        DocumentTotals: total è sempre subtotal - total_discount
    """
    subtotal = 0.0
    total_discount = 0.0
    for item in items:
        subtotal += item_gross(item)
        total_discount += item_discount_amount(item)

    return DocumentTotals(
        subtotal=subtotal,
        total_discount=total_discount,
        total=subtotal - total_discount,
    )
