"""
Numerazione documenti
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Formato: PREFISSO-NNNNNN (es. QUO-483920, BILL-120044).

Il numero generato lato client è solo una proposta: al primo salvataggio
viene verificato contro la persistenza e rigenerato in caso di collisione.
"""

from __future__ import annotations

import logging
import random
import time
from enum import Enum
from typing import Awaitable, Callable, Optional

# Logger per questo modulo
logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10

ExistsCheck = Callable[["DocumentKind", str], Awaitable[bool]]


class DocumentKind(str, Enum):
    """Tipi di documento gestiti."""
    QUOTATION = "quotation"
    BILL = "bill"

    @property
    def prefix(self) -> str:
        return _PREFIXES[self]


_PREFIXES = {
    DocumentKind.QUOTATION: "QUO",
    DocumentKind.BILL: "BILL",
}


def generate_document_number(kind: DocumentKind) -> str:
    """Numero casuale a 6 cifre in [100000, 999999] con il prefisso del tipo."""
    return f"{DocumentKind(kind).prefix}-{random.randint(100000, 999999)}"


def fallback_document_number(kind: DocumentKind, now_ms: Optional[int] = None) -> str:
    """Ultime 6 cifre del timestamp epoch in millisecondi. Non verificato."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{DocumentKind(kind).prefix}-{str(now_ms)[-6:]}"


async def generate_unique_document_number(
    kind: DocumentKind,
    exists: ExistsCheck,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    """
    Genera un numero non ancora presente nella persistenza.

    Logica:
    1. Genera un candidato casuale
    2. Verifica con exists(kind, candidato), in sequenza, mai in parallelo
    3. Dopo max_attempts collisioni usa il numero da timestamp

    Args:
        kind: Tipo documento
        exists: Verifica asincrona di esistenza (globale per tipo, non per utente)
        max_attempts: Numero massimo di verifiche

    Returns:
        str: Numero documento

    Raises:
        Qualsiasi errore sollevato da exists: un errore di query non attiva
        il fallback, il chiamante deve annullare il salvataggio.
    """
    kind = DocumentKind(kind)
    for attempt in range(1, max_attempts + 1):
        candidate = generate_document_number(kind)
        if not await exists(kind, candidate):
            return candidate
        logger.info(f"Numero {candidate} già in uso (tentativo {attempt}/{max_attempts})")

    fallback = fallback_document_number(kind)
    logger.warning(
        f"Nessun numero {kind.value} libero dopo {max_attempts} tentativi, uso {fallback}"
    )
    return fallback


async def resolve_number_for_insert(
    kind: DocumentKind,
    proposed: Optional[str],
    exists: ExistsCheck,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    """
    Numero definitivo al primo inserimento di un documento.

    Mantiene il numero proposto dal client se libero, altrimenti
    ne genera uno nuovo. Mai usato per gli aggiornamenti.
    """
    if proposed and not await exists(kind, proposed):
        return proposed
    return await generate_unique_document_number(kind, exists, max_attempts)
