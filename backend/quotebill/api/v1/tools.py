"""
Router FastAPI per gli strumenti di calcolo
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Calcoli senza persistenza usati dal form durante la modifica:
totali live e importo in lettere.
"""

import logging

from fastapi import APIRouter, Query, status

from quotebill.core.config import settings
from quotebill.domain.amount_words import amount_in_words
from quotebill.domain.currency import format_currency
from quotebill.schemas.document import AmountInWordsRead, DocumentPreviewRead, TotalsRequest
from quotebill.services.document_service import build_document_preview

# Logger per questo modulo
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tools",
    tags=["Strumenti"],
)


@router.post(
    "/totals",
    name="calcola_totali",
    summary="Calcola totali",
    description="Ricalcola subtotal, sconto, totale e importo in lettere per un elenco di righe.",
    response_model=DocumentPreviewRead,
    status_code=status.HTTP_200_OK,
)
async def calculate_document_totals(data: TotalsRequest) -> DocumentPreviewRead:
    """
    Le righe ricevono un id posizionale: nessun dato viene salvato.
    """
    line_items = [item.to_line_item(index + 1) for index, item in enumerate(data.items)]
    preview = build_document_preview(line_items, show_discount=data.show_discount)
    return DocumentPreviewRead.model_validate(preview)


@router.get(
    "/amount-in-words",
    name="importo_in_lettere",
    summary="Importo in lettere",
    description="Converte un importo nella dicitura stampata sul documento.",
    response_model=AmountInWordsRead,
    status_code=status.HTTP_200_OK,
)
async def get_amount_in_words(
    amount: float = Query(..., description="Importo da convertire"),
) -> AmountInWordsRead:
    return AmountInWordsRead(
        amount=amount,
        words=amount_in_words(
            amount,
            settings.amount_words_suffix,
            legacy_spacing=settings.amount_words_legacy_spacing,
        ),
        formatted=format_currency(amount),
    )
