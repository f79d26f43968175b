"""
Schemas Pydantic per il progetto QuoteBill

Questo modulo contiene tutti gli schemi Pydantic utilizzati per la validazione
e serializzazione delle risposte API.
"""

# Import degli schemi per renderli disponibili tramite import diretto
# es: from quotebill.schemas import QuotationCreate, DocumentRead, etc.

from quotebill.schemas.document import (
    AmountInWordsRead,
    BillCreate,
    BillStatusUpdate,
    BillUpdate,
    DocumentList,
    DocumentListItem,
    DocumentPreviewRead,
    DocumentRead,
    DocumentWrite,
    DraftRead,
    LineItemBase,
    LineItemInput,
    LineItemRead,
    QuotationCreate,
    QuotationStatusUpdate,
    QuotationUpdate,
    TotalsRequest,
)
from quotebill.schemas.settings import (
    CompanySettingsRead,
    CompanySettingsUpdate,
)

__all__ = [
    "AmountInWordsRead",
    "BillCreate",
    "BillStatusUpdate",
    "BillUpdate",
    "DocumentList",
    "DocumentListItem",
    "DocumentPreviewRead",
    "DocumentRead",
    "DocumentWrite",
    "DraftRead",
    "LineItemBase",
    "LineItemInput",
    "LineItemRead",
    "QuotationCreate",
    "QuotationStatusUpdate",
    "QuotationUpdate",
    "TotalsRequest",
    "CompanySettingsRead",
    "CompanySettingsUpdate",
]
