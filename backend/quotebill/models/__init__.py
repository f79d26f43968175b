"""
Modelli Database SQLAlchemy
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Import centralizzato di tutti i modelli per reset_db.py e usage generico.

Modelli:
- Quotation / QuotationItem: Preventivi e relative righe
- Bill / BillItem: Fatture e relative righe
- CompanySettings: Intestazione e testi predefiniti per utente
"""

# SQLAlchemy 2.0 Base declarativa
# Importato qui per essere disponibile per tutti i modelli
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class per tutti i modelli SQLAlchemy."""
    pass


from quotebill.models.quotation import Quotation, QuotationItem
from quotebill.models.bill import Bill, BillItem
from quotebill.models.settings import CompanySettings

__all__ = [
    "Base",
    "Quotation",
    "QuotationItem",
    "Bill",
    "BillItem",
    "CompanySettings",
]
