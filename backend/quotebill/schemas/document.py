"""
Schemas Pydantic per Preventivi e Fatture
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Contiene:
- Schemas per le righe (LineItem)
- Schemas documento comuni, specializzati per Quotation e Bill
- Schemas per lista paginata, cambio stato e anteprima
- Schemas per il calcolo totali senza persistenza
"""

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from quotebill.domain.document import BillStatus, QuotationStatus
from quotebill.domain.line_item import DiscountType, LineItem, clamp_discount


# -------------------------------------------------------------------
# Schemas per LineItem
# -------------------------------------------------------------------

class LineItemBase(BaseModel):
    """Schema base per le righe del documento."""

    description: str = Field(
        "",
        max_length=2000,
        description="Descrizione della riga (può essere vuota)",
    )
    quantity: float = Field(
        1,
        ge=0,
        description="Quantità",
    )
    rate: float = Field(
        0,
        ge=0,
        description="Prezzo unitario",
    )
    discount: float = Field(
        0,
        ge=0,
        description="Sconto: percentuale (0-100) o importo secondo discount_type",
    )
    discount_type: DiscountType = Field(
        DiscountType.PERCENTAGE,
        description="Modalità sconto: percentage o amount",
        serialization_alias="discountType",
    )

    model_config = ConfigDict(from_attributes=True)


class LineItemInput(LineItemBase):
    """Schema per una riga inviata dal form."""

    @model_validator(mode="after")
    def clamp_percentage(self) -> "LineItemInput":
        """Sconto percentuale limitato a 100, importo senza limite superiore."""
        self.discount = clamp_discount(self.discount, self.discount_type)
        return self

    def to_line_item(self, item_id: int) -> LineItem:
        return LineItem(
            id=item_id,
            description=self.description,
            quantity=self.quantity,
            rate=self.rate,
            discount=self.discount,
            discount_type=self.discount_type,
        )


class LineItemRead(LineItemBase):
    """Schema per la lettura di una riga persistita."""

    id: uuid.UUID = Field(..., description="UUID della riga")
    amount: float = Field(..., description="Netto riga al salvataggio")
    position: int = Field(..., description="Ordine di inserimento")


# -------------------------------------------------------------------
# Schemas Documento
# -------------------------------------------------------------------

class DocumentBase(BaseModel):
    """Campi comuni a preventivi e fatture."""

    company_name: str = Field("", max_length=255, serialization_alias="companyName")
    company_address: str = Field("", serialization_alias="companyAddress")
    company_phone: str = Field("", max_length=50, serialization_alias="companyPhone")
    company_email: str = Field("", max_length=255, serialization_alias="companyEmail")
    client_name: str = Field("", max_length=255, serialization_alias="clientName")
    client_address: str = Field("", serialization_alias="clientAddress")
    document_date: date = Field(
        ...,
        description="Data emissione",
        serialization_alias="documentDate",
    )
    due_date: date = Field(
        ...,
        description="Data scadenza",
        serialization_alias="dueDate",
    )
    terms: str = Field("", description="Termini e condizioni")
    notes: str = Field("", description="Note stampate sul documento")
    signature: str = Field("", description="URL immagine firma")

    model_config = ConfigDict(from_attributes=True)


class DocumentWrite(DocumentBase):
    """Campi scrivibili: le righe. I totali non sono mai accettati dal client."""

    items: list[LineItemInput] = Field(
        default_factory=list,
        description="Righe in ordine di inserimento",
    )

    def line_items(self) -> list[LineItem]:
        return [item.to_line_item(index + 1) for index, item in enumerate(self.items)]


class QuotationCreate(DocumentWrite):
    """Schema per la creazione di un preventivo."""

    number: Optional[str] = Field(
        None,
        pattern=r"^QUO-\d{6}$",
        description="Numero proposto dal client (rigenerato se già in uso)",
    )
    status: QuotationStatus = Field(QuotationStatus.DRAFT, description="Stato iniziale")


class QuotationUpdate(DocumentWrite):
    """Schema per l'aggiornamento di un preventivo. Il numero non cambia mai."""

    status: QuotationStatus = Field(QuotationStatus.DRAFT, description="Stato")


class BillCreate(DocumentWrite):
    """Schema per la creazione di una fattura."""

    number: Optional[str] = Field(
        None,
        pattern=r"^BILL-\d{6}$",
        description="Numero proposto dal client (rigenerato se già in uso)",
    )
    status: BillStatus = Field(BillStatus.UNPAID, description="Stato iniziale")


class BillUpdate(DocumentWrite):
    """Schema per l'aggiornamento di una fattura. Il numero non cambia mai."""

    status: BillStatus = Field(BillStatus.UNPAID, description="Stato")


class QuotationStatusUpdate(BaseModel):
    status: QuotationStatus


class BillStatusUpdate(BaseModel):
    status: BillStatus


class DocumentRead(DocumentBase):
    """Schema per la lettura di un documento con righe e totali salvati."""

    id: uuid.UUID = Field(..., description="UUID del documento")
    number: str = Field(..., description="Numero documento")
    status: str = Field(..., description="Stato")
    subtotal: float = Field(..., description="Somma dei lordi")
    total_discount: float = Field(..., serialization_alias="totalDiscount")
    total_amount: float = Field(..., serialization_alias="totalAmount")
    items: list[LineItemRead] = Field(default_factory=list)
    created_at: datetime = Field(..., serialization_alias="createdAt")
    updated_at: datetime = Field(..., serialization_alias="updatedAt")


class DocumentListItem(BaseModel):
    """Riga della lista documenti."""

    id: uuid.UUID
    number: str
    client_name: str = Field(..., serialization_alias="clientName")
    document_date: date = Field(..., serialization_alias="documentDate")
    total_amount: float = Field(..., serialization_alias="totalAmount")
    status: str

    model_config = ConfigDict(from_attributes=True)


class DocumentList(BaseModel):
    """Schema per la lista paginata dei documenti."""

    items: list[DocumentListItem] = Field(default_factory=list)
    total: int = Field(..., description="Numero totale di documenti", serialization_alias="totalItems")
    page: int = Field(..., description="Pagina corrente")
    per_page: int = Field(..., description="Elementi per pagina", serialization_alias="perPage")
    total_pages: int = Field(..., description="Numero totale di pagine", serialization_alias="totalPages")


# -------------------------------------------------------------------
# Schemas Anteprima
# -------------------------------------------------------------------

class PreviewRowRead(BaseModel):
    description: str
    quantity: float
    formatted_rate: str = Field(..., serialization_alias="formattedRate")
    discount_label: str = Field(..., serialization_alias="discountLabel")
    formatted_amount: str = Field(..., serialization_alias="formattedAmount")

    model_config = ConfigDict(from_attributes=True)


class DocumentPreviewRead(BaseModel):
    """Totali formattati e importo in lettere per l'anteprima di stampa."""

    subtotal: float
    total_discount: float = Field(..., serialization_alias="totalDiscount")
    total: float
    formatted_subtotal: str = Field(..., serialization_alias="formattedSubtotal")
    formatted_discount: str = Field(..., serialization_alias="formattedDiscount")
    formatted_total: str = Field(..., serialization_alias="formattedTotal")
    total_in_words: str = Field(..., serialization_alias="totalInWords")
    show_discount_line: bool = Field(..., serialization_alias="showDiscountLine")
    rows: list[PreviewRowRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class DraftRead(DocumentBase):
    """Nuovo documento non ancora salvato, già precompilato."""

    number: str
    status: str
    items: list[LineItemBase] = Field(default_factory=list)
    preview: DocumentPreviewRead


# -------------------------------------------------------------------
# Schemas calcolo senza persistenza
# -------------------------------------------------------------------

class TotalsRequest(BaseModel):
    """Righe per il ricalcolo live dei totali."""

    items: list[LineItemInput] = Field(default_factory=list)
    show_discount: bool = Field(True, description="Se False il totale stampato è il subtotal")


class AmountInWordsRead(BaseModel):
    amount: float
    words: str
    formatted: str
