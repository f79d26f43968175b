"""
Documento in modifica (preventivo o fattura)
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Contiene:
- Enum di stato per preventivi e fatture
- CompanyDefaults: valori predefiniti letti dalle impostazioni utente
- DocumentDraft: documento in memoria con le sue righe
- DocumentPreview: stringhe pronte per l'anteprima di stampa

I totali non sono mai uno stato modificabile: vengono ricalcolati
dalle righe a ogni richiesta.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional, Type, Union

from quotebill.domain.amount_words import amount_in_words
from quotebill.domain.currency import format_currency
from quotebill.domain.line_item import DiscountType, LineItem, new_item_id, with_discount_type
from quotebill.domain.numbering import DocumentKind, generate_document_number
from quotebill.domain.totals import DocumentTotals, calculate_totals, item_gross, item_net

# -------------------------------------------------------------------
# Enum di stato
# -------------------------------------------------------------------


class QuotationStatus(str, Enum):
    """Stati del preventivo. Il primo valore è il default."""
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class BillStatus(str, Enum):
    """Stati della fattura. Il primo valore è il default."""
    UNPAID = "unpaid"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


def status_enum(kind: DocumentKind) -> Type[Enum]:
    return QuotationStatus if DocumentKind(kind) is DocumentKind.QUOTATION else BillStatus


def default_status(kind: DocumentKind) -> str:
    return next(iter(status_enum(kind))).value


# -------------------------------------------------------------------
# Valori predefiniti
# -------------------------------------------------------------------

PLACEHOLDER_COMPANY_NAME = "<your-company-name>"
PLACEHOLDER_COMPANY_ADDRESS = "<your-company-address>"
PLACEHOLDER_COMPANY_PHONE = "<your-company-mobile-no>"
PLACEHOLDER_COMPANY_EMAIL = "<your-company-email>"
PLACEHOLDER_TERMS = "Payment due within 15 days. Service warranty applies for 30 days."

PLACEHOLDER_DESCRIPTION = "Basic Web Development"

_NEW_DOCUMENT_ITEM = {
    DocumentKind.QUOTATION: ("Default Quotation Item", 50.0),
    DocumentKind.BILL: ("Default Bill Item", 150.0),
}

_NEW_DOCUMENT_NOTES = {
    DocumentKind.QUOTATION: "Professional AC repair and maintenance services.",
    DocumentKind.BILL: "Thank you for choosing our services.",
}


@dataclass(frozen=True)
class CompanyDefaults:
    """Intestazione e testi predefiniti dell'utente."""
    company_name: str = PLACEHOLDER_COMPANY_NAME
    company_address: str = PLACEHOLDER_COMPANY_ADDRESS
    company_phone: str = PLACEHOLDER_COMPANY_PHONE
    company_email: str = PLACEHOLDER_COMPANY_EMAIL
    default_terms: str = PLACEHOLDER_TERMS
    default_notes: str = ""


# -------------------------------------------------------------------
# Documento
# -------------------------------------------------------------------


@dataclass
class DocumentDraft:
    """
    Documento in memoria, identico per preventivi e fatture.

    Attributes:
        kind: quotation o bill
        number: Numero leggibile (QUO-NNNNNN / BILL-NNNNNN)
        document_date: Data emissione
        due_date: Data scadenza
        items: Righe in ordine di inserimento
        status: Stato, default il primo valore dell'enum del tipo
        id: Identificativo persistito (None finché non salvato)
    """

    kind: DocumentKind
    number: str
    document_date: date
    due_date: date
    company_name: str = PLACEHOLDER_COMPANY_NAME
    company_address: str = PLACEHOLDER_COMPANY_ADDRESS
    company_phone: str = PLACEHOLDER_COMPANY_PHONE
    company_email: str = PLACEHOLDER_COMPANY_EMAIL
    client_name: str = ""
    client_address: str = ""
    items: List[LineItem] = field(default_factory=list)
    terms: str = PLACEHOLDER_TERMS
    notes: str = ""
    signature: str = ""
    status: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        self.kind = DocumentKind(self.kind)
        if self.status is None:
            self.status = default_status(self.kind)

    @property
    def is_pristine(self) -> bool:
        """True finché l'intestazione e i termini sono ancora i segnaposto."""
        return self.company_name == PLACEHOLDER_COMPANY_NAME and self.terms == PLACEHOLDER_TERMS

    @property
    def totals(self) -> DocumentTotals:
        return calculate_totals(self.items)

    # ------------------------------------------------------------
    # Modifica righe
    # ------------------------------------------------------------

    def add_item(self, description: str = "", rate: float = 0.0) -> LineItem:
        item = LineItem(id=new_item_id(), description=description, quantity=1, rate=rate)
        self.items.append(item)
        return item

    def update_item(self, item_id: int, **changes) -> LineItem:
        """
        Aggiorna i campi di una riga.

        Se discount_type è presente lo sconto viene sempre azzerato,
        anche se nella stessa chiamata è passato un valore di discount.

        Raises:
            KeyError: Riga non presente nel documento
        """
        for index, item in enumerate(self.items):
            if item.id != item_id:
                continue
            discount_type = changes.pop("discount_type", None)
            if discount_type is not None:
                item = with_discount_type(item, discount_type)
                changes.pop("discount", None)
            updated = replace(item, **changes)
            self.items[index] = updated
            return updated
        raise KeyError(item_id)

    def set_item_discount_type(self, item_id: int, discount_type: Union[str, DiscountType]) -> LineItem:
        """Cambia la modalità di sconto; lo sconto torna sempre a 0."""
        for index, item in enumerate(self.items):
            if item.id == item_id:
                self.items[index] = with_discount_type(item, discount_type)
                return self.items[index]
        raise KeyError(item_id)

    def remove_item(self, item_id: int) -> None:
        self.items = [item for item in self.items if item.id != item_id]


def new_document(
    kind: DocumentKind,
    defaults: Optional[CompanyDefaults] = None,
    today: Optional[date] = None,
    due_days: int = 15,
) -> DocumentDraft:
    """
    Crea un nuovo documento con valori segnaposto e una riga predefinita.

    Se defaults è fornito viene applicato subito (il documento è pristine).

    Args:
        kind: Tipo documento
        defaults: Impostazioni utente da applicare
        today: Data di emissione (default: oggi)
        due_days: Giorni fino alla scadenza
    """
    kind = DocumentKind(kind)
    today = today or date.today()
    description, rate = _NEW_DOCUMENT_ITEM[kind]

    draft = DocumentDraft(
        kind=kind,
        number=generate_document_number(kind),
        document_date=today,
        due_date=today + timedelta(days=due_days),
        items=[LineItem(id=1, description=description, quantity=1, rate=rate)],
        notes=_NEW_DOCUMENT_NOTES[kind],
    )
    if defaults is not None:
        hydrate_defaults(draft, defaults)
    return draft


def hydrate_defaults(draft: DocumentDraft, defaults: CompanyDefaults) -> bool:
    """
    Applica le impostazioni utente solo se il documento è ancora intatto.

    Returns:
        bool: True se i valori sono stati applicati
    """
    if not draft.is_pristine:
        return False

    draft.company_name = defaults.company_name
    draft.company_address = defaults.company_address
    draft.company_phone = defaults.company_phone
    draft.company_email = defaults.company_email
    draft.terms = defaults.default_terms
    draft.notes = defaults.default_notes
    return True


# -------------------------------------------------------------------
# Anteprima
# -------------------------------------------------------------------


@dataclass(frozen=True)
class PreviewRow:
    description: str
    quantity: float
    formatted_rate: str
    discount_label: str
    formatted_amount: str


@dataclass(frozen=True)
class DocumentPreview:
    """Contratto verso la presentazione: totali formattati e importo in lettere."""
    subtotal: float
    total_discount: float
    total: float
    formatted_subtotal: str
    formatted_discount: str
    formatted_total: str
    total_in_words: str
    show_discount_line: bool
    rows: List[PreviewRow] = field(default_factory=list)


def _plain_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def discount_label(item: LineItem, currency_label: str = "Rs.") -> str:
    """Etichetta sconto: "Rs. 1,000.00" per amount, "10%" per percentage."""
    if DiscountType.coerce(item.discount_type) is DiscountType.AMOUNT:
        return f"{currency_label} {format_currency(item.discount)}"
    return f"{_plain_number(item.discount)}%"


def build_preview(
    items: List[LineItem],
    show_discount: bool = True,
    currency_label: str = "Rs.",
    words_suffix: str = "Rupees Only",
    legacy_spacing: bool = False,
) -> DocumentPreview:
    """
    Costruisce le stringhe dell'anteprima.

    Con show_discount=False gli importi di riga sono lordi e il totale
    stampato coincide con il subtotal.
    """
    totals = calculate_totals(items)
    printed_total = totals.total if show_discount else totals.subtotal

    rows = [
        PreviewRow(
            description=item.description or PLACEHOLDER_DESCRIPTION,
            quantity=item.quantity,
            formatted_rate=format_currency(item.rate),
            discount_label=discount_label(item, currency_label),
            formatted_amount=format_currency(item_net(item) if show_discount else item_gross(item)),
        )
        for item in items
    ]

    return DocumentPreview(
        subtotal=totals.subtotal,
        total_discount=totals.total_discount,
        total=printed_total,
        formatted_subtotal=format_currency(totals.subtotal),
        formatted_discount=format_currency(totals.total_discount),
        formatted_total=format_currency(printed_total),
        total_in_words=amount_in_words(printed_total, words_suffix, legacy_spacing=legacy_spacing),
        show_discount_line=show_discount and totals.total_discount > 0,
        rows=rows,
    )
