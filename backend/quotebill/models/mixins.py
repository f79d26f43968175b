"""
Mixin SQLAlchemy per modelli
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Mixin riutilizzabili per aggiungere funzionalità comuni ai modelli.
Preventivi e fatture condividono la stessa struttura: le colonne comuni
sono definite in DocumentMixin e DocumentItemMixin.
"""

import datetime
import uuid

from sqlalchemy import Date, DateTime, Float, Integer, String, Text, Uuid
from sqlalchemy import event
from sqlalchemy.orm import Mapped, mapped_column, Session
from sqlalchemy.sql import func

from quotebill.domain.line_item import DiscountType, LineItem


class TimestampMixin:
    """
    Mixin per gestione automatica timestamp creazione e aggiornamento.

    Aggiunge i campi:
    - created_at: data/ora di creazione record (impostato automaticamente)
    - updated_at: data/ora ultimo aggiornamento (aggiornato automaticamente)
    """

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Data/ora di creazione del record",
    )

    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Data/ora ultimo aggiornamento del record",
    )


class UUIDMixin:
    """Mixin per ID UUID generato server-side."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        doc="UUID primary key",
    )


class DocumentMixin:
    """
    Colonne comuni a preventivi e fatture.

    I totali sono una fotografia scritta al salvataggio per le liste:
    non sono mai la fonte di verità in modifica.
    """

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        doc="Utente proprietario (fornito dal servizio di autenticazione esterno)",
    )

    # ------------------------------------------------------------
    # Intestazione
    # ------------------------------------------------------------
    company_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    company_address: Mapped[str] = mapped_column(Text, nullable=False, default="")
    company_phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    company_email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    client_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    client_address: Mapped[str] = mapped_column(Text, nullable=False, default="")

    due_date: Mapped[datetime.date] = mapped_column(
        Date,
        nullable=False,
        doc="Data scadenza",
    )

    # ------------------------------------------------------------
    # Totali (fotografia)
    # ------------------------------------------------------------
    subtotal: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        doc="Somma dei lordi di riga",
    )

    total_discount: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        doc="Somma degli sconti di riga",
    )

    total_amount: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        doc="subtotal - total_discount (può essere negativo)",
    )

    # ------------------------------------------------------------
    # Testi
    # ------------------------------------------------------------
    terms: Mapped[str] = mapped_column(Text, nullable=False, default="")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    signature: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        doc="URL dell'immagine firma (upload gestito esternamente)",
    )


class DocumentItemMixin:
    """Colonne comuni alle righe di preventivo e fattura."""

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    quantity: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    discount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    discount_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DiscountType.PERCENTAGE.value,
        doc="percentage | amount",
    )
    amount: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        doc="Netto riga al momento del salvataggio",
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        doc="Ordine di inserimento nel documento",
    )

    def to_line_item(self) -> LineItem:
        """Converte la riga persistita nel value object di dominio."""
        return LineItem(
            id=self.position + 1,
            description=self.description or "",
            quantity=self.quantity or 0,
            rate=self.rate or 0,
            discount=self.discount or 0,
            discount_type=DiscountType.coerce(self.discount_type),
        )


# ------------------------------------------------------------
# Event Listeners
# ------------------------------------------------------------
@event.listens_for(Session, "before_flush")
def update_timestamp(session: Session, flush_context, instances) -> None:
    """
    Event listener per aggiornare automaticamente il campo updated_at
    degli oggetti modificati (dirty) e nuovi (new) prima di ogni flush.
    """
    now = datetime.datetime.now(datetime.timezone.utc)

    for obj in session.dirty:
        if hasattr(obj, 'updated_at'):
            if session.is_modified(obj, include_collections=False):
                obj.updated_at = now

    for obj in session.new:
        if hasattr(obj, 'updated_at'):
            obj.updated_at = now
