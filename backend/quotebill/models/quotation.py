"""
Modelli SQLAlchemy per i Preventivi
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Contiene:
- Quotation: Preventivo
- QuotationItem: Righe del preventivo
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import List

from sqlalchemy import Date, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, synonym

from quotebill.domain.numbering import DocumentKind
from quotebill.domain.document import QuotationStatus
from quotebill.models import Base
from quotebill.models.mixins import DocumentItemMixin, DocumentMixin, TimestampMixin, UUIDMixin


class Quotation(Base, UUIDMixin, TimestampMixin, DocumentMixin):
    """
    Modello per i preventivi.

    Attributes:
        quotation_number: Numero leggibile (formato: QUO-NNNNNN), unico nella tabella
        quotation_date: Data emissione
        status: draft | sent | accepted | rejected

    Relationships:
        items: Righe del preventivo, in ordine di inserimento
    """

    __tablename__ = "quotations"

    kind = DocumentKind.QUOTATION

    quotation_number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        doc="Numero preventivo (formato: QUO-NNNNNN)",
    )

    quotation_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        doc="Data emissione preventivo",
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=QuotationStatus.DRAFT.value,
        doc="Stato del preventivo",
    )

    items: Mapped[List["QuotationItem"]] = relationship(
        "QuotationItem",
        back_populates="quotation",
        cascade="all, delete-orphan",
        order_by="QuotationItem.position",
        lazy="selectin",
        doc="Righe del preventivo",
    )

    # Nomi neutri usati dal service condiviso
    number = synonym("quotation_number")
    document_date = synonym("quotation_date")

    __table_args__ = (
        Index("ix_quotations_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Quotation(id={self.id}, number={self.quotation_number}, total={self.total_amount})>"


class QuotationItem(Base, UUIDMixin, TimestampMixin, DocumentItemMixin):
    """Riga del preventivo."""

    __tablename__ = "quotation_items"

    quotation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("quotations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="UUID del preventivo padre",
    )

    quotation: Mapped["Quotation"] = relationship(
        "Quotation",
        back_populates="items",
    )

    def __repr__(self) -> str:
        return f"<QuotationItem(id={self.id}, description={self.description!r}, amount={self.amount})>"
