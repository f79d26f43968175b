"""
Modelli SQLAlchemy per le Fatture
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Contiene:
- Bill: Fattura
- BillItem: Righe della fattura
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import List

from sqlalchemy import Date, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, synonym

from quotebill.domain.numbering import DocumentKind
from quotebill.domain.document import BillStatus
from quotebill.models import Base
from quotebill.models.mixins import DocumentItemMixin, DocumentMixin, TimestampMixin, UUIDMixin


class Bill(Base, UUIDMixin, TimestampMixin, DocumentMixin):
    """
    Modello per le fatture.

    Attributes:
        bill_number: Numero leggibile (formato: BILL-NNNNNN), unico nella tabella
        bill_date: Data emissione
        status: unpaid | paid | overdue | cancelled

    Relationships:
        items: Righe della fattura, in ordine di inserimento
    """

    __tablename__ = "bills"

    kind = DocumentKind.BILL

    bill_number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        doc="Numero fattura (formato: BILL-NNNNNN)",
    )

    bill_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        doc="Data emissione fattura",
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=BillStatus.UNPAID.value,
        doc="Stato della fattura",
    )

    items: Mapped[List["BillItem"]] = relationship(
        "BillItem",
        back_populates="bill",
        cascade="all, delete-orphan",
        order_by="BillItem.position",
        lazy="selectin",
        doc="Righe della fattura",
    )

    # Nomi neutri usati dal service condiviso
    number = synonym("bill_number")
    document_date = synonym("bill_date")

    __table_args__ = (
        Index("ix_bills_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Bill(id={self.id}, number={self.bill_number}, total={self.total_amount})>"


class BillItem(Base, UUIDMixin, TimestampMixin, DocumentItemMixin):
    """Riga della fattura."""

    __tablename__ = "bill_items"

    bill_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("bills.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="UUID della fattura padre",
    )

    bill: Mapped["Bill"] = relationship(
        "Bill",
        back_populates="items",
    )

    def __repr__(self) -> str:
        return f"<BillItem(id={self.id}, description={self.description!r}, amount={self.amount})>"
