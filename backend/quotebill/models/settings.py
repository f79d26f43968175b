"""
Modello SQLAlchemy per le Impostazioni Azienda
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Una riga per utente: intestazione e testi usati per precompilare
i nuovi documenti.
"""

from __future__ import annotations

import uuid

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from quotebill.domain.document import CompanyDefaults
from quotebill.models import Base
from quotebill.models.mixins import TimestampMixin, UUIDMixin


class CompanySettings(Base, UUIDMixin, TimestampMixin):
    """
    Impostazioni azienda dell'utente.

    Attributes:
        user_id: Utente proprietario (unico)
        logo_url / signature_url: URL su storage esterno
        default_terms / default_notes: Testi copiati nei nuovi documenti
        tax_number / bank_details: Dati finanziari stampati in anteprima
    """

    __tablename__ = "company_settings"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        unique=True,
        doc="Utente proprietario",
    )

    company_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    company_address: Mapped[str] = mapped_column(Text, nullable=False, default="")
    company_phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    company_email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    company_website: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    logo_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    signature_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    default_terms: Mapped[str] = mapped_column(Text, nullable=False, default="")
    default_notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tax_number: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    bank_details: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def to_defaults(self) -> CompanyDefaults:
        """Valori usati per precompilare un nuovo documento."""
        return CompanyDefaults(
            company_name=self.company_name,
            company_address=self.company_address,
            company_phone=self.company_phone,
            company_email=self.company_email,
            default_terms=self.default_terms,
            default_notes=self.default_notes,
        )

    def __repr__(self) -> str:
        return f"<CompanySettings(user_id={self.user_id}, company={self.company_name!r})>"
