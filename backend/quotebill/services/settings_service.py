"""
Service Layer per le Impostazioni Azienda
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Un solo record per utente. Se l'utente non ha ancora salvato nulla
vengono restituiti i valori predefiniti.
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from quotebill.core.exceptions import PersistenceError
from quotebill.domain.document import (
    PLACEHOLDER_COMPANY_ADDRESS,
    PLACEHOLDER_COMPANY_EMAIL,
    PLACEHOLDER_COMPANY_NAME,
    PLACEHOLDER_COMPANY_PHONE,
    CompanyDefaults,
)
from quotebill.models import CompanySettings
from quotebill.schemas.settings import CompanySettingsRead, CompanySettingsUpdate

# Logger per questo modulo
logger = logging.getLogger(__name__)


DEFAULT_TERMS = """1. Payment due within 15 days from the date of invoice, overdue interest @ 14% will be charged on delayed payments.

2. Please quote invoice number when remitting funds.

3. All services come with a 30-day warranty from the date of completion.

4. Emergency service calls are subject to additional charges."""

DEFAULT_NOTES = """Thank you for choosing our AC repair services. We provide professional air conditioning repair, maintenance, and installation services with experienced technicians and quality parts.

For any technical support or warranty claims, please contact us within the warranty period."""

DEFAULT_COMPANY_SETTINGS = {
    "company_name": PLACEHOLDER_COMPANY_NAME,
    "company_address": PLACEHOLDER_COMPANY_ADDRESS,
    "company_phone": PLACEHOLDER_COMPANY_PHONE,
    "company_email": PLACEHOLDER_COMPANY_EMAIL,
    "company_website": "<your-company-web>",
    "logo_url": "",
    "signature_url": "",
    "default_terms": DEFAULT_TERMS,
    "default_notes": DEFAULT_NOTES,
    "tax_number": "",
    "bank_details": "",
}


class SettingsService:
    """Lettura e salvataggio delle impostazioni azienda per utente."""

    async def _fetch(self, db: AsyncSession, user_id: uuid.UUID) -> CompanySettings | None:
        stmt = select(CompanySettings).where(CompanySettings.user_id == user_id)
        try:
            result = await db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Errore lettura impostazioni utente {user_id}: {e}")
            raise PersistenceError("Impossibile leggere le impostazioni azienda") from e
        return result.scalar_one_or_none()

    async def get(self, db: AsyncSession, user_id: uuid.UUID) -> CompanySettingsRead:
        """
        Impostazioni salvate dell'utente o valori predefiniti.

        Returns:
            CompanySettingsRead: id è None se restituiti i predefiniti
        """
        stored = await self._fetch(db, user_id)
        if stored is None:
            return CompanySettingsRead(**DEFAULT_COMPANY_SETTINGS)
        return CompanySettingsRead.model_validate(stored)

    async def get_defaults(self, db: AsyncSession, user_id: uuid.UUID) -> CompanyDefaults:
        """Valori per precompilare un nuovo documento."""
        stored = await self._fetch(db, user_id)
        if stored is None:
            return CompanyDefaults(
                company_name=DEFAULT_COMPANY_SETTINGS["company_name"],
                company_address=DEFAULT_COMPANY_SETTINGS["company_address"],
                company_phone=DEFAULT_COMPANY_SETTINGS["company_phone"],
                company_email=DEFAULT_COMPANY_SETTINGS["company_email"],
                default_terms=DEFAULT_TERMS,
                default_notes=DEFAULT_NOTES,
            )
        return stored.to_defaults()

    async def save(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        data: CompanySettingsUpdate,
    ) -> CompanySettings:
        """
        Inserisce o aggiorna le impostazioni dell'utente.

        Raises:
            PersistenceError: Errore del database
        """
        stored = await self._fetch(db, user_id)
        created = stored is None
        if created:
            stored = CompanySettings(user_id=user_id)
            db.add(stored)

        for field, value in data.model_dump().items():
            setattr(stored, field, value)

        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Errore salvataggio impostazioni utente {user_id}: {e}")
            raise PersistenceError("Salvataggio impostazioni non riuscito") from e

        await db.refresh(stored)
        logger.info(f"Impostazioni utente {user_id} {'create' if created else 'aggiornate'}")
        return stored
