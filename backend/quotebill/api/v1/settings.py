"""
Router FastAPI per le Impostazioni Azienda
Progetto: QuoteBill (Gestionale Preventivi e Fatture)
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from quotebill.core.database import get_db
from quotebill.core.deps import CurrentUserId
from quotebill.schemas.settings import CompanySettingsRead, CompanySettingsUpdate
from quotebill.services.settings_service import SettingsService

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Istanza del service
settings_service = SettingsService()

router = APIRouter(
    prefix="/settings",
    tags=["Impostazioni"],
)


@router.get(
    "/",
    name="impostazioni_dettaglio",
    summary="Impostazioni azienda",
    description="Restituisce le impostazioni salvate o i valori predefiniti.",
    response_model=CompanySettingsRead,
    status_code=status.HTTP_200_OK,
)
async def get_company_settings(
    user_id: CurrentUserId,
    db: AsyncSession = Depends(get_db),
) -> CompanySettingsRead:
    return await settings_service.get(db=db, user_id=user_id)


@router.put(
    "/",
    name="salva_impostazioni",
    summary="Salva impostazioni azienda",
    description="Crea o aggiorna le impostazioni azienda dell'utente.",
    response_model=CompanySettingsRead,
    status_code=status.HTTP_200_OK,
)
async def save_company_settings(
    user_id: CurrentUserId,
    data: CompanySettingsUpdate,
    db: AsyncSession = Depends(get_db),
) -> CompanySettingsRead:
    """
    I valori salvati vengono usati per precompilare i nuovi documenti.
    """
    return await settings_service.save(db=db, user_id=user_id, data=data)
