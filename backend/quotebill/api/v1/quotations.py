"""
Router FastAPI per i Preventivi
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Definisce gli endpoint API per la gestione dei preventivi:
CRUD, cambio stato, nuovo documento precompilato e anteprima.
"""

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from quotebill.core.database import get_db
from quotebill.core.deps import CurrentUserId
from quotebill.schemas.document import (
    DocumentList,
    DocumentPreviewRead,
    DocumentRead,
    DraftRead,
    QuotationCreate,
    QuotationStatusUpdate,
    QuotationUpdate,
)
from quotebill.services.document_service import QuotationService

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Istanza del service
quotation_service = QuotationService()

# Router con prefix e tag
router = APIRouter(
    prefix="/quotations",
    tags=["Preventivi"],
)


# -------------------------------------------------------------------
# Endpoints per Preventivi
# -------------------------------------------------------------------

@router.get(
    "/",
    name="preventivi_lista",
    summary="Lista preventivi",
    description="Recupera la lista paginata dei preventivi dell'utente, dal più recente.",
    response_model=DocumentList,
    status_code=status.HTTP_200_OK,
)
async def get_quotations(
    user_id: CurrentUserId,
    status_filter: Optional[str] = Query(
        None,
        description="Filtro per stato (draft, sent, accepted, rejected)"
    ),
    page: int = Query(1, ge=1, description="Numero pagina"),
    per_page: int = Query(10, ge=1, le=100, description="Elementi per pagina"),
    db: AsyncSession = Depends(get_db),
) -> DocumentList:
    """
    Recupera la lista paginata dei preventivi.
    """
    return await quotation_service.get_all(
        db=db,
        user_id=user_id,
        status_filter=status_filter,
        page=page,
        per_page=per_page,
    )


@router.get(
    "/new",
    name="preventivo_nuovo",
    summary="Nuovo preventivo",
    description="Restituisce un preventivo non salvato, precompilato con le impostazioni azienda.",
    response_model=DraftRead,
    status_code=status.HTTP_200_OK,
)
async def new_quotation(
    user_id: CurrentUserId,
    db: AsyncSession = Depends(get_db),
) -> DraftRead:
    """
    Il numero restituito è una proposta: viene verificato al salvataggio.
    """
    return await quotation_service.new_draft(db=db, user_id=user_id)


@router.post(
    "/",
    name="crea_preventivo",
    summary="Crea preventivo",
    description="Salva un nuovo preventivo. I totali sono ricalcolati dalle righe.",
    response_model=DocumentRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_quotation(
    user_id: CurrentUserId,
    data: QuotationCreate,
    db: AsyncSession = Depends(get_db),
) -> DocumentRead:
    """
    Crea un preventivo.

    Se il numero proposto è già in uso ne viene generato uno nuovo.
    """
    return await quotation_service.create(db=db, user_id=user_id, data=data)


@router.get(
    "/{quotation_id}",
    name="preventivo_dettaglio",
    summary="Dettaglio preventivo",
    description="Recupera un preventivo con le sue righe.",
    response_model=DocumentRead,
    status_code=status.HTTP_200_OK,
)
async def get_quotation(
    user_id: CurrentUserId,
    quotation_id: uuid.UUID = Path(..., description="UUID del preventivo"),
    db: AsyncSession = Depends(get_db),
) -> DocumentRead:
    return await quotation_service.get_by_id(db=db, user_id=user_id, document_id=quotation_id)


@router.put(
    "/{quotation_id}",
    name="aggiorna_preventivo",
    summary="Aggiorna preventivo",
    description="Aggiorna un preventivo sostituendo le righe. Il numero non cambia.",
    response_model=DocumentRead,
    status_code=status.HTTP_200_OK,
)
async def update_quotation(
    user_id: CurrentUserId,
    quotation_id: uuid.UUID = Path(..., description="UUID del preventivo"),
    data: QuotationUpdate = ...,
    db: AsyncSession = Depends(get_db),
) -> DocumentRead:
    return await quotation_service.update(
        db=db,
        user_id=user_id,
        document_id=quotation_id,
        data=data,
    )


@router.patch(
    "/{quotation_id}/status",
    name="stato_preventivo",
    summary="Cambia stato preventivo",
    description="Imposta lo stato del preventivo (draft, sent, accepted, rejected).",
    response_model=DocumentRead,
    status_code=status.HTTP_200_OK,
)
async def update_quotation_status(
    user_id: CurrentUserId,
    quotation_id: uuid.UUID = Path(..., description="UUID del preventivo"),
    data: QuotationStatusUpdate = ...,
    db: AsyncSession = Depends(get_db),
) -> DocumentRead:
    return await quotation_service.update_status(
        db=db,
        user_id=user_id,
        document_id=quotation_id,
        status=data.status.value,
    )


@router.delete(
    "/{quotation_id}",
    name="elimina_preventivo",
    summary="Elimina preventivo",
    description="Elimina il preventivo e tutte le sue righe.",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_quotation(
    user_id: CurrentUserId,
    quotation_id: uuid.UUID = Path(..., description="UUID del preventivo"),
    db: AsyncSession = Depends(get_db),
) -> None:
    await quotation_service.delete(db=db, user_id=user_id, document_id=quotation_id)


@router.get(
    "/{quotation_id}/preview",
    name="anteprima_preventivo",
    summary="Anteprima preventivo",
    description="Totali formattati e importo in lettere del preventivo.",
    response_model=DocumentPreviewRead,
    status_code=status.HTTP_200_OK,
)
async def preview_quotation(
    user_id: CurrentUserId,
    quotation_id: uuid.UUID = Path(..., description="UUID del preventivo"),
    show_discount: bool = Query(
        True,
        description="Se False le righe sono stampate al lordo e il totale è il subtotal"
    ),
    db: AsyncSession = Depends(get_db),
) -> DocumentPreviewRead:
    preview = await quotation_service.preview(
        db=db,
        user_id=user_id,
        document_id=quotation_id,
        show_discount=show_discount,
    )
    return DocumentPreviewRead.model_validate(preview)
