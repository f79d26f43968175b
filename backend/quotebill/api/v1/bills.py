"""
Router FastAPI per le Fatture
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Definisce gli endpoint API per la gestione delle fatture:
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
    BillCreate,
    BillStatusUpdate,
    BillUpdate,
)
from quotebill.services.document_service import BillService

# Logger per questo modulo
logger = logging.getLogger(__name__)

# Istanza del service
bill_service = BillService()

# Router con prefix e tag
router = APIRouter(
    prefix="/bills",
    tags=["Fatture"],
)


# -------------------------------------------------------------------
# Endpoints per Fatture
# -------------------------------------------------------------------

@router.get(
    "/",
    name="fatture_lista",
    summary="Lista fatture",
    description="Recupera la lista paginata delle fatture dell'utente, dalla più recente.",
    response_model=DocumentList,
    status_code=status.HTTP_200_OK,
)
async def get_bills(
    user_id: CurrentUserId,
    status_filter: Optional[str] = Query(
        None,
        description="Filtro per stato (unpaid, paid, overdue, cancelled)"
    ),
    page: int = Query(1, ge=1, description="Numero pagina"),
    per_page: int = Query(10, ge=1, le=100, description="Elementi per pagina"),
    db: AsyncSession = Depends(get_db),
) -> DocumentList:
    """
    Recupera la lista paginata delle fatture.
    """
    return await bill_service.get_all(
        db=db,
        user_id=user_id,
        status_filter=status_filter,
        page=page,
        per_page=per_page,
    )


@router.get(
    "/new",
    name="fattura_nuova",
    summary="Nuova fattura",
    description="Restituisce una fattura non salvata, precompilata con le impostazioni azienda.",
    response_model=DraftRead,
    status_code=status.HTTP_200_OK,
)
async def new_bill(
    user_id: CurrentUserId,
    db: AsyncSession = Depends(get_db),
) -> DraftRead:
    """
    Il numero restituito è una proposta: viene verificato al salvataggio.
    """
    return await bill_service.new_draft(db=db, user_id=user_id)


@router.post(
    "/",
    name="crea_fattura",
    summary="Crea fattura",
    description="Salva una nuova fattura. I totali sono ricalcolati dalle righe.",
    response_model=DocumentRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_bill(
    user_id: CurrentUserId,
    data: BillCreate,
    db: AsyncSession = Depends(get_db),
) -> DocumentRead:
    """
    Crea una fattura.

    Se il numero proposto è già in uso ne viene generato uno nuovo.
    """
    return await bill_service.create(db=db, user_id=user_id, data=data)


@router.get(
    "/{bill_id}",
    name="fattura_dettaglio",
    summary="Dettaglio fattura",
    description="Recupera una fattura con le sue righe.",
    response_model=DocumentRead,
    status_code=status.HTTP_200_OK,
)
async def get_bill(
    user_id: CurrentUserId,
    bill_id: uuid.UUID = Path(..., description="UUID della fattura"),
    db: AsyncSession = Depends(get_db),
) -> DocumentRead:
    return await bill_service.get_by_id(db=db, user_id=user_id, document_id=bill_id)


@router.put(
    "/{bill_id}",
    name="aggiorna_fattura",
    summary="Aggiorna fattura",
    description="Aggiorna una fattura sostituendo le righe. Il numero non cambia.",
    response_model=DocumentRead,
    status_code=status.HTTP_200_OK,
)
async def update_bill(
    user_id: CurrentUserId,
    bill_id: uuid.UUID = Path(..., description="UUID della fattura"),
    data: BillUpdate = ...,
    db: AsyncSession = Depends(get_db),
) -> DocumentRead:
    return await bill_service.update(
        db=db,
        user_id=user_id,
        document_id=bill_id,
        data=data,
    )


@router.patch(
    "/{bill_id}/status",
    name="stato_fattura",
    summary="Cambia stato fattura",
    description="Imposta lo stato della fattura (unpaid, paid, overdue, cancelled).",
    response_model=DocumentRead,
    status_code=status.HTTP_200_OK,
)
async def update_bill_status(
    user_id: CurrentUserId,
    bill_id: uuid.UUID = Path(..., description="UUID della fattura"),
    data: BillStatusUpdate = ...,
    db: AsyncSession = Depends(get_db),
) -> DocumentRead:
    return await bill_service.update_status(
        db=db,
        user_id=user_id,
        document_id=bill_id,
        status=data.status.value,
    )


@router.delete(
    "/{bill_id}",
    name="elimina_fattura",
    summary="Elimina fattura",
    description="Elimina la fattura e tutte le sue righe.",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_bill(
    user_id: CurrentUserId,
    bill_id: uuid.UUID = Path(..., description="UUID della fattura"),
    db: AsyncSession = Depends(get_db),
) -> None:
    await bill_service.delete(db=db, user_id=user_id, document_id=bill_id)


@router.get(
    "/{bill_id}/preview",
    name="anteprima_fattura",
    summary="Anteprima fattura",
    description="Totali formattati e importo in lettere della fattura.",
    response_model=DocumentPreviewRead,
    status_code=status.HTTP_200_OK,
)
async def preview_bill(
    user_id: CurrentUserId,
    bill_id: uuid.UUID = Path(..., description="UUID della fattura"),
    show_discount: bool = Query(
        True,
        description="Se False le righe sono stampate al lordo e il totale è il subtotal"
    ),
    db: AsyncSession = Depends(get_db),
) -> DocumentPreviewRead:
    preview = await bill_service.preview(
        db=db,
        user_id=user_id,
        document_id=bill_id,
        show_discount=show_discount,
    )
    return DocumentPreviewRead.model_validate(preview)
