"""
Dependency Injection per l'utente corrente
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

L'autenticazione è delegata a un servizio esterno (gateway) che
inoltra l'identificativo dell'utente nell'header X-User-Id.
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status


async def get_current_user_id(
    x_user_id: Optional[str] = Header(
        None,
        alias="X-User-Id",
        description="UUID dell'utente autenticato",
    ),
) -> UUID:
    """
    Dependency per ottenere l'utente corrente.

    Returns:
        UUID dell'utente

    Raises:
        HTTPException 401: Header assente o non valido
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Utente non autenticato",
        )

    try:
        return UUID(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="ID utente non valido",
        )


# Type alias per uso nelle route
CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]
