"""
API v1 Routes
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Router versione 1 dell'API.
"""

from fastapi import APIRouter

from quotebill.api.v1 import bills, quotations, settings, tools

# Router aggregato per v1
api_v1_router = APIRouter(prefix="/api/v1")

# Includi i router dei moduli
api_v1_router.include_router(quotations.router)
api_v1_router.include_router(bills.router)
api_v1_router.include_router(settings.router)
api_v1_router.include_router(tools.router)

# Esportazione
__all__ = ["api_v1_router"]
