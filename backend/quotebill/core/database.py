"""
Accesso al database di QuoteBill.
Progetto: QuoteBill (Gestionale Preventivi e Fatture)

Un solo engine async condiviso da API e reset_db.py. Ogni richiesta
riceve una sessione propria: i servizi dei documenti fanno commit
esplicito, qui si annulla solo ciò che resta aperto dopo un errore.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from quotebill.core.config import settings

logger = logging.getLogger(__name__)

engine: AsyncEngine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
)

# expire_on_commit=False: i documenti restituiti dopo il commit
# vengono serializzati senza ricaricare righe e totali
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Sessione per richiesta, usata dai router di preventivi, fatture e impostazioni."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            if session.in_transaction():
                await session.rollback()
            raise


def _safe_url() -> str:
    return engine.url.render_as_string(hide_password=True)


async def init_db() -> None:
    """
    Verifica all'avvio che il database dei documenti sia raggiungibile.

    Raises:
        Exception: L'errore del driver, così il lifespan interrompe l'avvio
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database {_safe_url()} non raggiungibile: {e}")
        raise
    logger.info(f"Database {_safe_url()} raggiungibile")


async def close_db() -> None:
    """Rilascia il pool allo shutdown."""
    await engine.dispose()
    logger.info("Pool database rilasciato")
