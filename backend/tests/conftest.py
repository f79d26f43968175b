"""
Pytest configuration and fixtures for QuoteBill tests.

I service vengono testati con una AsyncSession mock: nessun database
reale è necessario.
"""

import uuid
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from quotebill.domain.document import CompanyDefaults
from quotebill.domain.line_item import DiscountType, LineItem


# ============================================================
# Fixtures per AsyncSession Mock
# ============================================================


@pytest.fixture
def mock_db():
    """Crea un mock di AsyncSession."""
    db = AsyncMock(spec=AsyncSession)
    db.execute = AsyncMock()
    db.add = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.flush = AsyncMock()
    db.refresh = AsyncMock()
    db.delete = AsyncMock()
    return db


def make_result(scalar=None, one_or_none=None, rows=None):
    """Risultato di db.execute con scalar_one, scalar_one_or_none e scalars().all()."""
    result = MagicMock()
    result.scalar_one.return_value = scalar
    result.scalar_one_or_none.return_value = one_or_none
    result.scalars.return_value.all.return_value = rows or []
    return result


# ============================================================
# Mock dei modelli (senza sessione)
# ============================================================


class MockDocument:
    """Mock di Quotation/Bill con i nomi neutri usati dal service."""
    def __init__(self, **kwargs):
        self.id = kwargs.get('id', uuid.uuid4())
        self.user_id = kwargs.get('user_id', uuid.uuid4())
        self.number = kwargs.get('number', 'QUO-482910')
        self.status = kwargs.get('status', 'draft')
        self.company_name = kwargs.get('company_name', 'Rossi Climatizzazione')
        self.company_address = kwargs.get('company_address', 'Via Roma 1, Milano')
        self.company_phone = kwargs.get('company_phone', '+39 02 1234567')
        self.company_email = kwargs.get('company_email', 'info@rossi.it')
        self.client_name = kwargs.get('client_name', 'Mario Bianchi')
        self.client_address = kwargs.get('client_address', 'Via Verdi 5, Torino')
        self.document_date = kwargs.get('document_date', date(2024, 3, 1))
        self.due_date = kwargs.get('due_date', date(2024, 3, 16))
        self.subtotal = kwargs.get('subtotal', 200.0)
        self.total_discount = kwargs.get('total_discount', 20.0)
        self.total_amount = kwargs.get('total_amount', 180.0)
        self.terms = kwargs.get('terms', '')
        self.notes = kwargs.get('notes', '')
        self.signature = kwargs.get('signature', '')
        self.items = kwargs.get('items', [])
        self.created_at = kwargs.get('created_at', datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc))
        self.updated_at = kwargs.get('updated_at', datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def user_id():
    return uuid.UUID("7b7c1f0e-3f4a-4c59-9a51-0d2f6d5b8e11")


@pytest.fixture
def mock_document(user_id):
    """Crea un mock di preventivo con dati base."""
    return MockDocument(user_id=user_id)


@pytest.fixture
def company_defaults():
    """Impostazioni azienda già salvate dall'utente."""
    return CompanyDefaults(
        company_name="Rossi Climatizzazione",
        company_address="Via Roma 1, Milano",
        company_phone="+39 02 1234567",
        company_email="info@rossi.it",
        default_terms="Pagamento a 30 giorni.",
        default_notes="Grazie per averci scelto.",
    )


@pytest.fixture
def sample_items():
    """Due righe: sconto percentuale e sconto a importo."""
    return [
        LineItem(id=1, description="", quantity=2, rate=1000, discount=10,
                 discount_type=DiscountType.PERCENTAGE),
        LineItem(id=2, description="Hosting", quantity=1, rate=500, discount=100,
                 discount_type=DiscountType.AMOUNT),
    ]
