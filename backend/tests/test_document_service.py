"""
Unit tests for QuotationService / BillService.

Il database è sostituito dalla AsyncSession mock di conftest.py.
"""

import asyncio
import re
import uuid
from datetime import date
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from conftest import MockDocument, make_result
from quotebill.core.exceptions import (
    BusinessValidationError,
    DuplicateError,
    NotFoundError,
    PersistenceError,
)
from quotebill.models import Bill, Quotation, QuotationItem
from quotebill.schemas.document import BillCreate, LineItemInput, QuotationCreate, QuotationUpdate
from quotebill.services.document_service import BillService, QuotationService


def quotation_payload(**overrides):
    data = {
        "client_name": "Mario Bianchi",
        "document_date": date(2024, 3, 1),
        "due_date": date(2024, 3, 16),
        "items": [
            LineItemInput(description="Ricarica gas", quantity=2, rate=100, discount=10),
            LineItemInput(description="Uscita", quantity=1, rate=50, discount=20, discount_type="amount"),
        ],
    }
    data.update(overrides)
    return QuotationCreate(**data)


@pytest.fixture
def settings_service(company_defaults):
    service = AsyncMock()
    service.get_defaults.return_value = company_defaults
    return service


@pytest.fixture
def quotation_service(settings_service):
    return QuotationService(settings_service=settings_service)


# ============================================================
# Tests for create
# ============================================================


class TestCreate:
    """Tests for document creation and number resolution."""

    def test_create_recomputes_totals(self, quotation_service, mock_db, user_id):
        """Test totali ricalcolati dalle righe e numero proposto mantenuto."""
        mock_db.execute.return_value = make_result(scalar=0)

        document = asyncio.run(
            quotation_service.create(mock_db, user_id, quotation_payload(number="QUO-123456"))
        )

        assert isinstance(document, Quotation)
        assert document.number == "QUO-123456"
        assert document.quotation_number == "QUO-123456"
        assert document.user_id == user_id
        assert document.status == "draft"
        assert document.subtotal == 250
        assert document.total_discount == 40
        assert document.total_amount == 210
        assert [item.amount for item in document.items] == [180, 30]
        assert [item.position for item in document.items] == [0, 1]
        mock_db.add.assert_called_once_with(document)
        mock_db.commit.assert_awaited_once()
        mock_db.refresh.assert_awaited_once_with(document)

    def test_percentage_discount_clamped_at_input(self, quotation_service, mock_db, user_id):
        """Test sconto percentuale oltre 100 limitato dal form."""
        mock_db.execute.return_value = make_result(scalar=0)
        payload = quotation_payload(items=[LineItemInput(quantity=1, rate=80, discount=150)])

        document = asyncio.run(quotation_service.create(mock_db, user_id, payload))

        assert document.items[0].discount == 100
        assert document.total_amount == 0

    def test_taken_proposed_number_is_regenerated(self, quotation_service, mock_db, user_id):
        """Test numero proposto già in uso: ne viene generato uno nuovo."""
        result = make_result()
        result.scalar_one.side_effect = [1, 0]
        mock_db.execute.return_value = result

        with patch("quotebill.domain.numbering.random.randint", return_value=777777):
            document = asyncio.run(
                quotation_service.create(mock_db, user_id, quotation_payload(number="QUO-123456"))
            )

        assert document.number == "QUO-777777"
        assert mock_db.execute.await_count == 2

    def test_integrity_error_regenerates_once(self, quotation_service, mock_db, user_id):
        """Test vincolo unique violato al salvataggio: nuovo numero e secondo tentativo."""
        mock_db.execute.return_value = make_result(scalar=0)
        mock_db.commit.side_effect = [IntegrityError("INSERT", {}, Exception("duplicate key")), None]

        document = asyncio.run(
            quotation_service.create(mock_db, user_id, quotation_payload(number="QUO-123456"))
        )

        assert re.match(r"^QUO-\d{6}$", document.number)
        assert mock_db.rollback.await_count == 1
        assert mock_db.commit.await_count == 2
        assert mock_db.add.call_count == 2

    def test_integrity_error_twice_raises_duplicate(self, quotation_service, mock_db, user_id):
        """Test seconda violazione: errore di duplicato."""
        mock_db.execute.return_value = make_result(scalar=0)
        mock_db.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

        with pytest.raises(DuplicateError):
            asyncio.run(quotation_service.create(mock_db, user_id, quotation_payload()))

        assert mock_db.rollback.await_count == 2

    def test_database_down_on_number_check(self, quotation_service, mock_db, user_id):
        """Test errore di verifica del numero: salvataggio annullato."""
        mock_db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))

        with pytest.raises(PersistenceError):
            asyncio.run(quotation_service.create(mock_db, user_id, quotation_payload(number="QUO-123456")))

        mock_db.add.assert_not_called()
        mock_db.commit.assert_not_awaited()

    def test_database_down_on_commit(self, quotation_service, mock_db, user_id):
        """Test errore del database al commit: rollback ed errore di persistenza."""
        mock_db.execute.return_value = make_result(scalar=0)
        mock_db.commit.side_effect = OperationalError("INSERT", {}, Exception("connection reset"))

        with pytest.raises(PersistenceError):
            asyncio.run(quotation_service.create(mock_db, user_id, quotation_payload()))

        mock_db.rollback.assert_awaited_once()

    def test_bill_defaults(self, settings_service, mock_db, user_id):
        """Test fattura: prefisso BILL e stato unpaid."""
        mock_db.execute.return_value = make_result(scalar=0)
        payload = BillCreate(document_date=date(2024, 3, 1), due_date=date(2024, 3, 16))

        document = asyncio.run(BillService(settings_service).create(mock_db, user_id, payload))

        assert isinstance(document, Bill)
        assert document.bill_number.startswith("BILL-")
        assert document.status == "unpaid"
        assert document.total_amount == 0


# ============================================================
# Tests for read, update and delete
# ============================================================


class TestReadUpdateDelete:
    """Tests for user-scoped operations on saved documents."""

    def test_get_by_id_not_found(self, quotation_service, mock_db, user_id):
        """Test documento inesistente o di un altro utente."""
        mock_db.execute.return_value = make_result(one_or_none=None)

        with pytest.raises(NotFoundError):
            asyncio.run(quotation_service.get_by_id(mock_db, user_id, uuid.uuid4()))

    def test_get_all_paginates(self, quotation_service, mock_db, user_id):
        """Test lista paginata con totale pagine."""
        documents = [MockDocument(number="QUO-100001"), MockDocument(number="QUO-100002")]
        mock_db.execute.side_effect = [make_result(scalar=3), make_result(rows=documents)]

        result = asyncio.run(quotation_service.get_all(mock_db, user_id, page=1, per_page=2))

        assert result.total == 3
        assert result.total_pages == 2
        assert [item.number for item in result.items] == ["QUO-100001", "QUO-100002"]
        assert result.items[0].total_amount == 180

    def test_get_all_empty(self, quotation_service, mock_db, user_id):
        """Test lista vuota: una pagina."""
        mock_db.execute.side_effect = [make_result(scalar=0), make_result(rows=[])]

        result = asyncio.run(quotation_service.get_all(mock_db, user_id))

        assert result.total == 0
        assert result.total_pages == 1

    def test_get_all_invalid_status(self, quotation_service, mock_db, user_id):
        """Test filtro con stato di fattura su un preventivo."""
        with pytest.raises(BusinessValidationError):
            asyncio.run(quotation_service.get_all(mock_db, user_id, status_filter="paid"))

        mock_db.execute.assert_not_awaited()

    def test_update_keeps_number(self, quotation_service, mock_db, user_id):
        """Test aggiornamento: righe sostituite, totali ricalcolati, numero invariato."""
        document = Quotation(user_id=user_id, number="QUO-555555")
        document.items = [QuotationItem(description="Vecchia riga", quantity=1, rate=10, position=0)]
        mock_db.execute.return_value = make_result(one_or_none=document)

        payload = QuotationUpdate(
            document_date=date(2024, 4, 1),
            due_date=date(2024, 4, 16),
            status="sent",
            items=[LineItemInput(description="Nuova riga", quantity=3, rate=40)],
        )
        updated = asyncio.run(quotation_service.update(mock_db, user_id, uuid.uuid4(), payload))

        assert updated.number == "QUO-555555"
        assert updated.status == "sent"
        assert updated.document_date == date(2024, 4, 1)
        assert [item.description for item in updated.items] == ["Nuova riga"]
        assert updated.total_amount == 120
        mock_db.commit.assert_awaited_once()

    def test_update_status(self, quotation_service, mock_db, mock_document, user_id):
        """Test cambio stato valido."""
        mock_db.execute.return_value = make_result(one_or_none=mock_document)

        updated = asyncio.run(
            quotation_service.update_status(mock_db, user_id, mock_document.id, "accepted")
        )

        assert updated.status == "accepted"
        mock_db.commit.assert_awaited_once()

    def test_update_status_invalid(self, quotation_service, mock_db, mock_document, user_id):
        """Test stato non ammesso per il tipo di documento."""
        with pytest.raises(BusinessValidationError):
            asyncio.run(quotation_service.update_status(mock_db, user_id, mock_document.id, "paid"))

    def test_update_status_database_down(self, quotation_service, mock_db, mock_document, user_id):
        """Test errore del database al cambio stato: rollback ed errore di persistenza."""
        mock_db.execute.return_value = make_result(one_or_none=mock_document)
        mock_db.commit.side_effect = OperationalError("UPDATE", {}, Exception("connection reset"))

        with pytest.raises(PersistenceError):
            asyncio.run(
                quotation_service.update_status(mock_db, user_id, mock_document.id, "accepted")
            )

        mock_db.rollback.assert_awaited_once()
        mock_db.refresh.assert_not_awaited()

    def test_delete(self, quotation_service, mock_db, mock_document, user_id):
        """Test eliminazione documento con le righe."""
        mock_db.execute.return_value = make_result(one_or_none=mock_document)

        asyncio.run(quotation_service.delete(mock_db, user_id, mock_document.id))

        mock_db.delete.assert_awaited_once_with(mock_document)
        mock_db.commit.assert_awaited_once()

    def test_delete_database_down(self, quotation_service, mock_db, mock_document, user_id):
        """Test errore del database in eliminazione: rollback ed errore di persistenza."""
        mock_db.execute.return_value = make_result(one_or_none=mock_document)
        mock_db.commit.side_effect = OperationalError("DELETE", {}, Exception("connection reset"))

        with pytest.raises(PersistenceError):
            asyncio.run(quotation_service.delete(mock_db, user_id, mock_document.id))

        mock_db.rollback.assert_awaited_once()


# ============================================================
# Tests for preview and new drafts
# ============================================================


class TestPreviewAndDraft:
    """Tests for preview and new_draft."""

    def test_preview_from_saved_items(self, quotation_service, mock_db, user_id):
        """Test anteprima ricalcolata dalle righe salvate."""
        items = [
            QuotationItem(description="Ricarica gas", quantity=2, rate=1000, discount=10,
                          discount_type="percentage", position=0),
            QuotationItem(description="", quantity=1, rate=500, discount=100,
                          discount_type="amount", position=1),
        ]
        mock_db.execute.return_value = make_result(one_or_none=MockDocument(items=items))

        preview = asyncio.run(quotation_service.preview(mock_db, user_id, uuid.uuid4()))

        assert preview.formatted_total == "2,200.00"
        assert preview.total_in_words == "Two Thousand Two Hundred Rupees Only"
        assert preview.rows[1].description == "Basic Web Development"

    def test_new_draft_uses_user_settings(self, quotation_service, settings_service, mock_db, user_id):
        """Test nuovo preventivo precompilato con le impostazioni salvate."""
        draft = asyncio.run(quotation_service.new_draft(mock_db, user_id))

        assert draft.number.startswith("QUO-")
        assert draft.status == "draft"
        assert draft.company_name == "Rossi Climatizzazione"
        assert draft.terms == "Pagamento a 30 giorni."
        assert draft.items[0].rate == 50
        assert draft.preview.formatted_total == "50.00"
        assert draft.preview.total_in_words == "Fifty Rupees Only"
        assert (draft.due_date - draft.document_date).days == 15
        settings_service.get_defaults.assert_awaited_once_with(mock_db, user_id)
