"""
API tests through FastAPI TestClient.

La sessione database è sostituita via dependency_overrides;
il lifespan non viene eseguito (nessuna connessione reale).
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from conftest import MockDocument, make_result
from quotebill.core.database import get_db
from quotebill.main import app


@pytest.fixture
def client(mock_db):
    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def headers(user_id):
    return {"X-User-Id": str(user_id)}


class TestSystem:
    """Tests for health check and authentication header."""

    def test_health(self, client):
        """Test endpoint di health check."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_missing_user_header(self, client):
        """Test richiesta senza utente."""
        response = client.get("/api/v1/quotations/")

        assert response.status_code == 401

    def test_invalid_user_header(self, client):
        """Test header utente non UUID."""
        response = client.get("/api/v1/bills/", headers={"X-User-Id": "not-a-uuid"})

        assert response.status_code == 401


class TestTools:
    """Tests for stateless calculation endpoints."""

    def test_totals(self, client):
        """Test totali live con sconto percentuale limitato a 100."""
        payload = {
            "items": [
                {"description": "", "quantity": 2, "rate": 1000, "discount": 10},
                {"description": "Hosting", "quantity": 1, "rate": 500, "discount": 100,
                 "discount_type": "amount"},
                {"description": "Omaggio", "quantity": 1, "rate": 100, "discount": 150},
            ],
        }

        response = client.post("/api/v1/tools/totals", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert body["formattedSubtotal"] == "2,600.00"
        assert body["formattedDiscount"] == "400.00"
        assert body["formattedTotal"] == "2,200.00"
        assert body["totalInWords"] == "Two Thousand Two Hundred Rupees Only"
        assert body["showDiscountLine"] is True
        assert body["rows"][0]["description"] == "Basic Web Development"
        assert body["rows"][1]["discountLabel"] == "Rs. 100.00"

    def test_totals_hidden_discount(self, client):
        """Test totale stampato uguale al subtotal con sconti nascosti."""
        payload = {
            "items": [{"quantity": 1, "rate": 100, "discount": 10}],
            "show_discount": False,
        }

        body = client.post("/api/v1/tools/totals", json=payload).json()

        assert body["formattedTotal"] == "100.00"
        assert body["showDiscountLine"] is False

    def test_amount_in_words(self, client):
        """Test importo in lettere."""
        response = client.get("/api/v1/tools/amount-in-words", params={"amount": 1234.5})

        assert response.status_code == 200
        body = response.json()
        assert body["words"] == "One Thousand Two Hundred and Thirty Four and Fifty Cents Rupees Only"
        assert body["formatted"] == "1,234.50"


class TestDocuments:
    """Tests for quotation and bill endpoints."""

    def test_quotation_not_found(self, client, mock_db, headers):
        """Test preventivo inesistente: 404 con dettaglio."""
        mock_db.execute.return_value = make_result(one_or_none=None)

        response = client.get(f"/api/v1/quotations/{uuid.uuid4()}", headers=headers)

        assert response.status_code == 404
        assert response.json()["error_code"] == "RESOURCE_NOT_FOUND"

    def test_list_bills(self, client, mock_db, headers):
        """Test lista fatture paginata con chiavi camelCase."""
        documents = [MockDocument(number="BILL-100001", status="unpaid")]
        mock_db.execute.side_effect = [make_result(scalar=1), make_result(rows=documents)]

        response = client.get("/api/v1/bills/", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["totalItems"] == 1
        assert body["items"][0]["number"] == "BILL-100001"
        assert body["items"][0]["totalAmount"] == 180

    def test_invalid_status_rejected(self, client, headers):
        """Test stato di fattura rifiutato su un preventivo."""
        response = client.patch(
            f"/api/v1/quotations/{uuid.uuid4()}/status",
            json={"status": "paid"},
            headers=headers,
        )

        assert response.status_code == 422

    def test_database_unavailable(self, client, mock_db, headers):
        """Test persistenza non raggiungibile: 503."""
        from sqlalchemy.exc import OperationalError

        mock_db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        payload = {"document_date": "2024-03-01", "due_date": "2024-03-16", "items": []}

        response = client.post("/api/v1/quotations/", json=payload, headers=headers)

        assert response.status_code == 503
        assert response.json()["error_code"] == "PERSISTENCE_UNAVAILABLE"

    def test_new_bill_draft(self, client, mock_db, headers):
        """Test nuova fattura con impostazioni predefinite."""
        mock_db.execute.return_value = make_result(one_or_none=None)

        response = client.get("/api/v1/bills/new", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["number"].startswith("BILL-")
        assert body["status"] == "unpaid"
        assert body["terms"].startswith("1. Payment due within 15 days")
        assert body["preview"]["formattedTotal"] == "150.00"


class TestSettings:
    """Tests for company settings endpoints."""

    def test_get_defaults(self, client, mock_db, headers):
        """Test impostazioni predefinite in camelCase."""
        mock_db.execute.return_value = make_result(one_or_none=None)

        response = client.get("/api/v1/settings/", headers=headers)

        assert response.status_code == 200
        assert response.json()["companyName"] == "<your-company-name>"
