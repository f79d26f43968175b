"""
Unit tests for line item math and document totals.
"""

import math

import pytest

from quotebill.domain.line_item import (
    DiscountType,
    LineItem,
    clamp_discount,
    clamp_quantity,
    clamp_rate,
    with_discount_type,
)
from quotebill.domain.totals import (
    calculate_totals,
    item_discount_amount,
    item_gross,
    item_net,
)


# ============================================================
# Tests for single line item
# ============================================================


class TestLineItemMath:
    """Tests for gross, discount and net of a single line."""

    def test_percentage_discount(self):
        """Test sconto percentuale sul lordo."""
        item = LineItem(id=1, quantity=2, rate=100, discount=10)

        assert item_gross(item) == 200
        assert item_discount_amount(item) == 20
        assert item_net(item) == 180

    def test_amount_discount(self):
        """Test sconto a importo assoluto, indipendente dalla quantità."""
        item = LineItem(id=1, quantity=3, rate=100, discount=50, discount_type=DiscountType.AMOUNT)

        assert item_discount_amount(item) == 50
        assert item_net(item) == 250

    def test_amount_discount_above_gross_gives_negative_net(self):
        """Test sconto a importo maggiore del lordo: netto negativo, nessun clamp."""
        item = LineItem(id=1, quantity=1, rate=50, discount=60, discount_type=DiscountType.AMOUNT)

        assert item_net(item) == -10

    def test_unknown_discount_type_is_percentage(self):
        """Test modalità mancante o sconosciuta trattata come percentuale."""
        item = LineItem(id=1, quantity=1, rate=200, discount=25, discount_type="bogus")

        assert item_discount_amount(item) == 50


# ============================================================
# Tests for document totals
# ============================================================


class TestCalculateTotals:
    """Tests for calculate_totals."""

    def test_empty_list(self):
        """Test nessuna riga: tutti i totali a zero."""
        totals = calculate_totals([])

        assert totals.subtotal == 0
        assert totals.total_discount == 0
        assert totals.total == 0

    def test_mixed_discounts(self, sample_items):
        """Test righe con sconto percentuale e a importo."""
        totals = calculate_totals(sample_items)

        assert totals.subtotal == 2500
        assert totals.total_discount == 300
        assert totals.total == 2200

    def test_total_is_subtotal_minus_discount(self):
        """Test invariante total = subtotal - total_discount."""
        items = [
            LineItem(id=1, quantity=3, rate=19.99, discount=7.5),
            LineItem(id=2, quantity=1, rate=0.1, discount=0.2, discount_type=DiscountType.AMOUNT),
        ]
        totals = calculate_totals(items)

        assert totals.total == totals.subtotal - totals.total_discount

    def test_order_does_not_matter(self, sample_items):
        """Test l'ordine delle righe non cambia i totali."""
        forward = calculate_totals(sample_items)
        backward = calculate_totals(list(reversed(sample_items)))

        assert math.isclose(forward.total, backward.total)

    def test_negative_total_allowed(self):
        """Test totale negativo con sconto a importo eccessivo."""
        items = [LineItem(id=1, quantity=1, rate=50, discount=60, discount_type=DiscountType.AMOUNT)]

        assert calculate_totals(items).total == -10


# ============================================================
# Tests for form boundary clamps
# ============================================================


class TestClamps:
    """Tests for clamps applied when a field loses focus."""

    @pytest.mark.parametrize("text,expected", [
        ("", 1),
        ("0", 1),
        ("-5", 1),
        ("abc", 1),
        ("3.7", 3),
        ("12", 12),
    ])
    def test_clamp_quantity(self, text, expected):
        """Test quantità minima 1, parte intera."""
        assert clamp_quantity(text) == expected

    def test_clamp_rate(self):
        """Test prezzo mai negativo."""
        assert clamp_rate(-3) == 0
        assert clamp_rate(42.5) == 42.5

    def test_clamp_percentage_discount(self):
        """Test sconto percentuale limitato a [0, 100]."""
        assert clamp_discount(150, DiscountType.PERCENTAGE) == 100
        assert clamp_discount(-1, "percentage") == 0

    def test_clamp_amount_discount(self):
        """Test sconto a importo senza limite superiore."""
        assert clamp_discount(5000, DiscountType.AMOUNT) == 5000
        assert clamp_discount(-5, "amount") == 0

    def test_switch_discount_type_resets_value(self):
        """Test cambio modalità: lo sconto torna a 0, senza conversione."""
        item = LineItem(id=1, quantity=1, rate=100, discount=10)

        switched = with_discount_type(item, "amount")

        assert switched.discount_type is DiscountType.AMOUNT
        assert switched.discount == 0
        assert item.discount == 10
