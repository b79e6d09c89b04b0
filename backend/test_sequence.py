"""Tests for purchase order and invoice numbering."""
from datetime import date

import pytest

from medshop.services.purchase_order_service import add_purchase_order, delete_purchase_order
from medshop.services.sequence import (
    INVOICE_PREFIX,
    PURCHASE_ORDER_PREFIX,
    format_document_number,
    next_document_number,
)


@pytest.fixture
def medicine(store, make_medicine):
    return store.medicines.add(make_medicine())


def test_format_document_number():
    assert format_document_number("PO", date(2026, 10, 19), 7) == "PO-20261019-007"
    assert format_document_number("INV", date(2026, 1, 2), 1234) == "INV-20260102-1234"


class TestDailyNumbering:
    def test_sequence_increments_within_a_day(self, store, medicine, make_order):
        first = add_purchase_order(store, make_order(medicine))
        second = add_purchase_order(store, make_order(medicine))
        assert first.order_number == "PO-20261019-001"
        assert second.order_number == "PO-20261019-002"

    def test_sequence_restarts_next_day(self, store, clock, medicine, make_order):
        add_purchase_order(store, make_order(medicine))
        clock.advance(days=1)
        assert add_purchase_order(store, make_order(medicine)).order_number == "PO-20261020-001"

    def test_deleted_numbers_are_not_reused(self, store, medicine, make_order):
        add_purchase_order(store, make_order(medicine))
        second = add_purchase_order(store, make_order(medicine))
        delete_purchase_order(store, second.id)
        assert add_purchase_order(store, make_order(medicine)).order_number == "PO-20261019-003"

    def test_prefixes_count_independently(self, store):
        assert next_document_number(store, PURCHASE_ORDER_PREFIX, store.purchase_orders, mode="daily").endswith("-001")
        assert next_document_number(store, INVOICE_PREFIX, store.sales, mode="daily") == "INV-20261019-001"


class TestLifetimeNumbering:
    def test_uses_collection_size(self, store, medicine, make_order):
        assert next_document_number(store, PURCHASE_ORDER_PREFIX, store.purchase_orders, mode="lifetime") == (
            "PO-20261019-001"
        )
        store.purchase_orders.add(make_order(medicine), order_number="PO-20261018-001")
        store.purchase_orders.add(make_order(medicine), order_number="PO-20261018-002")
        assert next_document_number(store, PURCHASE_ORDER_PREFIX, store.purchase_orders, mode="lifetime") == (
            "PO-20261019-003"
        )

    def test_does_not_touch_counters(self, store, backend):
        next_document_number(store, INVOICE_PREFIX, store.sales, mode="lifetime")
        assert backend.get("sequences") is None


def test_unknown_mode_rejected(store):
    with pytest.raises(ValueError):
        next_document_number(store, INVOICE_PREFIX, store.sales, mode="weekly")
