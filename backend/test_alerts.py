"""Tests for stock and expiry alert rules."""
from datetime import timedelta

import pytest

from medshop.services import alert_service
from medshop.services.alert_service import (
    EXPIRED_TITLE,
    EXPIRY_TITLE,
    LOW_STOCK_TITLE,
    check_and_create_alerts,
    days_until_expiry,
    evaluate_medicine,
)
from medshop.services.inventory_service import add_medicine, update_medicine

from conftest import NOW, TODAY


def alerts_of(store, kind):
    return [a for a in store.alerts.list() if a.type == kind]


class TestRules:
    def test_low_stock_alert_on_add(self, store, make_medicine):
        medicine = add_medicine(store, make_medicine(quantity=5, min_stock_level=10))

        [alert] = alerts_of(store, "low_stock")
        assert alert.medicine_id == medicine.id
        assert alert.medicine_name == medicine.name
        assert alert.title == LOW_STOCK_TITLE
        assert "running low" in alert.message
        assert "Current quantity: 5" in alert.message
        assert alert.is_read is False
        assert alert.created_at == NOW

    def test_quantity_equal_to_minimum_is_low(self, store, make_medicine):
        add_medicine(store, make_medicine(quantity=10, min_stock_level=10))
        assert len(alerts_of(store, "low_stock")) == 1

    def test_expiring_alert_on_add(self, store, make_medicine):
        medicine = add_medicine(store, make_medicine(expiry_date=TODAY + timedelta(days=10)))

        [alert] = alerts_of(store, "expiry")
        assert alert.medicine_id == medicine.id
        assert alert.title == EXPIRY_TITLE
        assert "will expire on 29 Oct 2026" in alert.message

    def test_expired_alert(self, store, make_medicine):
        add_medicine(store, make_medicine(expiry_date=TODAY))

        [alert] = alerts_of(store, "expiry")
        assert alert.title == EXPIRED_TITLE
        assert "has expired on 19 Oct 2026" in alert.message

    def test_healthy_medicine_raises_nothing(self, store, make_medicine):
        add_medicine(store, make_medicine(quantity=100, min_stock_level=10, expiry_date=TODAY + timedelta(days=31)))
        assert store.alerts.list() == []

    def test_low_stock_and_expiry_together(self, store, make_medicine):
        add_medicine(store, make_medicine(quantity=0, expiry_date=TODAY + timedelta(days=30)))
        assert {a.type for a in store.alerts.list()} == {"low_stock", "expiry"}

    @pytest.mark.parametrize("days", range(-5, 40))
    def test_expiry_variants_are_exclusive(self, store, make_medicine, days):
        medicine = store.medicines.build(make_medicine(expiry_date=TODAY + timedelta(days=days)))
        titles = [a.title for a in evaluate_medicine(medicine, TODAY, warning_days=30) if a.type == "expiry"]

        if days <= 0:
            assert titles == [EXPIRED_TITLE]
        elif days <= 30:
            assert titles == [EXPIRY_TITLE]
        else:
            assert titles == []

    def test_evaluate_is_pure(self, store, make_medicine):
        medicine = store.medicines.build(make_medicine(quantity=0))
        assert evaluate_medicine(medicine, TODAY)
        assert store.alerts.list() == []

    def test_update_of_unknown_medicine_raises_nothing(self, store, make_medicine):
        ghost = store.medicines.build(make_medicine(quantity=0, expiry_date=TODAY))
        update_medicine(store, ghost)
        assert store.alerts.list() == []
        assert store.medicines.list() == []

    def test_days_until_expiry(self):
        assert days_until_expiry(TODAY + timedelta(days=3), TODAY) == 3
        assert days_until_expiry(TODAY - timedelta(days=2), NOW) == -2


class TestDeduplication:
    def test_repeat_trigger_refreshes_existing_alert(self, store, make_medicine):
        medicine = add_medicine(store, make_medicine(quantity=5))
        update_medicine(store, medicine.model_copy(update={"quantity": 3}))

        [alert] = alerts_of(store, "low_stock")
        assert "Current quantity: 3" in alert.message

    def test_next_day_raises_a_new_alert(self, store, clock, make_medicine):
        medicine = add_medicine(store, make_medicine(quantity=5))
        clock.advance(days=1)
        update_medicine(store, medicine)
        assert len(alerts_of(store, "low_stock")) == 2

    def test_disabled_deduplication_appends(self, store, make_medicine):
        medicine = store.medicines.add(make_medicine(quantity=5))
        check_and_create_alerts(store, medicine, deduplicate=False)
        check_and_create_alerts(store, medicine, deduplicate=False)
        assert len(alerts_of(store, "low_stock")) == 2

    def test_recovery_does_not_clear_alerts(self, store, make_medicine):
        medicine = add_medicine(store, make_medicine(quantity=5))
        update_medicine(store, medicine.model_copy(update={"quantity": 500}))
        assert len(alerts_of(store, "low_stock")) == 1


class TestAlertOperations:
    @pytest.fixture
    def alerts(self, store, make_medicine):
        add_medicine(store, make_medicine(quantity=1, expiry_date=TODAY + timedelta(days=5)))
        return store.alerts.list()

    def test_mark_as_read(self, store, alerts):
        assert alert_service.mark_alert_as_read(store, alerts[0].id) is True
        assert [a.id for a in alert_service.get_unread_alerts(store)] == [alerts[1].id]

    def test_mark_unknown_as_read(self, store, alerts):
        assert alert_service.mark_alert_as_read(store, "missing") is False
        assert len(alert_service.get_unread_alerts(store)) == 2

    def test_mark_all_as_read(self, store, alerts):
        assert alert_service.mark_all_alerts_as_read(store) == 2
        assert alert_service.get_unread_alerts(store) == []
        assert alert_service.mark_all_alerts_as_read(store) == 0

    def test_delete(self, store, alerts):
        assert alert_service.delete_alert(store, alerts[0].id) is True
        assert alert_service.delete_alert(store, alerts[0].id) is False
        assert len(alert_service.list_alerts(store)) == 1

    def test_add_system_alert(self, store):
        alert = alert_service.add_alert(store, {"type": "system", "title": "Backup", "message": "Backup finished"})
        assert alert.medicine_id is None
        assert store.alerts.get_by_id(alert.id) == alert
