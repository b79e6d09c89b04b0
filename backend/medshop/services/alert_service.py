"""
Stock and expiry alerts.

Rules run after every medicine add/update:
- low stock: quantity <= min_stock_level
- expiring: 0 < days until expiry <= EXPIRY_WARNING_DAYS
- expired: days until expiry <= 0

With deduplication on, an alert is identified by (medicine, type, title,
day it was raised); a repeated trigger on the same day refreshes that
alert's text instead of adding another. Alerts are never cleared when a
medicine recovers.
"""
import logging
from datetime import date, datetime
from typing import List, Optional

from medshop.core.config import settings
from medshop.schemas.entities import Alert, AlertCreate, Medicine
from medshop.storage.store import PharmacyStore

logger = logging.getLogger(__name__)

LOW_STOCK_TITLE = "Low Stock Alert"
EXPIRY_TITLE = "Expiry Alert"
EXPIRED_TITLE = "Expired Medicine"


def days_until_expiry(expiry: date, today: date) -> int:
    """Whole calendar days from today to the expiry date (negative once past)."""
    if isinstance(expiry, datetime):
        expiry = expiry.date()
    if isinstance(today, datetime):
        today = today.date()
    return (expiry - today).days


def format_date(value: date) -> str:
    return value.strftime("%d %b %Y")


def evaluate_medicine(
    medicine: Medicine,
    today: date,
    warning_days: Optional[int] = None,
) -> List[AlertCreate]:
    """Alerts the current state of `medicine` calls for. Pure."""
    warning_days = settings.EXPIRY_WARNING_DAYS if warning_days is None else warning_days
    label = f"{medicine.name} ({medicine.batch_number})"
    alerts: List[AlertCreate] = []

    if medicine.quantity <= medicine.min_stock_level:
        alerts.append(AlertCreate(
            type="low_stock",
            title=LOW_STOCK_TITLE,
            message=f"{label} is running low on stock. Current quantity: {medicine.quantity}",
            medicine_id=medicine.id,
            medicine_name=medicine.name,
        ))

    days = days_until_expiry(medicine.expiry_date, today)
    if 0 < days <= warning_days:
        alerts.append(AlertCreate(
            type="expiry",
            title=EXPIRY_TITLE,
            message=f"{label} will expire on {format_date(medicine.expiry_date)}",
            medicine_id=medicine.id,
            medicine_name=medicine.name,
        ))
    elif days <= 0:
        alerts.append(AlertCreate(
            type="expiry",
            title=EXPIRED_TITLE,
            message=f"{label} has expired on {format_date(medicine.expiry_date)}",
            medicine_id=medicine.id,
            medicine_name=medicine.name,
        ))

    return alerts


def _same_alert(alert: Alert, candidate: AlertCreate, today: date) -> bool:
    return (
        alert.medicine_id == candidate.medicine_id
        and alert.type == candidate.type
        and alert.title == candidate.title
        and alert.created_at.date() == today
    )


def check_and_create_alerts(
    store: PharmacyStore,
    medicine: Medicine,
    deduplicate: Optional[bool] = None,
) -> List[Alert]:
    """Run the rules for `medicine` and persist the resulting alerts.

    Returns the alerts that were created or refreshed.
    """
    deduplicate = settings.ALERT_DEDUPLICATION if deduplicate is None else deduplicate
    today = store.today()
    candidates = evaluate_medicine(medicine, today)
    if not candidates:
        return []

    alerts = store.alerts.list()
    touched: List[Alert] = []
    for candidate in candidates:
        index = None
        if deduplicate:
            index = next((i for i, a in enumerate(alerts) if _same_alert(a, candidate, today)), None)

        if index is not None:
            alerts[index] = alerts[index].model_copy(
                update={"message": candidate.message, "medicine_name": candidate.medicine_name}
            )
            touched.append(alerts[index])
        else:
            alert = store.alerts.build(candidate)
            alerts.append(alert)
            touched.append(alert)
            logger.info(f"{alert.title} raised for medicine {medicine.id}")

    store.alerts.replace_all(alerts)
    return touched


def list_alerts(store: PharmacyStore) -> List[Alert]:
    return store.alerts.list()


def get_unread_alerts(store: PharmacyStore) -> List[Alert]:
    return [a for a in store.alerts.list() if not a.is_read]


def add_alert(store: PharmacyStore, alert: AlertCreate) -> Alert:
    return store.alerts.add(alert)


def mark_alert_as_read(store: PharmacyStore, alert_id: str) -> bool:
    """True iff an alert with that id exists."""
    alerts = store.alerts.list()
    found = False
    for i, alert in enumerate(alerts):
        if alert.id == alert_id:
            alerts[i] = alert.model_copy(update={"is_read": True})
            found = True
    if found:
        store.alerts.replace_all(alerts)
    return found


def mark_all_alerts_as_read(store: PharmacyStore) -> int:
    """Mark every alert read. Returns how many were unread."""
    alerts = store.alerts.list()
    unread = sum(1 for a in alerts if not a.is_read)
    if unread:
        store.alerts.replace_all([a.model_copy(update={"is_read": True}) for a in alerts])
    return unread


def delete_alert(store: PharmacyStore, alert_id: str) -> bool:
    return store.alerts.delete(alert_id)
