"""Medicine records and stock adjustments. Every write re-runs the alert rules."""
import logging
from typing import List, Optional

from medshop.schemas.entities import Medicine, MedicineCreate
from medshop.services.alert_service import check_and_create_alerts
from medshop.storage.store import PharmacyStore

logger = logging.getLogger(__name__)


def list_medicines(store: PharmacyStore) -> List[Medicine]:
    return store.medicines.list()


def get_medicine(store: PharmacyStore, medicine_id: str) -> Optional[Medicine]:
    return store.medicines.get_by_id(medicine_id)


def add_medicine(store: PharmacyStore, data: MedicineCreate) -> Medicine:
    with store.transaction():
        medicine = store.medicines.add(data)
        check_and_create_alerts(store, medicine)
    logger.info(f"Added medicine {medicine.id} ({medicine.name}), quantity {medicine.quantity}")
    return medicine


def update_medicine(store: PharmacyStore, medicine: Medicine) -> Medicine:
    """Replace a medicine and re-run the alert rules.

    An update that matched no medicine raises no alerts.
    """
    with store.transaction():
        known = store.medicines.get_by_id(medicine.id) is not None
        updated = store.medicines.update(medicine)
        if known:
            check_and_create_alerts(store, updated)
    return updated


def delete_medicine(store: PharmacyStore, medicine_id: str) -> bool:
    return store.medicines.delete(medicine_id)


def adjust_quantity(store: PharmacyStore, medicine_id: str, delta: int) -> Optional[Medicine]:
    """Add `delta` to the stock of a medicine, never going below zero.

    Returns the updated medicine, or None when the id is unknown.
    """
    medicine = store.medicines.get_by_id(medicine_id)
    if medicine is None:
        logger.warning(f"Stock adjustment skipped: medicine {medicine_id} not found")
        return None

    target = medicine.quantity + delta
    if target < 0:
        logger.warning(
            f"Stock for {medicine.name} ({medicine_id}) clamped to 0: "
            f"had {medicine.quantity}, adjustment {delta}"
        )
    return update_medicine(store, medicine.model_copy(update={"quantity": max(0, target)}))
