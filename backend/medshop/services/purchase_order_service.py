"""
Purchase orders and the stock-receipt cascade.

Status flow: pending -> ordered -> received, and any status -> cancelled.
Saving an order with its current status is always allowed.

Receipt: when an update moves an order into `received` and it carries a
received date, each item's received quantity is added to the medicine's
stock. The order write and all stock/alert writes commit together. An
order that is already received is never applied twice.
"""
import logging
from typing import Dict, List, Optional, Set

from medshop.core.exceptions import InvalidStatusTransitionError
from medshop.schemas.entities import PurchaseOrder, PurchaseOrderCreate
from medshop.services.inventory_service import adjust_quantity
from medshop.services.sequence import PURCHASE_ORDER_PREFIX, next_document_number
from medshop.storage.store import PharmacyStore

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[str, Set[str]] = {
    "pending": {"pending", "ordered", "cancelled"},
    "ordered": {"ordered", "received", "cancelled"},
    "received": {"received", "cancelled"},
    "cancelled": {"cancelled"},
}

OPEN_STATUSES = ("pending", "ordered")


def check_transition(current: str, requested: str) -> None:
    if requested not in ALLOWED_TRANSITIONS.get(current, set()):
        raise InvalidStatusTransitionError(current, requested)


def list_purchase_orders(store: PharmacyStore) -> List[PurchaseOrder]:
    return store.purchase_orders.list()


def get_purchase_order(store: PharmacyStore, order_id: str) -> Optional[PurchaseOrder]:
    return store.purchase_orders.get_by_id(order_id)


def add_purchase_order(store: PharmacyStore, data: PurchaseOrderCreate) -> PurchaseOrder:
    with store.transaction():
        number = next_document_number(store, PURCHASE_ORDER_PREFIX, store.purchase_orders)
        order = store.purchase_orders.add(data, order_number=number)
    logger.info(f"Created purchase order {order.order_number} for {order.supplier_name}")
    return order


def receive_items(store: PharmacyStore, order: PurchaseOrder) -> int:
    """Add received quantities to stock. Returns the number of items applied."""
    applied = 0
    for item in order.items:
        if item.received_quantity and item.received_quantity > 0:
            if adjust_quantity(store, item.medicine_id, item.received_quantity) is not None:
                applied += 1
    return applied


def update_purchase_order(store: PharmacyStore, order: PurchaseOrder) -> PurchaseOrder:
    previous = store.purchase_orders.get_by_id(order.id)
    if previous is not None:
        check_transition(previous.status, order.status)

    with store.transaction():
        updated = store.purchase_orders.update(order)

        receiving = (
            previous is not None
            and previous.status != "received"
            and order.status == "received"
            and order.received_date is not None
        )
        if receiving:
            applied = receive_items(store, updated)
            logger.info(f"Purchase order {updated.order_number} received, {applied} item(s) added to stock")

    return updated


def delete_purchase_order(store: PharmacyStore, order_id: str) -> bool:
    return store.purchase_orders.delete(order_id)
