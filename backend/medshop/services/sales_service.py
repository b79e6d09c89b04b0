"""Point-of-sale records. Recording a sale takes the sold quantities out of stock."""
import logging
from typing import List, Optional

from medshop.schemas.entities import Sale, SaleCreate
from medshop.services.inventory_service import adjust_quantity
from medshop.services.sequence import INVOICE_PREFIX, next_document_number
from medshop.storage.store import PharmacyStore

logger = logging.getLogger(__name__)


def list_sales(store: PharmacyStore) -> List[Sale]:
    return store.sales.list()


def get_sale(store: PharmacyStore, sale_id: str) -> Optional[Sale]:
    return store.sales.get_by_id(sale_id)


def add_sale(store: PharmacyStore, data: SaleCreate) -> Sale:
    """Record a sale and decrement stock for each line.

    Stock is floored at zero; selling more than is on hand is not rejected.
    The sale is written first, then each medicine, all in one transaction.
    """
    with store.transaction():
        number = next_document_number(store, INVOICE_PREFIX, store.sales)
        sale = store.sales.add(data, invoice_number=number)
        for item in sale.items:
            adjust_quantity(store, item.medicine_id, -item.quantity)

    logger.info(f"Recorded sale {sale.invoice_number}: {len(sale.items)} item(s), total {sale.total:.2f}")
    return sale


def update_sale(store: PharmacyStore, sale: Sale) -> Sale:
    # No stock effect: quantities were taken when the sale was recorded
    return store.sales.update(sale)


def delete_sale(store: PharmacyStore, sale_id: str) -> bool:
    return store.sales.delete(sale_id)
