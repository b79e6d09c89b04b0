"""Supplier records."""
from typing import List, Optional

from medshop.schemas.entities import Supplier, SupplierCreate
from medshop.storage.store import PharmacyStore


def list_suppliers(store: PharmacyStore) -> List[Supplier]:
    return store.suppliers.list()


def get_supplier(store: PharmacyStore, supplier_id: str) -> Optional[Supplier]:
    return store.suppliers.get_by_id(supplier_id)


def add_supplier(store: PharmacyStore, data: SupplierCreate) -> Supplier:
    return store.suppliers.add(data)


def update_supplier(store: PharmacyStore, supplier: Supplier) -> Supplier:
    return store.suppliers.update(supplier)


def delete_supplier(store: PharmacyStore, supplier_id: str) -> bool:
    return store.suppliers.delete(supplier_id)
