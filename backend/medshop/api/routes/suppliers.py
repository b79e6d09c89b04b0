"""Suppliers CRUD."""
from fastapi import APIRouter, Depends, status

from medshop.api.deps import ListParams, get_current_user, get_store, list_params, page_response
from medshop.core.exceptions import BusinessError
from medshop.schemas.entities import Supplier, SupplierCreate, User
from medshop.services import supplier_service
from medshop.storage.store import PharmacyStore

router = APIRouter()

SEARCH_FIELDS = ["name", "contact_person", "email", "phone"]


@router.get("")
def list_suppliers(
    params: ListParams = Depends(list_params),
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return page_response(params.apply(supplier_service.list_suppliers(store), SEARCH_FIELDS))


@router.get("/{supplier_id}", response_model=Supplier)
def get_supplier(
    supplier_id: str,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    supplier = supplier_service.get_supplier(store, supplier_id)
    if not supplier:
        raise BusinessError.not_found("Supplier")
    return supplier


@router.post("", response_model=Supplier, status_code=status.HTTP_201_CREATED)
def create_supplier(
    data: SupplierCreate,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return supplier_service.add_supplier(store, data)


@router.put("/{supplier_id}", response_model=Supplier)
def update_supplier(
    supplier_id: str,
    data: SupplierCreate,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    existing = supplier_service.get_supplier(store, supplier_id)
    if not existing:
        raise BusinessError.not_found("Supplier")
    return supplier_service.update_supplier(store, existing.model_copy(update=data.model_dump()))


@router.delete("/{supplier_id}")
def delete_supplier(
    supplier_id: str,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    if not supplier_service.delete_supplier(store, supplier_id):
        raise BusinessError.not_found("Supplier")
    return {"message": "Supplier deleted", "id": supplier_id}
