"""Purchase orders. Moving an order to `received` adds the received quantities to stock."""
from fastapi import APIRouter, Depends, status

from medshop.api.deps import ListParams, get_current_user, get_store, list_params, page_response
from medshop.core.exceptions import BusinessError
from medshop.schemas.entities import PurchaseOrder, PurchaseOrderCreate, User
from medshop.services import purchase_order_service
from medshop.storage.store import PharmacyStore

router = APIRouter()

SEARCH_FIELDS = ["order_number", "supplier_name", "status", "notes"]


@router.get("")
def list_purchase_orders(
    params: ListParams = Depends(list_params),
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    orders = purchase_order_service.list_purchase_orders(store)
    return page_response(params.apply(orders, SEARCH_FIELDS))


@router.get("/{order_id}", response_model=PurchaseOrder)
def get_purchase_order(
    order_id: str,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    order = purchase_order_service.get_purchase_order(store, order_id)
    if not order:
        raise BusinessError.not_found("Purchase order")
    return order


@router.post("", response_model=PurchaseOrder, status_code=status.HTTP_201_CREATED)
def create_purchase_order(
    data: PurchaseOrderCreate,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    if not data.items:
        raise BusinessError.bad_request("A purchase order needs at least one item")
    return purchase_order_service.add_purchase_order(store, data)


@router.put("/{order_id}", response_model=PurchaseOrder)
def update_purchase_order(
    order_id: str,
    data: PurchaseOrderCreate,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    existing = purchase_order_service.get_purchase_order(store, order_id)
    if not existing:
        raise BusinessError.not_found("Purchase order")
    order = PurchaseOrder.model_validate({**existing.model_dump(), **data.model_dump()})
    return purchase_order_service.update_purchase_order(store, order)


@router.delete("/{order_id}")
def delete_purchase_order(
    order_id: str,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    if not purchase_order_service.delete_purchase_order(store, order_id):
        raise BusinessError.not_found("Purchase order")
    return {"message": "Purchase order deleted", "id": order_id}
