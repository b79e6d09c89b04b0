"""Medicine inventory: list with search/sort/paging, and CRUD."""
from fastapi import APIRouter, Depends, status

from medshop.api.deps import ListParams, get_current_user, get_store, list_params, page_response
from medshop.core.exceptions import BusinessError
from medshop.schemas.entities import Medicine, MedicineCreate, User
from medshop.services import inventory_service
from medshop.services.alert_service import days_until_expiry
from medshop.services.formatting import expiry_status, stock_status
from medshop.storage.store import PharmacyStore

router = APIRouter()

SEARCH_FIELDS = ["name", "description", "manufacturer", "batch_number", "barcode"]


def _validate(data: MedicineCreate) -> None:
    if data.quantity < 0 or data.min_stock_level < 0:
        raise BusinessError.bad_request("Quantity cannot be negative")
    if data.purchase_price < 0 or data.selling_price < 0:
        raise BusinessError.bad_request("Price cannot be negative")
    if data.expiry_date <= data.manufacture_date:
        raise BusinessError.bad_request("Expiry date must be after manufacture date")


@router.get("")
def list_medicines(
    params: ListParams = Depends(list_params),
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    today = store.today()

    def status_fields(m: Medicine) -> dict:
        days = days_until_expiry(m.expiry_date, today)
        return {
            "stockStatus": stock_status(m.quantity, m.min_stock_level),
            "daysUntilExpiry": days,
            "expiryStatus": expiry_status(days),
        }

    page = params.apply(inventory_service.list_medicines(store), SEARCH_FIELDS)
    return page_response(page, extra=status_fields)


@router.get("/{medicine_id}", response_model=Medicine)
def get_medicine(
    medicine_id: str,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    medicine = inventory_service.get_medicine(store, medicine_id)
    if not medicine:
        raise BusinessError.not_found("Medicine")
    return medicine


@router.post("", response_model=Medicine, status_code=status.HTTP_201_CREATED)
def create_medicine(
    data: MedicineCreate,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    _validate(data)
    return inventory_service.add_medicine(store, data)


@router.put("/{medicine_id}", response_model=Medicine)
def update_medicine(
    medicine_id: str,
    data: MedicineCreate,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    existing = inventory_service.get_medicine(store, medicine_id)
    if not existing:
        raise BusinessError.not_found("Medicine")
    _validate(data)
    medicine = existing.model_copy(update=data.model_dump())
    return inventory_service.update_medicine(store, medicine)


@router.delete("/{medicine_id}")
def delete_medicine(
    medicine_id: str,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    if not inventory_service.delete_medicine(store, medicine_id):
        raise BusinessError.not_found("Medicine")
    return {"message": "Medicine deleted", "id": medicine_id}
