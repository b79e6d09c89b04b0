"""Point-of-sale records and printable invoices."""
from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse
from datetime import datetime
from typing import List, Optional

from medshop.api.deps import ListParams, get_current_user, get_store, list_params, page_response
from medshop.core.exceptions import BusinessError
from medshop.schemas.entities import PaymentMethod, Record, Sale, SaleCreate, SaleItem, SalePaymentStatus, User
from medshop.services import pdf_service, sales_service
from medshop.storage.store import PharmacyStore

router = APIRouter()

SEARCH_FIELDS = ["invoice_number", "customer_name", "customer_phone"]


class SaleIn(Record):
    """Checkout payload. `created_by` and `sale_date` default to the session user and now."""
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    items: List[SaleItem]
    subtotal: float
    discount: float = 0.0
    tax: float = 0.0
    total: float
    payment_method: PaymentMethod = "cash"
    payment_status: SalePaymentStatus = "paid"
    sale_date: Optional[datetime] = None


@router.get("")
def list_sales(
    params: ListParams = Depends(list_params),
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return page_response(params.apply(sales_service.list_sales(store), SEARCH_FIELDS))


@router.get("/{sale_id}", response_model=Sale)
def get_sale(
    sale_id: str,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    sale = sales_service.get_sale(store, sale_id)
    if not sale:
        raise BusinessError.not_found("Sale")
    return sale


@router.post("", response_model=Sale, status_code=status.HTTP_201_CREATED)
def create_sale(
    data: SaleIn,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    if not data.items:
        raise BusinessError.bad_request("A sale needs at least one item")
    if any(item.quantity <= 0 for item in data.items):
        raise BusinessError.bad_request("Quantity must be positive")

    fields = data.model_dump()
    fields["sale_date"] = data.sale_date or store.now()
    fields["created_by"] = current_user.id
    return sales_service.add_sale(store, SaleCreate.model_validate(fields))


@router.put("/{sale_id}", response_model=Sale)
def update_sale(
    sale_id: str,
    data: SaleCreate,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    existing = sales_service.get_sale(store, sale_id)
    if not existing:
        raise BusinessError.not_found("Sale")
    sale = Sale.model_validate({**existing.model_dump(), **data.model_dump()})
    return sales_service.update_sale(store, sale)


@router.delete("/{sale_id}")
def delete_sale(
    sale_id: str,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    if not sales_service.delete_sale(store, sale_id):
        raise BusinessError.not_found("Sale")
    return {"message": "Sale deleted", "id": sale_id}


@router.get("/{sale_id}/invoice.pdf")
def download_invoice(
    sale_id: str,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    sale = sales_service.get_sale(store, sale_id)
    if not sale:
        raise BusinessError.not_found("Sale")
    buffer = pdf_service.render_sale_invoice(sale)
    return StreamingResponse(
        buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={sale.invoice_number}.pdf"},
    )
