"""
Entity records persisted by the store.

Each collection holds a JSON array of these records with camelCase keys
(e.g. `minStockLevel`, `isRead`). Python code uses the snake_case
attribute names. The `*Create` variants are the payloads accepted by the
add operations: everything except the identity, timestamps and derived
document numbers.
"""
import uuid
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_id() -> str:
    """Random 128-bit identifier, rendered as a UUID4 string."""
    return str(uuid.uuid4())


class Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


UserRole = Literal["admin", "manager", "employee"]
OrderStatus = Literal["pending", "ordered", "received", "cancelled"]
OrderPaymentStatus = Literal["unpaid", "partial", "paid"]
PaymentMethod = Literal["cash", "card", "upi", "other"]
SalePaymentStatus = Literal["paid", "unpaid", "partial"]
AlertType = Literal["low_stock", "expiry", "system"]


# ---------------------------------------------------------------- users

class UserCreate(Record):
    username: str
    password: str
    name: str
    role: UserRole = "employee"
    email: str
    phone: Optional[str] = None


class User(UserCreate):
    id: str
    created_at: datetime
    last_login: Optional[datetime] = None


# ------------------------------------------------------------ medicines

class MedicineCreate(Record):
    name: str
    description: Optional[str] = None
    category: str
    manufacturer: str
    batch_number: str
    barcode: Optional[str] = None
    purchase_price: float = Field(0.0, description="Cost per unit")
    selling_price: float = Field(0.0, description="Retail price per unit")
    quantity: int = 0
    min_stock_level: int = 0
    manufacture_date: date
    expiry_date: date
    location: Optional[str] = None


class Medicine(MedicineCreate):
    id: str
    created_at: datetime
    updated_at: datetime


# ------------------------------------------------------------ suppliers

class SupplierCreate(Record):
    name: str
    contact_person: str
    email: str
    phone: str
    address: str
    gst_number: Optional[str] = None
    payment_terms: Optional[str] = None


class Supplier(SupplierCreate):
    id: str
    created_at: datetime
    updated_at: datetime


# ------------------------------------------------------ purchase orders

class PurchaseOrderItem(Record):
    id: str = Field(default_factory=new_id)
    medicine_id: str
    medicine_name: str  # snapshot at order time
    quantity: int
    unit_price: float
    total_price: float
    received_quantity: Optional[int] = None


class PurchaseOrderCreate(Record):
    supplier_id: str
    supplier_name: str  # snapshot at order time
    status: OrderStatus = "pending"
    order_date: datetime
    expected_delivery_date: Optional[datetime] = None
    received_date: Optional[datetime] = None
    total_amount: float = 0.0
    payment_status: OrderPaymentStatus = "unpaid"
    items: List[PurchaseOrderItem] = Field(default_factory=list)
    notes: Optional[str] = None


class PurchaseOrder(PurchaseOrderCreate):
    id: str
    order_number: str
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------- sales

class SaleItem(Record):
    id: str = Field(default_factory=new_id)
    medicine_id: str
    medicine_name: str
    batch_number: str
    expiry_date: date
    quantity: int
    unit_price: float
    discount: float = 0.0
    total_price: float


class SaleCreate(Record):
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    items: List[SaleItem] = Field(default_factory=list)
    subtotal: float = 0.0
    discount: float = 0.0
    tax: float = 0.0
    total: float = 0.0
    payment_method: PaymentMethod = "cash"
    payment_status: SalePaymentStatus = "paid"
    sale_date: datetime
    created_by: str


class Sale(SaleCreate):
    id: str
    invoice_number: str
    created_at: datetime


# --------------------------------------------------------------- alerts

class AlertCreate(Record):
    type: AlertType
    title: str
    message: str
    medicine_id: Optional[str] = None
    medicine_name: Optional[str] = None
    is_read: bool = False


class Alert(AlertCreate):
    id: str
    created_at: datetime
