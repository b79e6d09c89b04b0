"""Demo data. Goes through the regular add paths, so sales take stock and alerts fire."""
import logging
import random
from datetime import date, datetime, time, timedelta
from typing import Dict, Optional

from medshop.schemas.entities import (
    MedicineCreate,
    PurchaseOrderCreate,
    PurchaseOrderItem,
    SaleCreate,
    SaleItem,
    SupplierCreate,
)
from medshop.services.inventory_service import add_medicine
from medshop.services.purchase_order_service import add_purchase_order
from medshop.services.sales_service import add_sale
from medshop.services.supplier_service import add_supplier
from medshop.storage.store import PharmacyStore

logger = logging.getLogger(__name__)

CATEGORIES = ["Tablet", "Syrup", "Injection", "Capsule", "Cream", "Drops", "Powder"]
MANUFACTURERS = ["Sun Pharma", "Cipla", "Dr. Reddy's", "Lupin", "Zydus Cadila", "Mankind", "Alkem"]
MEDICINE_NAMES = [
    "Paracetamol", "Amoxicillin", "Azithromycin", "Cetirizine",
    "Diclofenac", "Metformin", "Omeprazole", "Pantoprazole",
    "Atorvastatin", "Losartan", "Amlodipine", "Aspirin",
    "Ibuprofen", "Ranitidine", "Domperidone", "Ondansetron",
]
SUPPLIER_NAMES = [
    "MediSupply Inc.", "PharmaDistributors", "HealthCare Supplies",
    "MediWholesale Ltd.", "National Medical Distributors",
]


def _add_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:  # 29 Feb
        return day.replace(year=day.year + years, day=28)


def _phone(rng: random.Random) -> str:
    return f"+91{rng.randrange(10**10):010d}"


def generate_sample_data(store: PharmacyStore, seed: Optional[int] = None) -> Dict[str, int]:
    """Seed 20 medicines, 5 suppliers, 5 purchase orders and 10 sales.

    Returns how many records of each kind were added.
    """
    rng = random.Random(seed)
    today = store.today()
    now = store.now()

    medicines = []
    for _ in range(20):
        name = rng.choice(MEDICINE_NAMES)
        category = rng.choice(CATEGORIES)
        manufacturer = rng.choice(MANUFACTURERS)
        manufacture_date = today - timedelta(days=30 * rng.randrange(12))
        purchase_price = float(10 + rng.randrange(490))
        medicines.append(add_medicine(store, MedicineCreate(
            name=name,
            description=f"{name} {category} by {manufacturer}",
            category=category,
            manufacturer=manufacturer,
            batch_number=f"B{rng.randrange(10000):04d}",
            barcode=f"MED{rng.randrange(1000000):07d}",
            purchase_price=purchase_price,
            selling_price=round(purchase_price * (1.1 + rng.random() * 0.5), 2),
            quantity=rng.randrange(100),
            min_stock_level=10 + rng.randrange(20),
            manufacture_date=manufacture_date,
            expiry_date=_add_years(manufacture_date, 2 + rng.randrange(2)),
            location=f"Shelf {chr(65 + rng.randrange(6))}-{rng.randrange(10) + 1}",
        )))

    suppliers = []
    for i, supplier_name in enumerate(SUPPLIER_NAMES, start=1):
        suppliers.append(add_supplier(store, SupplierCreate(
            name=supplier_name,
            contact_person=f"Contact Person {i}",
            email=f"supplier{i}@example.com",
            phone=_phone(rng),
            address=f"Address Line {i}, City {i}, State {i}",
            gst_number=f"GST{rng.randrange(10**9):010d}",
            payment_terms=f"Net {rng.choice([15, 30, 45, 60])} days",
        )))

    for i in range(5):
        supplier = rng.choice(suppliers)
        items = []
        for _ in range(2 + rng.randrange(4)):
            medicine = rng.choice(medicines)
            quantity = 10 + rng.randrange(50)
            items.append(PurchaseOrderItem(
                medicine_id=medicine.id,
                medicine_name=medicine.name,
                quantity=quantity,
                unit_price=medicine.purchase_price,
                total_price=quantity * medicine.purchase_price,
            ))

        order_date = now - timedelta(days=rng.randrange(30))
        expected = order_date + timedelta(days=7 + rng.randrange(7))
        status = rng.choice(["pending", "ordered", "received"])
        received = expected + timedelta(days=rng.randrange(5) - 2) if status == "received" else None

        add_purchase_order(store, PurchaseOrderCreate(
            supplier_id=supplier.id,
            supplier_name=supplier.name,
            status=status,
            order_date=order_date,
            expected_delivery_date=expected,
            received_date=received,
            total_amount=sum(item.total_price for item in items),
            payment_status=rng.choice(["unpaid", "partial", "paid"]),
            items=items,
            notes=f"Sample purchase order {i + 1}",
        ))

    admin = next((u for u in store.users.list() if u.role == "admin"), None)
    created_by = admin.id if admin else "system"

    for i in range(10):
        items = []
        subtotal = 0.0
        for _ in range(1 + rng.randrange(3)):
            medicine = rng.choice(medicines)
            quantity = 1 + rng.randrange(5)
            unit_price = medicine.selling_price
            discount = round(unit_price * 0.05, 2) if rng.random() < 0.3 else 0.0
            total_price = round((unit_price - discount) * quantity, 2)
            subtotal += total_price
            items.append(SaleItem(
                medicine_id=medicine.id,
                medicine_name=medicine.name,
                batch_number=medicine.batch_number,
                expiry_date=medicine.expiry_date,
                quantity=quantity,
                unit_price=unit_price,
                discount=discount,
                total_price=total_price,
            ))

        discount = round(subtotal * 0.05, 2) if rng.random() < 0.2 else 0.0
        tax = round(subtotal * 0.18, 2)  # 18% GST
        sale_day = today - timedelta(days=rng.randrange(30))
        add_sale(store, SaleCreate(
            customer_name=f"Customer {i + 1}" if rng.random() < 0.7 else None,
            customer_phone=_phone(rng) if rng.random() < 0.5 else None,
            items=items,
            subtotal=round(subtotal, 2),
            discount=discount,
            tax=tax,
            total=round(subtotal - discount + tax, 2),
            payment_method=rng.choice(["cash", "card", "upi"]),
            payment_status="paid",
            sale_date=datetime.combine(sale_day, time(hour=9 + rng.randrange(10))),
            created_by=created_by,
        ))

    counts = {"medicines": 20, "suppliers": len(SUPPLIER_NAMES), "purchase_orders": 5, "sales": 10}
    logger.info(f"Sample data generated: {counts}")
    return counts
