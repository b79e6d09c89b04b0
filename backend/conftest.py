"""Shared fixtures: in-memory store on a fixed clock, and an HTTP client over it."""
import os

# Must be set before medshop.core.config is imported
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import date, datetime, timedelta

import pytest

from medshop.db.init_db import open_store
from medshop.schemas.entities import MedicineCreate, PurchaseOrderCreate, PurchaseOrderItem, SaleCreate, SaleItem
from medshop.storage.backends import MemoryBackend

NOW = datetime(2026, 10, 19, 10, 0)
TODAY = NOW.date()
ADMIN_PASSWORD = "admin123"


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend, clock):
    return open_store(backend, clock=clock, admin_password=ADMIN_PASSWORD)


@pytest.fixture
def make_medicine():
    def factory(**overrides) -> MedicineCreate:
        fields = dict(
            name="Paracetamol 500mg",
            category="Tablet",
            manufacturer="Cipla",
            batch_number="B1001",
            purchase_price=2.0,
            selling_price=2.5,
            quantity=100,
            min_stock_level=10,
            manufacture_date=date(2026, 1, 1),
            expiry_date=date(2028, 1, 1),
        )
        fields.update(overrides)
        return MedicineCreate(**fields)

    return factory


@pytest.fixture
def make_order():
    def factory(medicine, received_quantity=None, **overrides) -> PurchaseOrderCreate:
        item = PurchaseOrderItem(
            medicine_id=medicine.id,
            medicine_name=medicine.name,
            quantity=received_quantity or 10,
            unit_price=medicine.purchase_price,
            total_price=(received_quantity or 10) * medicine.purchase_price,
            received_quantity=received_quantity,
        )
        fields = dict(
            supplier_id="supplier-1",
            supplier_name="MediSupply Inc.",
            order_date=NOW,
            items=[item],
            total_amount=item.total_price,
        )
        fields.update(overrides)
        return PurchaseOrderCreate(**fields)

    return factory


@pytest.fixture
def make_sale():
    def factory(medicine, quantity, **overrides) -> SaleCreate:
        item = SaleItem(
            medicine_id=medicine.id,
            medicine_name=medicine.name,
            batch_number=medicine.batch_number,
            expiry_date=medicine.expiry_date,
            quantity=quantity,
            unit_price=medicine.selling_price,
            total_price=quantity * medicine.selling_price,
        )
        fields = dict(
            items=[item],
            subtotal=item.total_price,
            total=item.total_price,
            sale_date=NOW,
            created_by="user-1",
        )
        fields.update(overrides)
        return SaleCreate(**fields)

    return factory


@pytest.fixture
def client(store):
    from fastapi.testclient import TestClient

    from medshop.api.deps import get_store
    from medshop.main import app

    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    response = client.post("/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture
def other_client(client):
    """A second HTTP client on the same app and store, with its own cookies."""
    from fastapi.testclient import TestClient

    from medshop.main import app

    return TestClient(app)
