"""Tests for the demo data generator."""
from medshop.services.sample_data import generate_sample_data


def test_counts(store):
    counts = generate_sample_data(store, seed=7)

    assert counts == {"medicines": 20, "suppliers": 5, "purchase_orders": 5, "sales": 10}
    assert store.medicines.count() == 20
    assert store.suppliers.count() == 5
    assert store.purchase_orders.count() == 5
    assert store.sales.count() == 10


def test_records_are_consistent(store):
    generate_sample_data(store, seed=7)
    admin = store.users.list()[0]
    medicine_ids = {m.id for m in store.medicines.list()}

    invoices = [s.invoice_number for s in store.sales.list()]
    assert len(set(invoices)) == 10
    assert all(s.created_by == admin.id for s in store.sales.list())
    assert all(i.medicine_id in medicine_ids for s in store.sales.list() for i in s.items)
    assert all(m.quantity >= 0 for m in store.medicines.list())
    assert all(m.expiry_date > m.manufacture_date for m in store.medicines.list())


def test_same_seed_same_catalogue(store, backend, clock):
    from medshop.db.init_db import open_store
    from medshop.storage.backends import MemoryBackend

    other = open_store(MemoryBackend(), clock=clock, admin_password="x")
    generate_sample_data(store, seed=3)
    generate_sample_data(other, seed=3)

    assert [m.name for m in store.medicines.list()] == [m.name for m in other.medicines.list()]
    assert [m.quantity for m in store.medicines.list()] == [m.quantity for m in other.medicines.list()]
