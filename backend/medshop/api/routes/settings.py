"""Shop settings actions. Admin only."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from medshop.api.deps import get_store, require_admin
from medshop.core.config import settings
from medshop.schemas.entities import User
from medshop.services.sample_data import generate_sample_data
from medshop.storage.store import PharmacyStore

router = APIRouter()


@router.get("")
def read_settings(admin: User = Depends(require_admin)):
    return {
        "shopName": settings.SHOP_NAME,
        "expiryWarningDays": settings.EXPIRY_WARNING_DAYS,
        "alertDeduplication": settings.ALERT_DEDUPLICATION,
        "documentNumbering": settings.DOCUMENT_NUMBERING,
        "storageBackend": settings.STORAGE_BACKEND,
    }


@router.post("/sample-data")
def load_sample_data(
    seed: Optional[int] = Query(None),
    store: PharmacyStore = Depends(get_store),
    admin: User = Depends(require_admin),
):
    """Append a demo catalogue of medicines, suppliers, orders and sales."""
    counts = generate_sample_data(store, seed=seed)
    return {"message": "Sample data generated", "counts": counts}
