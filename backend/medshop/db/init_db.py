"""Create tables and open the store. Run on app startup.

An empty users collection is seeded with one administrator. Without
DEFAULT_ADMIN_PASSWORD a random password is generated and logged once.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import sessionmaker

from medshop.core.config import settings
from medshop.db.base import Base
from medshop.db.session import engine, SessionLocal
from medshop.models import collection  # noqa: F401 - register models
from medshop.services.auth_service import build_default_admin
from medshop.storage.backends import KeyValueBackend, MemoryBackend, SqlBackend
from medshop.storage.store import PharmacyStore

logger = logging.getLogger(__name__)


def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)


def open_store(
    backend: Optional[KeyValueBackend] = None,
    clock: Optional[Callable[[], datetime]] = None,
    admin_password: Optional[str] = None,
    session_factory: Optional[sessionmaker] = None,
) -> PharmacyStore:
    """Build a PharmacyStore over the configured backend and initialize it."""
    if backend is None:
        if settings.STORAGE_BACKEND == "memory":
            backend = MemoryBackend()
        elif settings.STORAGE_BACKEND == "sql":
            factory = session_factory or SessionLocal
            init_db(bind=factory.kw.get("bind"))
            backend = SqlBackend(factory)
        else:
            raise ValueError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")

    store = PharmacyStore(backend, clock=clock)
    admin = None if store.users.exists() else build_default_admin(store, admin_password)
    store.initialize(admin)
    logger.info(f"Store ready ({type(backend).__name__})")
    return store
