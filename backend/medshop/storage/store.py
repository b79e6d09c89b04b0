"""PharmacyStore: the repositories for every collection over one backend."""
import logging
from datetime import date, datetime
from typing import Callable, Optional

from medshop.core.config import settings
from medshop.schemas.entities import Alert, Medicine, PurchaseOrder, Sale, Supplier, User
from medshop.storage.backends import KeyValueBackend
from medshop.storage.repository import CollectionStore, Repository, SessionSlot

logger = logging.getLogger(__name__)

USERS = "users"
MEDICINES = "medicines"
SUPPLIERS = "suppliers"
PURCHASE_ORDERS = "purchaseOrders"
SALES = "sales"
ALERTS = "alerts"
CURRENT_USER = "currentUser"
SEQUENCES = "sequences"


class PharmacyStore:
    """
    Entry point handed to every service function, the way a DB session is.

    `clock` returns the current local (naive) datetime; tests pass a fixed
    one so that expiry and dashboard cutoffs are deterministic.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        clock: Optional[Callable[[], datetime]] = None,
        strict_updates: Optional[bool] = None,
    ):
        self.collections = CollectionStore(backend)
        self.clock = clock or datetime.now
        strict = settings.STRICT_UPDATES if strict_updates is None else strict_updates

        self.users = Repository(self.collections, USERS, User, self.now, strict)
        self.medicines = Repository(self.collections, MEDICINES, Medicine, self.now, strict)
        self.suppliers = Repository(self.collections, SUPPLIERS, Supplier, self.now, strict)
        self.purchase_orders = Repository(self.collections, PURCHASE_ORDERS, PurchaseOrder, self.now, strict)
        self.sales = Repository(self.collections, SALES, Sale, self.now, strict)
        self.alerts = Repository(self.collections, ALERTS, Alert, self.now, strict)
        self.current_user = SessionSlot(self.collections, CURRENT_USER, User)

    def now(self) -> datetime:
        return self.clock()

    def today(self) -> date:
        return self.clock().date()

    def transaction(self):
        return self.collections.transaction()

    def initialize(self, default_admin: Optional[User] = None) -> None:
        """Create any absent collection. `users` is seeded with the admin."""
        with self.transaction():
            self.users.ensure([default_admin] if default_admin else [])
            for repo in (self.medicines, self.suppliers, self.purchase_orders, self.sales, self.alerts):
                repo.ensure()
            self.current_user.ensure()
