from medshop.storage.backends import KeyValueBackend, MemoryBackend, SqlBackend
from medshop.storage.repository import CollectionStore, Repository, SessionSlot
from medshop.storage.store import PharmacyStore

__all__ = [
    "KeyValueBackend",
    "MemoryBackend",
    "SqlBackend",
    "CollectionStore",
    "Repository",
    "SessionSlot",
    "PharmacyStore",
]
