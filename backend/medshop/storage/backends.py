"""
Key-value backends for the collection store.

A backend maps a collection key to a string value (the serialized
collection). `set_many` writes a batch of keys as one unit, which the
unit of work uses to commit a whole cascade at once.
"""
import logging
from typing import Dict, Optional, Protocol

from sqlalchemy.orm import Session, sessionmaker

from medshop.models.collection import CollectionDocument

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def set_many(self, items: Dict[str, str]) -> None: ...


class MemoryBackend:
    """Dict-backed store. Used by tests and the `memory` storage setting."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def set_many(self, items: Dict[str, str]) -> None:
        self._data.update(items)


class SqlBackend:
    """Stores each collection as one row of `collection_documents`."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db: Session = self._session_factory()
        try:
            doc = db.get(CollectionDocument, key)
            return doc.value if doc else None
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Dict[str, str]) -> None:
        if not items:
            return
        db: Session = self._session_factory()
        try:
            for key, value in items.items():
                doc = db.get(CollectionDocument, key)
                if doc:
                    doc.value = value
                else:
                    db.add(CollectionDocument(key=key, value=value))
            db.commit()
        except Exception:
            db.rollback()
            logger.error(f"Failed to persist collections {sorted(items)}", exc_info=True)
            raise
        finally:
            db.close()
