"""
Collection store, unit of work and per-entity repositories.

Every write replaces a whole collection document. Outside a transaction
the write goes straight to the backend. Inside `transaction()` writes are
buffered and reads see the buffered value, then the whole batch is handed
to the backend's `set_many` on success or dropped if the block raises.
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from medshop.core.exceptions import CorruptStateError, RecordNotFoundError
from medshop.schemas.entities import new_id
from medshop.storage.backends import KeyValueBackend

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class CollectionStore:
    """Raw access to collection documents, with an optional write buffer."""

    def __init__(self, backend: KeyValueBackend):
        self.backend = backend
        self._pending: Optional[Dict[str, str]] = None

    @property
    def in_transaction(self) -> bool:
        return self._pending is not None

    def read(self, key: str) -> Optional[str]:
        if self._pending is not None and key in self._pending:
            return self._pending[key]
        return self.backend.get(key)

    def write(self, key: str, value: str) -> None:
        if self._pending is not None:
            self._pending[key] = value
        else:
            self.backend.set(key, value)

    @contextmanager
    def transaction(self) -> Iterator["CollectionStore"]:
        # Nested blocks join the outermost one
        if self._pending is not None:
            yield self
            return

        self._pending = {}
        try:
            yield self
            pending = self._pending
        except BaseException:
            logger.warning(f"Transaction rolled back, discarded writes to {sorted(self._pending)}")
            raise
        finally:
            self._pending = None
        self.backend.set_many(pending)


class Repository(Generic[T]):
    """
    list / get_by_id / add / update / delete over one named collection.

    `add` assigns a fresh id plus `created_at` (and `updated_at` when the
    record has one). `update` refreshes `updated_at` and replaces the
    record with the same id. When nothing matches, the input is returned
    unpersisted, or RecordNotFoundError is raised if `strict` is set.
    """

    def __init__(
        self,
        collections: CollectionStore,
        key: str,
        model: Type[T],
        clock: Callable[[], datetime],
        strict: bool = False,
    ):
        self.collections = collections
        self.key = key
        self.model = model
        self.clock = clock
        self.strict = strict
        self._adapter = TypeAdapter(List[model])
        self._has_updated_at = "updated_at" in model.model_fields

    # ---------------------------------------------------------- storage

    def _load(self) -> List[T]:
        raw = self.collections.read(self.key)
        if raw is None or raw == "":
            return []
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Corrupt collection '{self.key}': {e.error_count()} validation error(s)")
            raise CorruptStateError(self.key, str(e)) from e

    def _save(self, records: List[T]) -> None:
        payload = self._adapter.dump_json(records, by_alias=True, exclude_none=True)
        self.collections.write(self.key, payload.decode("utf-8"))

    def exists(self) -> bool:
        return self.collections.read(self.key) is not None

    def ensure(self, seed: Optional[List[T]] = None) -> bool:
        """Create the collection on first use. Returns True if it was created."""
        if self.exists():
            return False
        self._save(list(seed or []))
        logger.info(f"Initialized collection '{self.key}' with {len(seed or [])} record(s)")
        return True

    def replace_all(self, records: List[T]) -> None:
        self._save(list(records))

    # ------------------------------------------------------- operations

    def list(self) -> List[T]:
        return self._load()

    def count(self) -> int:
        return len(self._load())

    def get_by_id(self, record_id: str) -> Optional[T]:
        return next((r for r in self._load() if r.id == record_id), None)

    def build(self, data: BaseModel | Dict[str, Any], **derived: Any) -> T:
        """Create a full record from an add payload without persisting it."""
        fields = data.model_dump() if isinstance(data, BaseModel) else dict(data)
        now = self.clock()
        fields.update(derived)
        fields["id"] = new_id()
        fields["created_at"] = now
        if self._has_updated_at:
            fields["updated_at"] = now
        return self.model.model_validate(fields)

    def add(self, data: BaseModel | Dict[str, Any], **derived: Any) -> T:
        record = self.build(data, **derived)
        records = self._load()
        records.append(record)
        self._save(records)
        return record

    def update(self, record: T) -> T:
        if self._has_updated_at:
            record = record.model_copy(update={"updated_at": self.clock()})

        records = self._load()
        replaced = False
        for i, existing in enumerate(records):
            if existing.id == record.id:
                records[i] = record
                replaced = True

        if not replaced:
            if self.strict:
                raise RecordNotFoundError(self.key, record.id)
            logger.warning(f"Update ignored: no record with id {record.id} in '{self.key}'")
            return record

        self._save(records)
        return record

    def delete(self, record_id: str) -> bool:
        records = self._load()
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return False
        self._save(remaining)
        return True


class SessionSlot(Generic[T]):
    """Singleton record slot, stored as "" when empty."""

    def __init__(self, collections: CollectionStore, key: str, model: Type[T]):
        self.collections = collections
        self.key = key
        self.model = model

    def ensure(self) -> None:
        if self.collections.read(self.key) is None:
            self.collections.write(self.key, "")

    def get(self) -> Optional[T]:
        raw = self.collections.read(self.key)
        if not raw:
            return None
        try:
            return self.model.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptStateError(self.key, str(e)) from e

    def set(self, record: Optional[T]) -> None:
        if record is None:
            self.collections.write(self.key, "")
        else:
            self.collections.write(self.key, record.model_dump_json(by_alias=True, exclude_none=True))
