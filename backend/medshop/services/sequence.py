"""
Document numbers for purchase orders and sales: <PREFIX>-<YYYYMMDD>-<NNN>.

Two numbering modes:
- daily: a persisted counter per prefix and calendar day, so the date
  part and the sequence part always agree and numbering restarts daily.
- lifetime: total number of documents of that type plus one.

Call inside the same transaction as the document write.
"""
import logging
from datetime import date
from typing import Dict, Optional

from pydantic import TypeAdapter, ValidationError

from medshop.core.config import settings
from medshop.core.exceptions import CorruptStateError
from medshop.storage.repository import Repository
from medshop.storage.store import SEQUENCES, PharmacyStore

logger = logging.getLogger(__name__)

PURCHASE_ORDER_PREFIX = "PO"
INVOICE_PREFIX = "INV"

_counters = TypeAdapter(Dict[str, int])


def format_document_number(prefix: str, on: date, sequence: int) -> str:
    return f"{prefix}-{on:%Y%m%d}-{sequence:03d}"


def _load_counters(store: PharmacyStore) -> Dict[str, int]:
    raw = store.collections.read(SEQUENCES)
    if not raw:
        return {}
    try:
        return _counters.validate_json(raw)
    except ValidationError as e:
        raise CorruptStateError(SEQUENCES, str(e)) from e


def next_document_number(
    store: PharmacyStore,
    prefix: str,
    repo: Repository,
    mode: Optional[str] = None,
) -> str:
    mode = mode or settings.DOCUMENT_NUMBERING
    today = store.today()

    if mode == "lifetime":
        sequence = repo.count() + 1
    elif mode == "daily":
        counters = _load_counters(store)
        bucket = f"{prefix}-{today:%Y%m%d}"
        sequence = counters.get(bucket, 0) + 1
        counters[bucket] = sequence
        store.collections.write(SEQUENCES, _counters.dump_json(counters).decode("utf-8"))
    else:
        raise ValueError(f"Unknown document numbering mode: {mode}")

    number = format_document_number(prefix, today, sequence)
    logger.debug(f"Issued document number {number} ({mode})")
    return number
