"""FastAPI dependencies: the shared store, the request's user, list query params.

The user comes from an access token, read from the Authorization header
(API clients) or the httpOnly session cookie (browser). Header first.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from medshop.core.config import settings
from medshop.core.exceptions import BusinessError
from medshop.core.security import decode_access_token
from medshop.db.init_db import open_store
from medshop.schemas.entities import User
from medshop.services import auth_service
from medshop.services.query import Page, run_query
from medshop.storage.store import PharmacyStore

security = HTTPBearer(auto_error=False)

_store: Optional[PharmacyStore] = None


def get_store() -> PharmacyStore:
    """Process-wide store, opened on first use."""
    global _store
    if _store is None:
        _store = open_store()
    return _store


def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    token = None
    if credentials:
        token = credentials.credentials
    elif settings.SESSION_COOKIE in request.cookies:
        token = request.cookies[settings.SESSION_COOKIE]

    if not token:
        raise BusinessError.unauthorized("no access token")

    user_id = decode_access_token(token)
    if not user_id:
        raise BusinessError.unauthorized("invalid or expired token")
    return user_id


def get_current_user(
    store: PharmacyStore = Depends(get_store),
    user_id: str = Depends(get_current_user_id),
) -> User:
    """Load the token's user from the users collection on every request."""
    user = auth_service.get_user(store, user_id)
    if not user:
        raise BusinessError.unauthorized(f"user {user_id} no longer exists")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "admin":
        raise BusinessError.forbidden(f"user {current_user.username} is not an admin")
    return current_user


@dataclass
class ListParams:
    search: Optional[str]
    sort: Optional[str]
    direction: Optional[str]
    page: int
    page_size: int

    def apply(self, items: Sequence[Any], fields: Sequence[str]) -> Page:
        if self.direction not in (None, "", "none", "asc", "desc"):
            raise BusinessError.bad_request(f"Unknown sort direction: {self.direction}")
        return run_query(
            items,
            search=self.search or "",
            fields=fields,
            sort_field=self.sort,
            direction=self.direction,
            page=self.page,
            page_size=self.page_size,
        )


def list_params(
    search: Optional[str] = Query(None, description="Case-insensitive substring search"),
    sort: Optional[str] = Query(None, description="Field to sort by"),
    direction: Optional[str] = Query(None, description="asc, desc or none"),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
) -> ListParams:
    return ListParams(search=search, sort=sort, direction=direction, page=page, page_size=page_size)


def page_response(page: Page, extra: Optional[Any] = None) -> Dict[str, Any]:
    """Serialize a Page with camelCase records. `extra(record)` adds display fields."""
    items = []
    for record in page.items:
        item = record.model_dump(mode="json", by_alias=True, exclude_none=True)
        if extra:
            item.update(extra(record))
        items.append(item)
    return {
        "items": items,
        "total": page.total,
        "page": page.page,
        "pageSize": page.page_size,
        "totalPages": page.total_pages,
    }
