"""User accounts. Admin only."""
from fastapi import APIRouter, Depends, status

from medshop.api.deps import ListParams, get_store, list_params, require_admin
from medshop.core.exceptions import BusinessError
from medshop.schemas.entities import User, UserCreate
from medshop.schemas.user import UserResponse, UserUpdate
from medshop.services import auth_service
from medshop.storage.store import PharmacyStore

router = APIRouter()

SEARCH_FIELDS = ["username", "name", "email", "role"]


def _public(user: User) -> dict:
    return UserResponse.model_validate(user, from_attributes=True).model_dump(mode="json", by_alias=True, exclude_none=True)


@router.get("")
def list_users(
    params: ListParams = Depends(list_params),
    store: PharmacyStore = Depends(get_store),
    admin: User = Depends(require_admin),
):
    page = params.apply(auth_service.list_users(store), SEARCH_FIELDS)
    return {
        "items": [_public(u) for u in page.items],
        "total": page.total,
        "page": page.page,
        "pageSize": page.page_size,
        "totalPages": page.total_pages,
    }


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, store: PharmacyStore = Depends(get_store), admin: User = Depends(require_admin)):
    user = auth_service.get_user(store, user_id)
    if not user:
        raise BusinessError.not_found("User")
    return user


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, store: PharmacyStore = Depends(get_store), admin: User = Depends(require_admin)):
    if len(data.password) < 6:
        raise BusinessError.bad_request("Password must be at least 6 characters")
    return auth_service.add_user(store, data)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    data: UserUpdate,
    store: PharmacyStore = Depends(get_store),
    admin: User = Depends(require_admin),
):
    existing = auth_service.get_user(store, user_id)
    if not existing:
        raise BusinessError.not_found("User")
    changes = data.model_dump(exclude_none=True)
    if data.username != existing.username and any(
        u.username == data.username for u in auth_service.list_users(store)
    ):
        raise BusinessError.conflict("Username already taken")
    return auth_service.update_user(store, existing.model_copy(update=changes))


@router.delete("/{user_id}")
def delete_user(user_id: str, store: PharmacyStore = Depends(get_store), admin: User = Depends(require_admin)):
    if user_id == admin.id:
        raise BusinessError.bad_request("You cannot delete your own account")
    if not auth_service.delete_user(store, user_id):
        raise BusinessError.not_found("User")
    return {"message": "User deleted", "id": user_id}
