"""Auth: login, logout and the current user.

Login failures get one generic message whether the username or the
password was wrong. A successful login returns an access token and also
sets it as an httpOnly cookie.
"""
from fastapi import APIRouter, Depends, Response

from medshop.api.deps import get_current_user, get_store
from medshop.core.config import settings
from medshop.core.exceptions import BusinessError
from medshop.core.security import create_access_token
from medshop.schemas.entities import User
from medshop.schemas.user import LoginResponse, UserLogin, UserResponse
from medshop.services import auth_service
from medshop.storage.store import PharmacyStore

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(data: UserLogin, response: Response, store: PharmacyStore = Depends(get_store)):
    user = auth_service.authenticate(store, data.username, data.password)
    if not user:
        raise BusinessError.unauthorized(f"login failed for '{data.username}'")

    token = create_access_token(subject=user.id)
    response.set_cookie(
        key=settings.SESSION_COOKIE,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        secure=settings.SECURE_COOKIES,
        httponly=True,
        samesite=settings.SAME_SITE_COOKIE,
    )
    return LoginResponse(access_token=token, user=UserResponse.model_validate(user, from_attributes=True))


@router.post("/logout")
def logout(
    response: Response,
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    response.delete_cookie(
        key=settings.SESSION_COOKIE,
        secure=settings.SECURE_COOKIES,
        httponly=True,
        samesite=settings.SAME_SITE_COOKIE,
    )
    auth_service.logout(store, current_user.id)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    """Get current logged-in user."""
    return current_user
