"""Users, password hashing and the logged-in session record.

Passwords are stored as bcrypt hashes. `authenticate` gives the same
None result for an unknown username and a wrong password.
"""
import logging
import secrets
from typing import List, Optional

import bcrypt

from medshop.core.config import settings
from medshop.core.exceptions import DuplicateUsernameError
from medshop.schemas.entities import User, UserCreate
from medshop.storage.store import PharmacyStore

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def is_password_hash(value: str) -> bool:
    return len(value) == 60 and value.startswith(("$2a$", "$2b$", "$2y$"))


def verify_password(plain: str, hashed: str) -> bool:
    if not is_password_hash(hashed):
        return False
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def build_default_admin(store: PharmacyStore, password: Optional[str] = None) -> User:
    """Administrator record for an empty users collection (not persisted here)."""
    password = password or settings.DEFAULT_ADMIN_PASSWORD
    if not password:
        password = secrets.token_urlsafe(16)
        logger.warning(
            f"Default admin '{settings.DEFAULT_ADMIN_USERNAME}' created with generated password: {password} "
            f"- change it after first login"
        )
    return store.users.build(UserCreate(
        username=settings.DEFAULT_ADMIN_USERNAME,
        password=hash_password(password),
        name="Admin User",
        role="admin",
        email=settings.DEFAULT_ADMIN_EMAIL,
    ))


def list_users(store: PharmacyStore) -> List[User]:
    return store.users.list()


def get_user(store: PharmacyStore, user_id: str) -> Optional[User]:
    return store.users.get_by_id(user_id)


def add_user(store: PharmacyStore, data: UserCreate) -> User:
    if any(u.username == data.username for u in store.users.list()):
        raise DuplicateUsernameError(data.username)
    hashed = data.model_copy(update={"password": hash_password(data.password)})
    user = store.users.add(hashed)
    logger.info(f"Added user {user.username} ({user.role})")
    return user


def _is_session_user(store: PharmacyStore, user_id: str) -> bool:
    current = store.current_user.get()
    return current is not None and current.id == user_id


def update_user(store: PharmacyStore, user: User) -> User:
    """Replace a user record; a plaintext password is hashed first.

    The session record follows the change when it is the same user.
    """
    if not is_password_hash(user.password):
        user = user.model_copy(update={"password": hash_password(user.password)})
    with store.transaction():
        updated = store.users.update(user)
        if _is_session_user(store, updated.id) and store.users.get_by_id(updated.id):
            store.current_user.set(updated)
    return updated


def delete_user(store: PharmacyStore, user_id: str) -> bool:
    with store.transaction():
        deleted = store.users.delete(user_id)
        if deleted and _is_session_user(store, user_id):
            store.current_user.set(None)
    if deleted:
        logger.info(f"Deleted user {user_id}")
    return deleted


def authenticate(store: PharmacyStore, username: str, password: str) -> Optional[User]:
    user = next((u for u in store.users.list() if u.username == username), None)
    if user is None or not verify_password(password, user.password):
        logger.info(f"Failed login for '{username}'")
        return None

    with store.transaction():
        updated = store.users.update(user.model_copy(update={"last_login": store.now()}))
        store.current_user.set(updated)
    logger.info(f"User {updated.username} logged in")
    return updated


def get_current_user(store: PharmacyStore) -> Optional[User]:
    """The session user as currently stored in `users`, or None if logged out or deleted."""
    current = store.current_user.get()
    if current is None:
        return None
    return store.users.get_by_id(current.id)


def logout(store: PharmacyStore, user_id: Optional[str] = None) -> None:
    """Clear the session record. With `user_id`, only if it belongs to that user."""
    if user_id is None or _is_session_user(store, user_id):
        store.current_user.set(None)
