from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from medshop.schemas.entities import UserRole


class UserLogin(BaseModel):
    username: str
    password: str


class UserUpdate(BaseModel):
    """Editable user fields. A missing password keeps the current one."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str
    name: str
    role: UserRole
    email: str
    phone: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """User view returned to callers. Never carries the password hash."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    username: str
    name: str
    role: UserRole
    email: str
    phone: Optional[str] = None
    created_at: datetime
    last_login: Optional[datetime] = None


class LoginResponse(BaseModel):
    """Token for API clients. Browsers use the session cookie set alongside it."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
