"""Application configuration.

Environment variables override all defaults. A `.env` file next to the
backend directory is loaded for local development.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

_BACKEND_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=_BACKEND_DIR / ".env", override=False)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Storage
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./medshop.db")
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "sql")  # sql | memory

    # Business rules
    EXPIRY_WARNING_DAYS: int = int(os.getenv("EXPIRY_WARNING_DAYS", "30"))
    ALERT_DEDUPLICATION: bool = _env_bool("ALERT_DEDUPLICATION", True)
    DOCUMENT_NUMBERING: str = os.getenv("DOCUMENT_NUMBERING", "daily")  # daily | lifetime
    STRICT_UPDATES: bool = _env_bool("STRICT_UPDATES", False)

    # Default administrator seeded into an empty users collection.
    # If no password is given a random one is generated and logged once.
    DEFAULT_ADMIN_USERNAME: str = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
    DEFAULT_ADMIN_PASSWORD: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "")
    DEFAULT_ADMIN_EMAIL: str = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@medicalshop.com")
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Access tokens (JWT), sent as a bearer header or an httpOnly cookie
    SECRET_KEY: str = os.getenv("SECRET_KEY", "")
    if not SECRET_KEY:
        if os.getenv("ENVIRONMENT", "development") == "production":
            raise ValueError("SECRET_KEY must be set in production")
        SECRET_KEY = "development-only-weak-default-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
    SESSION_COOKIE: str = "medshop_token"
    SECURE_COOKIES: bool = os.getenv("ENVIRONMENT", "development") == "production"
    SAME_SITE_COOKIE: str = "strict"

    # HTTP surface
    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
        ).split(",")
        if origin.strip()
    ]

    SHOP_NAME: str = os.getenv("SHOP_NAME", "Medical Shop")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = ENVIRONMENT == "development"


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Apply LOG_LEVEL to the root logger. Safe to call more than once."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
