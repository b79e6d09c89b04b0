"""Database engine and session factory. SQLite compatible."""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from medshop.core.config import settings


def build_engine(url: str):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}

    if url.startswith("sqlite"):
        # SQLite: NullPool keeps file handles short-lived
        from sqlalchemy.pool import NullPool
        if url in ("sqlite://", "sqlite:///:memory:"):
            # In-memory databases vanish with their connection; keep one
            from sqlalchemy.pool import StaticPool
            return create_engine(url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(url, connect_args=connect_args, poolclass=NullPool)

    return create_engine(
        url,
        connect_args=connect_args,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=3600,
        pool_pre_ping=True,
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
