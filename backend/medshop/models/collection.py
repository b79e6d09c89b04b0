from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from medshop.db.base import Base


class CollectionDocument(Base):
    """
    One row per named collection.

    The value column holds the whole collection serialized as JSON and is
    replaced in full on every write.
    """
    __tablename__ = "collection_documents"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
