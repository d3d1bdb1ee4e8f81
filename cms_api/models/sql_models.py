"""
SQLAlchemy ORM models.

Defines the 'content_items' table:
- id: 64-bit integer primary key, server generated and never reused
- payload: arbitrary JSON value (native JSON column or TEXT, see db/types.py)
- created_at: server timestamp default, fixed after creation
- updated_at: server timestamp default, refreshed on every update
"""

from sqlalchemy import BigInteger, Column, DateTime, Integer
from sqlalchemy.sql import func

from ..db.sqlalchemy import Base
from ..db.types import JSONPayload


class ContentItem(Base):
    """ORM model representing a content item wrapping an arbitrary JSON payload."""
    __tablename__ = "content_items"
    __table_args__ = {"sqlite_autoincrement": True}

    # INTEGER on SQLite keeps the rowid alias that AUTOINCREMENT requires.
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    payload = Column(JSONPayload(), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self) -> str:
        return f"<ContentItem id={self.id!r}>"
