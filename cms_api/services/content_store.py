"""
Persistence for content items.

ContentStore wraps a SQLAlchemy Session and owns every read and write of the
content_items table. Mutating methods commit before returning, so a True/row
result means the change is durable.

Not-found is reported as None/False rather than raised. A concurrency conflict
on update (the row disappeared between load and write) is resolved with an
existence check: a vanished row is reported as not-found, anything else is
re-raised.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ..core.logger import get_logger
from ..models.sql_models import ContentItem

logger = get_logger(__name__)

# Ids are 64-bit signed integers; anything outside that range cannot be stored.
MIN_ITEM_ID = -(2 ** 63)
MAX_ITEM_ID = 2 ** 63 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _storable_id(item_id: int) -> bool:
    return MIN_ITEM_ID <= item_id <= MAX_ITEM_ID


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; everything written here is UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# PUBLIC_INTERFACE
class ContentStore:
    """CRUD access to ContentItem rows over a single session."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[ContentItem]:
        """Return every item in primary-key order."""
        stmt = select(ContentItem).order_by(ContentItem.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get(self, item_id: int) -> Optional[ContentItem]:
        """Return the item with this id, or None."""
        if not _storable_id(item_id):
            return None
        return self.db.get(ContentItem, item_id)

    def exists(self, item_id: int) -> bool:
        """Return whether an item with this id currently exists."""
        if not _storable_id(item_id):
            return False
        stmt = select(exists().where(ContentItem.id == item_id))
        return bool(self.db.execute(stmt).scalar())

    def insert(self, payload: Any) -> ContentItem:
        """Persist a new item and return it with its assigned id."""
        now = _utcnow()
        item = ContentItem(payload=payload, created_at=now, updated_at=now)
        self.db.add(item)
        self._commit()
        self.db.refresh(item)
        logger.info("Content item created", extra={"item_id": item.id})
        return item

    def update(self, item: ContentItem, payload: Any) -> bool:
        """Replace the payload of an already loaded item.

        Returns False if the row was deleted before the write landed.
        """
        item_id = item.id
        previous = _as_utc(item.updated_at)
        now = _utcnow()
        item.payload = payload
        item.updated_at = now if previous is None or now >= previous else previous
        try:
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            if not self.exists(item_id):
                logger.info("Content item vanished during update", extra={"item_id": item_id})
                return False
            raise
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.info("Content item updated", extra={"item_id": item_id})
        return True

    def update_by_id(self, item_id: int, payload: Any) -> bool:
        """Load then update; False if no item has this id."""
        item = self.get(item_id)
        if item is None:
            return False
        return self.update(item, payload)

    def delete(self, item_id: int) -> bool:
        """Hard-delete an item; False if no item has this id."""
        item = self.get(item_id)
        if item is None:
            return False
        self.db.delete(item)
        self._commit()
        logger.info("Content item deleted", extra={"item_id": item_id})
        return True

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
