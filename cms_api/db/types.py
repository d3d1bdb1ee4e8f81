"""
Column type for content payloads.

JSONPayload stores an arbitrary JSON value using one of two encodings:
- native: the dialect's JSON column (JSONB on PostgreSQL, JSON elsewhere)
- text:   compact json.dumps() output in a TEXT column, parsed on read

The encoding is picked per dialect at first use from Settings.PAYLOAD_STORAGE
("auto" means native on PostgreSQL and text everywhere else), so the same ORM
model serves every backend.
"""

import json
from typing import Any, Optional

from sqlalchemy import JSON, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator, TypeEngine

from ..core.config import get_settings

NATIVE = "native"
TEXT = "text"


# PUBLIC_INTERFACE
def resolve_storage(dialect_name: str, storage: Optional[str] = None) -> str:
    """Return the effective payload encoding ('native' or 'text') for a dialect."""
    choice = storage or get_settings().PAYLOAD_STORAGE
    if choice == "auto":
        return NATIVE if dialect_name == "postgresql" else TEXT
    if choice not in (NATIVE, TEXT):
        raise ValueError(f"Unknown payload storage strategy: {choice!r}")
    return choice


# PUBLIC_INTERFACE
class JSONPayload(TypeDecorator):
    """JSON value column with a configurable native/text encoding."""

    impl = Text
    cache_ok = True
    # JSON null is a legitimate payload; it must be written as 'null', not skipped.
    should_evaluate_none = True

    def __init__(self, storage: Optional[str] = None):
        super().__init__()
        self.storage = storage

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine:
        if resolve_storage(dialect.name, self.storage) == NATIVE:
            if dialect.name == "postgresql":
                return dialect.type_descriptor(JSONB(none_as_null=False))
            return dialect.type_descriptor(JSON(none_as_null=False))
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        if resolve_storage(dialect.name, self.storage) == NATIVE:
            return value
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)

    def process_result_value(self, value: Any, dialect: Dialect) -> Any:
        if value is None or resolve_storage(dialect.name, self.storage) == NATIVE:
            return value
        return json.loads(value)
