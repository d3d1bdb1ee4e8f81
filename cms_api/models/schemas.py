"""
Pydantic schemas for API requests and responses.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Common/Utility Schemas
# ---------------------------------------------------------------------------

# PUBLIC_INTERFACE
class HealthResponse(BaseModel):
    """Basic health response schema."""
    status: str = Field(..., description="Health status message, e.g., 'ok'")


# ---------------------------------------------------------------------------
# Content Item Schemas
# ---------------------------------------------------------------------------

# PUBLIC_INTERFACE
class ContentItemIn(BaseModel):
    """Schema for creating/updating content items.

    The payload is submitted as a raw string and parsed server-side, so clients
    can send any JSON value and syntax errors are reported uniformly.
    """
    payload: str = Field(..., description="Raw JSON document as a string.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"payload": "{\"title\": \"Hero banner\", \"blocks\": [1, 2, 3]}"}
        },
    )


# PUBLIC_INTERFACE
class ContentItemOut(BaseModel):
    """Schema representing a stored content item as returned from the API."""
    id: int = Field(..., description="Server-assigned item identifier.")
    payload: Any = Field(..., description="Stored JSON value.")
    created_at: datetime = Field(..., description="Creation timestamp (UTC).")
    updated_at: datetime = Field(..., description="Last update timestamp (UTC).")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "payload": {"title": "Hero banner", "blocks": [1, 2, 3]},
                "created_at": "2024-01-01T12:00:00Z",
                "updated_at": "2024-01-01T12:00:00Z",
            }
        },
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
