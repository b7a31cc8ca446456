"""
Note management schemas.

Request bodies deliberately accept missing or blank fields: create rejects
them in the service with the API's own 400 message, and update treats them
as "leave this field alone".
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..models.types import as_utc


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim surrounding whitespace; blank strings become ``None``."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class NoteCreate(BaseModel):
    """Note creation request schema."""

    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Shopping",
                "content": "milk, eggs",
            }
        }
    )


class NoteUpdate(BaseModel):
    """Note update request schema. Omitted or blank fields are left unchanged."""

    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "content": "milk, eggs, bread",
            }
        }
    )


class NoteResponse(BaseModel):
    """Note response schema."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    owner: uuid.UUID = Field(
        validation_alias=AliasChoices("owner_id", "owner"),
        description="ID of the user who owns the note",
    )
    created_at: datetime = Field(
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updatedAt", "updated_at"),
        serialization_alias="updatedAt",
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "6f1c2e0a-1d43-4c41-9a53-2a4f0c6b2d11",
                "title": "Shopping",
                "content": "milk, eggs",
                "owner": "123e4567-e89b-12d3-a456-426614174000",
                "createdAt": "2025-09-13T10:30:00+00:00",
                "updatedAt": "2025-09-13T10:30:00+00:00",
            }
        },
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        return as_utc(v)
