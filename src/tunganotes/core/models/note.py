# Note model for user content
import uuid
from datetime import datetime, timedelta

from sqlalchemy import CheckConstraint, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel, utcnow
from .types import GUID, as_utc


class Note(BaseModel):
    """A personal text note, visible only to its owner."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # owner reference; notes go away with their user (ON DELETE CASCADE)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        # Listing is always "my notes, newest first"
        Index("idx_notes_owner_created", "owner_id", "created_at"),
        CheckConstraint("length(title) > 0", name="ck_notes_title_not_empty"),
        CheckConstraint("length(content) > 0", name="ck_notes_content_not_empty"),
    )

    def __repr__(self) -> str:
        # long titles are cut to 30 characters
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', owner_id={self.owner_id})>"

    def touch(self) -> datetime:
        """
        Refresh ``updated_at``.

        The new value is strictly later than the previous one even when the
        clock has not advanced since the last write.
        """
        now = utcnow()
        if self.updated_at is not None:
            floor = as_utc(self.updated_at) + timedelta(microseconds=1)
            if now < floor:
                now = floor
        self.updated_at = now
        return now
