"""Note repository for database operations.

Every query that reads or writes an existing note filters on both the note
id and the owner id, so a note belonging to someone else is indistinguishable
from one that does not exist.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import and_, delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, note_data: Dict[str, Any]) -> Note:
        """Create new note."""
        note = Note(**note_data)
        self.session.add(note)
        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def get_by_id_and_user(self, note_id: UUID, user_id: UUID) -> Optional[Note]:
        """Get note by ID if owned by user."""
        stmt = select(Note).where(and_(Note.id == note_id, Note.owner_id == user_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_note(self, note: Note, update_data: Dict[str, Any]) -> Note:
        """Apply ``update_data`` to a note previously loaded for its owner."""
        for key, value in update_data.items():
            setattr(note, key, value)

        await self.session.commit()
        await self.session.refresh(note)
        return note

    async def delete_note(self, note_id: UUID, user_id: UUID) -> bool:
        """Delete note if owned by user."""
        stmt = delete(Note).where(and_(Note.id == note_id, Note.owner_id == user_id))
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def list_user_notes(self, user_id: UUID) -> List[Note]:
        """All notes of a user, most recently created first."""
        stmt = select(Note).where(Note.owner_id == user_id).order_by(desc(Note.created_at))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
