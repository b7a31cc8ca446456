"""Note service implementation."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import InvalidInput, NotFound, StoreError
from ..logging import get_logger
from ..models.base import utcnow
from ..repositories.note_repository import NoteRepository
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate, clean_text
from .interfaces import INoteService

logger = get_logger("notes")


def parse_note_id(raw: str) -> Optional[UUID]:
    """Note ids are UUIDs; anything else cannot match a note."""
    try:
        return UUID(str(raw))
    except ValueError:
        return None


class NoteService(INoteService):
    """Note service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)

    async def list_notes(self, user_id: UUID) -> List[NoteResponse]:
        """List user notes, most recent first."""
        try:
            notes = await self.note_repo.list_user_notes(user_id)
        except SQLAlchemyError as exc:
            raise StoreError("Error fetching notes") from exc

        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, note_id: str, user_id: UUID) -> NoteResponse:
        """Get note by ID.

        Notes owned by another user answer exactly like missing ones.
        """
        note_uuid = parse_note_id(note_id)
        if note_uuid is None:
            raise NotFound()

        try:
            note = await self.note_repo.get_by_id_and_user(note_uuid, user_id)
        except SQLAlchemyError as exc:
            raise StoreError("Error fetching note") from exc

        if not note:
            raise NotFound()
        return NoteResponse.model_validate(note)

    async def create_note(self, user_id: UUID, request: Optional[NoteCreate]) -> NoteResponse:
        """Create new note. A missing body counts as missing title and content."""
        request = request or NoteCreate()
        title = clean_text(request.title)
        content = clean_text(request.content)
        if not title or not content:
            raise InvalidInput("Please provide title and content")

        now = utcnow()
        note_data = {
            "title": title,
            "content": content,
            "owner_id": user_id,
            "created_at": now,
            "updated_at": now,
        }

        try:
            note = await self.note_repo.create_note(note_data)
        except SQLAlchemyError as exc:
            raise StoreError("Error creating note") from exc

        logger.info("Note created", extra={"note_id": str(note.id), "user_id": str(user_id)})
        return NoteResponse.model_validate(note)

    async def update_note(self, note_id: str, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update existing note.

        Only non-blank fields are applied; an omitted or blank field keeps
        its current value. ``updated_at`` is refreshed either way.
        """
        note_uuid = parse_note_id(note_id)
        if note_uuid is None:
            raise NotFound()

        update_data = {}
        title = clean_text(request.title)
        if title:
            update_data["title"] = title
        content = clean_text(request.content)
        if content:
            update_data["content"] = content

        try:
            note = await self.note_repo.get_by_id_and_user(note_uuid, user_id)
            if not note:
                raise NotFound()

            update_data["updated_at"] = note.touch()
            note = await self.note_repo.update_note(note, update_data)
        except SQLAlchemyError as exc:
            raise StoreError("Error updating note") from exc

        changed = sorted(key for key in update_data if key != "updated_at")
        logger.info("Note updated", extra={"note_id": str(note.id), "fields": changed})
        return NoteResponse.model_validate(note)

    async def delete_note(self, note_id: str, user_id: UUID) -> None:
        """Delete note."""
        note_uuid = parse_note_id(note_id)
        if note_uuid is None:
            raise NotFound()

        try:
            deleted = await self.note_repo.delete_note(note_uuid, user_id)
        except SQLAlchemyError as exc:
            raise StoreError("Error deleting note") from exc

        if not deleted:
            raise NotFound()
        logger.info("Note deleted", extra={"note_id": str(note_uuid), "user_id": str(user_id)})
