"""
Service layer for notes: input checks and store-error translation over the repository.

Each operation is a single store call, attempted once. Driver errors are
logged with their traceback and surfaced as `StorageError` with a generic
message; missing notes become `NoteNotFoundError`.
"""
import logging
from typing import Any, Dict, List, Optional

from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from notes_api.core.exceptions import NoteNotFoundError, NoteValidationError, StorageError
from notes_api.repositories.note_repo import NoteRepository

_log = logging.getLogger("notes.service")

# Un id mal formado falla igual que un error del store (500)
_STORE_ERRORS = (PyMongoError, InvalidId)

NOT_FOUND_MESSAGE = "Note not found with that ID."
DELETED_MESSAGE = "Note deleted successfully."


class NoteService:
    def __init__(self, repo: NoteRepository) -> None:
        self.repo = repo

    async def list_notes(self, tag: Optional[str] = None) -> List[Dict[str, Any]]:
        try:
            return await self.repo.list_notes(tag=tag or None)
        except _STORE_ERRORS as e:
            _log.exception("Error fetching notes: %s", e)
            raise StorageError("Could not fetch notes from the database.") from e

    async def create_note(
        self,
        title: Optional[str],
        content: Optional[str],
        tags: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        if not title or not content:
            raise NoteValidationError("Title and content are required fields.")
        try:
            return await self.repo.insert_note(title=title, content=content, tags=tags or [])
        except _STORE_ERRORS as e:
            _log.exception("Error creating note: %s", e)
            raise StorageError("Could not create the new note.") from e

    async def update_note(self, note_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Overwrite the supplied fields only.

        Unlike `create_note`, empty `title`/`content` values are written as-is.
        `None` values mean "not supplied".
        """
        changes = {k: v for k, v in updates.items() if v is not None}
        try:
            note = await self.repo.update_note(note_id, changes)
        except _STORE_ERRORS as e:
            _log.exception("Error updating note %s: %s", note_id, e)
            raise StorageError("Could not update the note.") from e
        if note is None:
            raise NoteNotFoundError(NOT_FOUND_MESSAGE)
        return note

    async def delete_note(self, note_id: str) -> str:
        try:
            note = await self.repo.delete_note(note_id)
        except _STORE_ERRORS as e:
            _log.exception("Error deleting note %s: %s", note_id, e)
            raise StorageError("Could not delete the note.") from e
        if note is None:
            raise NoteNotFoundError(NOT_FOUND_MESSAGE)
        return DELETED_MESSAGE
