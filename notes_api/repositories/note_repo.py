"""Repo de la colección `notes`.

- Documento: `{_id: ObjectId, title, content, tags: [str], createdAt: Date}`.
- Expone `id` (hex del ObjectId) y nunca `_id` hacia afuera.
- `createdAt` se sella una sola vez al insertar; ningún update lo toca.
"""
from typing import Any, Callable, Dict, List, Optional
from datetime import datetime

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument

from notes_api.core.time import utc_now

UPDATABLE_FIELDS = ("title", "content", "tags")


def _out(doc: Dict[str, Any]) -> Dict[str, Any]:
    d = dict(doc)
    d["id"] = str(d.pop("_id", ""))
    return d


class NoteRepository:
    """Acceso a la colección de notas a través de un handle Motor inyectado."""

    def __init__(self, collection: AsyncIOMotorCollection, clock: Callable[[], datetime] = utc_now) -> None:
        self.collection = collection
        self.clock = clock

    async def list_notes(self, tag: Optional[str] = None) -> List[Dict[str, Any]]:
        """Lista notas (filtrando por tag exacto si viene), por createdAt desc."""
        filtro: Dict[str, Any] = {}
        if tag:
            filtro["tags"] = tag
        cursor = self.collection.find(filtro).sort("createdAt", DESCENDING)
        return [_out(d) for d in await cursor.to_list(length=None)]

    async def insert_note(self, title: str, content: str, tags: List[str]) -> Dict[str, Any]:
        """Inserta la nota y devuelve el documento completo (con id)."""
        data: Dict[str, Any] = {
            "title": title,
            "content": content,
            "tags": list(tags),
            "createdAt": self.clock(),
        }
        res = await self.collection.insert_one(data)
        data["_id"] = res.inserted_id
        return _out(data)

    async def get_note(self, note_id: str) -> Optional[Dict[str, Any]]:
        doc = await self.collection.find_one({"_id": ObjectId(note_id)})
        return _out(doc) if doc else None

    async def update_note(self, note_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Aplica `$set` sólo con los campos editables; devuelve el doc ya actualizado."""
        set_ops = {k: updates[k] for k in UPDATABLE_FIELDS if k in updates}
        if not set_ops:
            # `$set` vacío es un error en Mongo; sin cambios equivale a leer
            return await self.get_note(note_id)
        doc = await self.collection.find_one_and_update(
            {"_id": ObjectId(note_id)},
            {"$set": set_ops},
            return_document=ReturnDocument.AFTER,
        )
        return _out(doc) if doc else None

    async def delete_note(self, note_id: str) -> Optional[Dict[str, Any]]:
        doc = await self.collection.find_one_and_delete({"_id": ObjectId(note_id)})
        return _out(doc) if doc else None
