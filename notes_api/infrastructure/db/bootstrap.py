"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar la colección de notas.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from notes_api.core.config import Settings

_log = logging.getLogger("notes.mongo.bootstrap")

# title/content sin minLength: el update parcial puede dejarlos vacíos
NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["title", "content", "tags", "createdAt"],
    "properties": {
        "title": {"bsonType": "string"},
        "content": {"bsonType": "string"},
        "tags": {"bsonType": "array", "items": {"bsonType": "string"}},
        "createdAt": {"bsonType": "date"},
    },
    "additionalProperties": True,
}

NOTE_INDEXES: List[Dict[str, Any]] = [
    {"keys": [("createdAt", -1)], "name": "ix_created_at_desc"},
    {"keys": [("tags", 1)], "name": "ix_tags"},
]


async def _collmod_or_create(db: AsyncIOMotorDatabase, name: str, validator: Dict[str, Any] | None) -> None:
    try:
        if validator:
            # Intenta aplicar validator con collMod
            await db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
        else:
            await db.create_collection(name)
    except PyMongoError:
        # Si collMod falla (no existe), intenta crear con validator
        try:
            if name not in await db.list_collection_names():
                if validator:
                    await db.create_collection(name, validator={"$jsonSchema": validator})
                else:
                    await db.create_collection(name)
        except PyMongoError as e:
            # No aborta el arranque; solo deja sin validator estricto.
            _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


async def _ensure_indexes(db: AsyncIOMotorDatabase, name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = db[name]
    for ix in indexes:
        opts = dict(ix)
        keys = opts.pop("keys")
        try:
            await coll.create_index(keys, **opts)
        except PyMongoError as e:
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


async def ensure_collections(db: AsyncIOMotorDatabase, settings: Settings) -> None:
    """
    Garantiza la colección de notas, su validador e índices.
    """
    name = settings.mongo_collection
    await _collmod_or_create(db, name, NOTE_VALIDATOR)
    await _ensure_indexes(db, name, NOTE_INDEXES)
