"""
Dependencias reutilizables para routers (FastAPI Depends).

- Resuelven el handle de Mongo guardado en `app.state` durante el startup.
- Mantener esta capa delgada: sin lógica de negocio.
"""
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from notes_api.core.config import Settings
from notes_api.repositories.note_repo import NoteRepository
from notes_api.services.note_service import NoteService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> AsyncIOMotorDatabase:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Mongo no inicializado.")
    return db


def get_note_service(request: Request) -> NoteService:
    settings = get_settings(request)
    collection = get_db(request)[settings.mongo_collection]
    return NoteService(NoteRepository(collection))
