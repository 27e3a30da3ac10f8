"""Cliente MongoDB asíncrono (Motor).

El cliente se construye y se valida (ping) una sola vez en el startup; quien
lo crea lo guarda en `app.state` y lo inyecta en repositorios. No hay
singletons a nivel de módulo.
"""
from __future__ import annotations

import certifi
import logging
from typing import Any, Dict, Tuple

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from notes_api.core.config import Settings
from notes_api.core.exceptions import StoreConfigError, StoreConnectionError

_log = logging.getLogger("notes.mongo")


def client_kwargs(settings: Settings) -> Dict[str, Any]:
    """Opciones del cliente según el esquema de la URI y los flags TLS."""
    uri = settings.mongo_uri or ""
    kwargs: Dict[str, Any] = dict(
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
        tz_aware=True,
    )
    if uri.startswith("mongodb+srv://"):
        # SRV ya implica TLS; proveemos CA bundle para robustez
        kwargs["tlsCAFile"] = certifi.where()
    elif settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        if settings.mongo_tls_insecure:
            kwargs["tlsAllowInvalidCertificates"] = True
        if settings.mongo_tls_allow_invalid_hostnames:
            kwargs["tlsAllowInvalidHostnames"] = True
    return kwargs


def build_async_client(settings: Settings) -> AsyncIOMotorClient:
    if not settings.mongo_configured:
        raise StoreConfigError("MONGO_URI is not defined.")
    return AsyncIOMotorClient(settings.mongo_uri, **client_kwargs(settings))


async def connect_mongo(settings: Settings) -> Tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    """Crea el cliente y valida la conexión con un ping.

    Lanza `StoreConfigError` sin URI y `StoreConnectionError` si el ping falla;
    ambos son fatales para el proceso.
    """
    client = build_async_client(settings)
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        raise StoreConnectionError(f"MongoDB connection error: {e}") from e
    _log.info("Successfully connected to MongoDB (db=%s)", settings.mongo_db)
    return client, client[settings.mongo_db]


async def ping(db: AsyncIOMotorDatabase) -> bool:
    try:
        await db.command("ping")
        return True
    except PyMongoError as e:
        _log.warning("Mongo ping falló: %s", e)
        return False
