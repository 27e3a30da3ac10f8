"""Entrada principal de la app FastAPI (configura middlewares, excepciones, routers y Mongo)."""
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from notes_api.api.router import api_router
from notes_api.core.config import Settings, settings as default_settings
from notes_api.core.exceptions import StoreConfigError, StoreConnectionError, register_exception_handlers
from notes_api.core.logging import setup_logging
from notes_api.core.middleware import add_middlewares
from notes_api.infrastructure.db.bootstrap import ensure_collections
from notes_api.infrastructure.db.mongo_async import connect_mongo

_log = logging.getLogger("notes.startup")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)
    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.mongo_client = None
    app.state.db = None

    add_middlewares(app, settings)
    register_exception_handlers(app)

    @app.on_event("startup")
    async def on_startup():
        # Sin Mongo no hay servicio: cualquier fallo aquí aborta el proceso
        try:
            client, db = await connect_mongo(settings)
        except (StoreConfigError, StoreConnectionError) as e:
            _log.critical("FATAL ERROR: %s", e)
            raise
        app.state.mongo_client = client
        app.state.db = db
        await ensure_collections(db, settings)
        _log.info("Server is running and listening on http://localhost:%s", settings.port)

    @app.on_event("shutdown")
    async def on_shutdown():
        client = app.state.mongo_client
        if client is not None:
            client.close()
            app.state.mongo_client = None
            app.state.db = None

    # Monta routers bajo el prefijo configurado
    app.include_router(api_router, prefix=settings.api_prefix_normalized)
    return app


app = create_app()


def run() -> None:
    """Arranca uvicorn en HOST:PORT (script `notes-api`)."""
    uvicorn.run(
        "notes_api.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
