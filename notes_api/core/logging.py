"""
Configuración de logging: formato común para `notes.*` y los loggers de Uvicorn.
"""
import logging

FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
APP_LOGGER = "notes"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(level: str) -> int:
    """Nivel numérico a partir de LOG_LEVEL; valores desconocidos caen en INFO."""
    resolved = getattr(logging, (level or "").strip().upper(), None)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: str = "INFO") -> None:
    resolved = resolve_level(level)
    logging.basicConfig(level=resolved, format=FORMAT)
    for name in (APP_LOGGER, *UVICORN_LOGGERS):
        logging.getLogger(name).setLevel(resolved)
