"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del proyecto.
- Agrupa ajustes por área: App, Servidor, CORS, Mongo, Logging.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from pathlib import Path
from typing import Optional

# Resuelve el .env ubicado en la raíz del proyecto (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Conjunto de variables de configuración con valores por defecto razonables.

    Nota: los valores pueden sobreescribirse vía variables de entorno (.env).
    `MONGO_URI` no tiene default: sin él la app no arranca.
    """
    # App
    app_name: str = "Notes API"
    api_prefix: str = "/api"

    # Servidor
    host: str = "0.0.0.0"
    port: int = 5000

    # CORS (abierto por defecto, como el cliente web espera)
    cors_origins: list[str] = ["*"]
    cors_allow_any: bool = True

    # Mongo
    mongo_uri: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("MONGO_URI", "MONGODB_URI"),
    )
    mongo_db: str = "notes_db"
    mongo_collection: str = "notes"
    mongo_server_selection_timeout_ms: int = 15000
    # TLS (mongodb+srv:// siempre usa TLS)
    mongo_tls: bool = False
    mongo_tls_insecure: bool = False  # allows invalid certs (dev only)
    mongo_tls_allow_invalid_hostnames: bool = False

    # Logging
    log_level: str = "INFO"

    # --- Utilidades derivadas / helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final (excepto cuando es solo '/')
        - Si está vacío, devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    @property
    def mongo_configured(self) -> bool:
        return bool(self.mongo_uri and self.mongo_uri.strip())

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # no fallar si hay variables no usadas
        populate_by_name=True,
    )


settings = Settings()
