"""
Helpers de fecha/hora en UTC.

Mongo guarda fechas con precisión de milisegundos, así que `utc_now()` ya
trunca a ms para que lo que devolvemos al crear coincida con lo que se lee
después.
"""
from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def to_iso(d: datetime) -> str:
    """ISO-8601 en UTC con milisegundos y sufijo Z (`2024-05-01T12:00:00.123Z`)."""
    if d.tzinfo is None:
        # Motor sin tz_aware devuelve fechas naive en UTC
        d = d.replace(tzinfo=timezone.utc)
    d = d.astimezone(timezone.utc)
    return d.strftime("%Y-%m-%dT%H:%M:%S.") + f"{d.microsecond // 1000:03d}Z"
