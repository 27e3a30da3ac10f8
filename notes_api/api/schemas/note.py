"""
Esquemas Pydantic para `notes`.

`title`/`content` son opcionales a nivel de schema: el servicio decide el 400
con su propio mensaje en vez del 422 genérico de FastAPI.
"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from notes_api.core.time import to_iso


class NoteCreate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None


class NoteUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None


class NoteOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: str
    tags: List[str] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt")

    @field_serializer("created_at")
    def _ser_created_at(self, v: datetime) -> str:
        return to_iso(v)


class MessageOut(BaseModel):
    message: str
