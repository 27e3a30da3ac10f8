"""
Endpoints para `notes`: listar, crear, actualizar parcialmente y borrar.

Los errores del servicio (`NoteError`) los traduce el handler global a
`{message}` con su status; aquí no hay try/except.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from notes_api.api.deps import get_note_service
from notes_api.api.schemas.note import MessageOut, NoteCreate, NoteOut, NoteUpdate
from notes_api.services.note_service import NoteService


router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get(
    "",
    response_model=List[NoteOut],
    summary="Listar notas",
    description="Lista todas las notas (más recientes primero), opcionalmente filtradas por un tag exacto.",
)
async def list_notes(
    tag: Optional[str] = Query(default=None),
    service: NoteService = Depends(get_note_service),
) -> List[NoteOut]:
    items = await service.list_notes(tag=tag)
    return [NoteOut(**i) for i in items]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteOut,
    summary="Crear nota",
)
async def create_note(
    payload: Optional[NoteCreate] = None,
    service: NoteService = Depends(get_note_service),
) -> NoteOut:
    payload = payload or NoteCreate()
    note = await service.create_note(payload.title, payload.content, payload.tags)
    return NoteOut(**note)


@router.patch(
    "/{note_id}",
    response_model=NoteOut,
    summary="Actualizar nota",
    description="Sobrescribe sólo los campos enviados (title, content, tags).",
)
async def update_note(
    note_id: str,
    payload: Optional[NoteUpdate] = None,
    service: NoteService = Depends(get_note_service),
) -> NoteOut:
    updates = payload.model_dump(exclude_unset=True) if payload else {}
    note = await service.update_note(note_id, updates)
    return NoteOut(**note)


@router.delete(
    "/{note_id}",
    response_model=MessageOut,
    summary="Borrar nota",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> MessageOut:
    return MessageOut(message=await service.delete_note(note_id))
