"""Health (sin auth), salidas tipadas y estables."""
from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from notes_api.api.deps import get_db
from notes_api.api.schemas.health import HealthOut, PingOut
from notes_api.infrastructure.db.mongo_async import ping as mongo_ping


router = APIRouter(tags=["Health"])  # no prefix to keep paths stable


@router.get("/ping", response_model=PingOut, summary="Ping básico")
def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Salud básica")
async def health(db: AsyncIOMotorDatabase = Depends(get_db)) -> HealthOut:
    return HealthOut(ok=True, mongo=await mongo_ping(db))
