"""Endpoints de monitoramento do sistema"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from fantasy_football.core.cache import cache
from fantasy_football.core.config import settings
from fantasy_football.core.database import get_db
from fantasy_football.models.player import Player
from fantasy_football.models.team import Team
from fantasy_football.models.transferable_player import TransferablePlayer
from fantasy_football.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/status")
async def get_system_status(db: AsyncSession = Depends(get_db)):
    """
    Retorna status do sistema:
    - Contagem de registros ativos no banco
    - Cache e rate limiting habilitados
    """
    counts = {}
    for label, model in (
        ("players", Player),
        ("teams", Team),
        ("transferable_players", TransferablePlayer),
        ("users", User),
    ):
        result = await db.execute(select(func.count(model.id)).filter(model.deleted_at.is_(None)))
        counts[label] = result.scalar() or 0

    database_status = "populated" if counts["users"] > 0 else "empty"

    return {
        "status": "ok",
        "database": {"status": database_status, **counts},
        "cache": {"enabled": cache.enabled, "connected": await cache.ping()},
        "rate_limiter": {"enabled": settings.RATE_LIMIT_ENABLED, "auth_limit": settings.AUTH_RATE_LIMIT},
    }
