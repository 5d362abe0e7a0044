"""Endpoint de execução de transferências"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_football.core.cache import invalidate_market
from fantasy_football.core.database import get_db
from fantasy_football.core.security import (
    ROLE_ADMIN,
    ROLE_USER,
    Principal,
    get_optional_principal,
    require_role,
)
from fantasy_football.schemas.common import envelope
from fantasy_football.schemas.market import TransferRequest, TransferResult
from fantasy_football.services.transfer_service import TransferService

router = APIRouter()


@router.post("")
async def transfer_player(
    payload: TransferRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Compra um jogador anunciado.

    ADMIN precisa informar ``destinationTeamId``; USER compra sempre para
    o próprio time.
    """
    principal = require_role(principal, [ROLE_ADMIN, ROLE_USER])

    service = TransferService(db)
    result = await service.execute_transfer(
        payload.player_id, principal, destination_team_id=payload.destination_team_id
    )
    await db.commit()
    await invalidate_market()
    return envelope("Jogador transferido com sucesso", {"transfer": TransferResult(**result).to_json()})
