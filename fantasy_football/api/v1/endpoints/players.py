"""Endpoints de Jogadores"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
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
from fantasy_football.schemas.player import PlayerCreate, PlayerResponse, PlayerUpdate
from fantasy_football.services.player_service import PlayerService

router = APIRouter()


@router.get("")
async def list_players(
    skip: int = Query(0, ge=0, le=1_000_000),
    limit: int = Query(10, ge=1, le=1000),
    player_id: Optional[str] = Query(None, alias="id", min_length=24, max_length=24),
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Lista jogadores (paginado, filtro opcional por id)"""
    require_role(principal, [ROLE_ADMIN])

    service = PlayerService(db)
    players, total = await service.list_players(skip=skip, limit=limit, player_id=player_id)
    return envelope(
        "Jogadores listados com sucesso",
        {"players": [PlayerResponse.from_model(player).to_json() for player in players], "totalCount": total},
    )


@router.post("", status_code=201)
async def create_player(
    payload: PlayerCreate,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    require_role(principal, [ROLE_ADMIN])

    service = PlayerService(db)
    player = await service.create_player(payload.model_dump())
    return envelope("Jogador criado com sucesso", {"player": PlayerResponse.from_model(player).to_json()}, 201)


@router.put("/{player_id}")
async def update_player(
    player_id: str,
    payload: PlayerUpdate,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Atualiza jogador; papel, idade e valor de mercado só por ADMIN"""
    principal = require_role(principal, [ROLE_ADMIN, ROLE_USER])

    service = PlayerService(db)
    player = await service.update_player(
        player_id, payload.model_dump(exclude_unset=True), requester_role=principal.role
    )
    await db.commit()
    await invalidate_market()
    return envelope("Jogador atualizado com sucesso", {"player": PlayerResponse.from_model(player).to_json()})


@router.delete("/{player_id}")
async def delete_player(
    player_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    require_role(principal, [ROLE_ADMIN])

    service = PlayerService(db)
    await service.delete_player(player_id)
    await db.commit()
    await invalidate_market()
    return envelope("Jogador removido com sucesso")
