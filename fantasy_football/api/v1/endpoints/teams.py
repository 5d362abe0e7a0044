"""Endpoints de Times"""
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
from fantasy_football.schemas.team import TeamCreate, TeamResponse, TeamUpdate
from fantasy_football.services.team_service import TeamService

router = APIRouter()


@router.get("")
async def list_teams(
    skip: int = Query(0, ge=0, le=1_000_000),
    limit: int = Query(10, ge=1, le=1000),
    team_id: Optional[str] = Query(None, alias="id", min_length=24, max_length=24),
    user_id: Optional[str] = Query(None, alias="userId", min_length=24, max_length=24),
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Lista times com roster populado"""
    require_role(principal, [ROLE_ADMIN, ROLE_USER])

    service = TeamService(db)
    teams, total = await service.list_teams(skip=skip, limit=limit, team_id=team_id, user_id=user_id)
    return envelope(
        "Times listados com sucesso",
        {"teams": [TeamResponse.from_model(team).to_json() for team in teams], "totalCount": total},
    )


@router.post("", status_code=201)
async def create_team(
    payload: TeamCreate,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Cria time; com ``transfer`` jogadores de outros times são desligados antes"""
    require_role(principal, [ROLE_ADMIN])

    service = TeamService(db)
    team = await service.create_team(
        user_id=payload.user,
        player_ids=payload.players,
        name=payload.name,
        country=payload.country,
        balance_amount=payload.balance_amount,
        transfer=payload.transfer,
    )
    return envelope("Time criado com sucesso", {"team": TeamResponse.from_model(team).to_json()}, 201)


@router.put("/{team_id}")
async def update_team(
    team_id: str,
    payload: TeamUpdate,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    require_role(principal, [ROLE_ADMIN])

    service = TeamService(db)
    patch = payload.model_dump(exclude_unset=True, exclude={"transfer"})
    team = await service.update_team(team_id, patch, transfer=payload.transfer)
    await db.commit()
    await invalidate_market()
    return envelope("Time atualizado com sucesso", {"team": TeamResponse.from_model(team).to_json()})


@router.delete("/{team_id}")
async def delete_team(
    team_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    require_role(principal, [ROLE_ADMIN])

    service = TeamService(db)
    await service.delete_team(team_id)
    await db.commit()
    await invalidate_market()
    return envelope("Time removido com sucesso")
