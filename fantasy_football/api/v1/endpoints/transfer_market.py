"""Endpoints do mercado de transferências"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_football.core.cache import cache, invalidate_market, market_search_key
from fantasy_football.core.database import get_db
from fantasy_football.core.security import (
    ROLE_ADMIN,
    ROLE_USER,
    Principal,
    get_optional_principal,
    require_role,
)
from fantasy_football.schemas.common import envelope
from fantasy_football.schemas.market import ListingCreate, ListingResponse, ListingSearch
from fantasy_football.services.market_service import MarketService

router = APIRouter()


@router.post("", status_code=201)
async def make_player_transferable(
    payload: ListingCreate,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Anuncia um jogador no mercado"""
    principal = require_role(principal, [ROLE_ADMIN, ROLE_USER])

    service = MarketService(db)
    listing = await service.list_player(payload.player, payload.asking_price, principal)
    await db.commit()
    await invalidate_market()
    return envelope(
        "Jogador anunciado com sucesso",
        {"transferablePlayer": ListingResponse.from_model(listing).to_json()},
        201,
    )


@router.get("")
async def list_transferable_players(
    skip: int = Query(0),
    limit: int = Query(10),
    listing_id: Optional[str] = Query(None, alias="id"),
    min_asking_price: Optional[int] = Query(None, alias="minAskingPrice"),
    max_asking_price: Optional[int] = Query(None, alias="maxAskingPrice"),
    country: Optional[str] = Query(None),
    player_name: Optional[str] = Query(None, alias="playerName"),
    team_name: Optional[str] = Query(None, alias="teamName"),
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Busca no mercado com filtros combinados (AND), mais recentes primeiro"""
    require_role(principal, [ROLE_ADMIN, ROLE_USER])

    filters = ListingSearch(
        skip=skip,
        limit=limit,
        id=listing_id,
        min_asking_price=min_asking_price,
        max_asking_price=max_asking_price,
        country=country,
        player_name=player_name,
        team_name=team_name,
    )

    cache_key = market_search_key(filters.model_dump())
    cached_result = await cache.get(cache_key)
    if cached_result:
        return envelope("Jogadores transferíveis listados com sucesso", cached_result)

    service = MarketService(db)
    listings, total = await service.search(filters)
    result = {
        "transferablePlayers": [ListingResponse.from_model(listing).to_json() for listing in listings],
        "totalCount": total,
    }
    await cache.set(cache_key, result)
    return envelope("Jogadores transferíveis listados com sucesso", result)


@router.delete("/{listing_id}")
async def delete_listing(
    listing_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    require_role(principal, [ROLE_ADMIN])

    service = MarketService(db)
    await service.delete_listing(listing_id)
    await db.commit()
    await invalidate_market()
    return envelope("Anúncio removido com sucesso")
