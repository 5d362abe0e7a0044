"""Schemas do mercado de transferências"""
from datetime import datetime
from typing import Annotated, Optional
from pydantic import Field, StringConstraints
from fantasy_football.core.config import settings
from fantasy_football.schemas.common import CamelModel, Country, ObjectId, Pagination
from fantasy_football.schemas.player import PlayerResponse
from fantasy_football.schemas.team import TeamSummary


class ListingCreate(CamelModel):
    """Schema para anunciar um jogador no mercado"""
    player: ObjectId
    asking_price: int = Field(..., ge=settings.PLAYER_MIN_MARKET_VALUE)


class ListingSearch(Pagination):
    """Filtros de busca no mercado (combinados com AND)"""
    id: Optional[ObjectId] = None
    min_asking_price: Optional[int] = Field(None, ge=0, le=100_000_000)
    max_asking_price: Optional[int] = Field(None, ge=0, le=100_000_000)
    country: Optional[Country] = None
    player_name: Optional[
        Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^[a-zA-Z]*$")]
    ] = None
    team_name: Optional[
        Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^[a-zA-Z ]*$")]
    ] = None


class ListingResponse(CamelModel):
    """Anúncio populado com jogador e time"""
    id: str
    player: PlayerResponse
    team: Optional[TeamSummary] = None
    asking_price: int
    created_at: datetime

    @classmethod
    def from_model(cls, listing) -> "ListingResponse":
        team = listing.team
        return cls(
            id=listing.id,
            player=PlayerResponse.from_model(listing.player),
            team=TeamSummary(
                id=team.id, name=team.name, country=team.country, user=team.user_id
            ) if team is not None else None,
            asking_price=listing.asking_price,
            created_at=listing.created_at,
        )


class TransferRequest(CamelModel):
    """Pedido de transferência; destinationTeamId só é usado por administradores"""
    player_id: ObjectId
    destination_team_id: Optional[ObjectId] = None


class TransferResult(CamelModel):
    player_id: str
    from_team_id: Optional[str] = None
    to_team_id: str
    asking_price: int
    previous_market_value: int
    new_market_value: int
