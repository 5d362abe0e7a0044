"""Schemas de Team"""
from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator
from fantasy_football.core.config import settings
from fantasy_football.schemas.common import CamelModel, Country, ObjectId
from fantasy_football.schemas.player import PlayerResponse


class TeamCreate(CamelModel):
    """Schema para criação de Team"""
    name: str = Field(..., min_length=1, max_length=50, pattern=r"^[a-zA-Z ]*$")
    players: List[ObjectId]
    balance_amount: int = Field(..., ge=settings.TEAM_MIN_BALANCE)
    user: ObjectId
    country: Country
    transfer: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class TeamUpdate(CamelModel):
    """Schema para atualização parcial de Team; players substitui o roster inteiro"""
    name: Optional[str] = Field(None, max_length=50, pattern=r"^[a-zA-Z ]*$")
    players: Optional[List[ObjectId]] = None
    balance_amount: Optional[int] = Field(None, ge=settings.TEAM_MIN_BALANCE)
    user: Optional[ObjectId] = None
    country: Optional[Country] = None
    transfer: bool = False

    @field_validator("name", "country", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


class TeamSummary(CamelModel):
    """Resumo de time usado nos anúncios do mercado"""
    id: str
    name: str
    country: str
    user: Optional[str] = None


class TeamResponse(CamelModel):
    """Schema de resposta de Team com roster populado"""
    id: str
    name: str
    country: str
    user: Optional[str] = None
    players: List[PlayerResponse]
    total_cost: int
    balance_amount: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, team) -> "TeamResponse":
        """Requer roster carregado com os jogadores (TeamRepository populate)"""
        players = [
            entry.player for entry in team.roster
            if entry.player is not None and not entry.player.is_deleted
        ]
        return cls(
            id=team.id,
            name=team.name,
            country=team.country,
            user=team.user_id,
            players=[PlayerResponse.from_model(player) for player in players],
            total_cost=team.total_cost,
            balance_amount=team.balance_amount,
            created_at=team.created_at,
            updated_at=team.updated_at,
        )
