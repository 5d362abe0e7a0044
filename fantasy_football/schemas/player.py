"""Schemas de Player"""
from datetime import datetime
from typing import Literal, Optional
from pydantic import Field, field_validator
from fantasy_football.core.config import settings
from fantasy_football.schemas.common import CamelModel, NameResponse, PersonName, Country

PlayerRole = Literal["GOALKEEPER", "DEFENDER", "MIDFIELDER", "ATTACKER"]


class PlayerCreate(CamelModel):
    """Schema para criação de Player"""
    first_name: PersonName
    last_name: PersonName
    role: PlayerRole
    age: int = Field(..., ge=settings.PLAYER_MIN_AGE, le=settings.PLAYER_MAX_AGE)
    market_value: int = Field(..., ge=settings.PLAYER_MIN_MARKET_VALUE)
    country: Country


class PlayerUpdate(CamelModel):
    """Schema para atualização parcial de Player (string vazia = sem alteração)"""
    first_name: Optional[PersonName] = None
    last_name: Optional[PersonName] = None
    role: Optional[PlayerRole] = None
    age: Optional[int] = Field(None, ge=settings.PLAYER_MIN_AGE, le=settings.PLAYER_MAX_AGE)
    market_value: Optional[int] = Field(None, ge=settings.PLAYER_MIN_MARKET_VALUE)
    country: Optional[Country] = None

    @field_validator("first_name", "last_name", "role", "country", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class PlayerResponse(CamelModel):
    """Schema de resposta de Player"""
    id: str
    name: NameResponse
    role: str
    country: str
    age: int
    market_value: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, player) -> "PlayerResponse":
        return cls(
            id=player.id,
            name=NameResponse(first_name=player.first_name, last_name=player.last_name),
            role=player.role,
            country=player.country,
            age=player.age,
            market_value=player.market_value,
            created_at=player.created_at,
            updated_at=player.updated_at,
        )
