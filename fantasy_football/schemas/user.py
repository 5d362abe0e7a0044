"""Schemas de User e sessão"""
from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field, field_validator
from fantasy_football.schemas.common import CamelModel, NameResponse, PersonName


class UserCreate(CamelModel):
    """Schema para cadastro (sign-up e criação por admin)"""
    first_name: PersonName
    last_name: PersonName
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserUpdate(CamelModel):
    first_name: Optional[PersonName] = None
    last_name: Optional[PersonName] = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SignIn(CamelModel):
    email: str = Field(..., min_length=2, max_length=50)
    password: str = Field(..., min_length=6)


class UpdateSession(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """Schema de resposta de User (nunca inclui a senha)"""
    id: str
    name: NameResponse
    email: str
    role: str
    created_at: datetime

    @classmethod
    def from_model(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            name=NameResponse(first_name=user.first_name, last_name=user.last_name),
            email=user.email,
            role=user.role,
            created_at=user.created_at,
        )


class SessionResponse(CamelModel):
    access_token: str
    refresh_token: str
