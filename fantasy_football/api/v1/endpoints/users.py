"""Endpoints de Usuários (administração)"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_football.core.database import get_db
from fantasy_football.core.security import ROLE_ADMIN, Principal, get_optional_principal, require_role
from fantasy_football.schemas.common import envelope
from fantasy_football.schemas.user import UserCreate, UserResponse, UserUpdate
from fantasy_football.services.user_service import UserService

router = APIRouter()


@router.get("")
async def list_users(
    skip: int = Query(0, ge=0, le=1_000_000),
    limit: int = Query(10, ge=1, le=1000),
    user_id: Optional[str] = Query(None, alias="id", min_length=24, max_length=24),
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Lista usuários comuns (papel USER)"""
    require_role(principal, [ROLE_ADMIN])

    service = UserService(db)
    users, total = await service.list_users(skip=skip, limit=limit, user_id=user_id)
    return envelope(
        "Usuários listados com sucesso",
        {"users": [UserResponse.from_model(user).to_json() for user in users], "totalCount": total},
    )


@router.post("", status_code=201)
async def create_user(
    payload: UserCreate,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    """Cria usuário sem time associado"""
    require_role(principal, [ROLE_ADMIN])

    service = UserService(db)
    user = await service.create_user(
        payload.first_name, payload.last_name, payload.email, payload.password
    )
    return envelope("Usuário criado com sucesso", {"user": UserResponse.from_model(user).to_json()}, 201)


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    payload: UserUpdate,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    require_role(principal, [ROLE_ADMIN])

    service = UserService(db)
    user = await service.update_user(user_id, payload.model_dump(exclude_unset=True))
    return envelope("Usuário atualizado com sucesso", {"user": UserResponse.from_model(user).to_json()})


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: AsyncSession = Depends(get_db),
):
    require_role(principal, [ROLE_ADMIN])

    service = UserService(db)
    await service.delete_user(user_id)
    return envelope("Usuário removido com sucesso")
