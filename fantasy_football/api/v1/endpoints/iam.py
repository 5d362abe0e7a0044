"""Endpoints de identidade (cadastro, login e sessão)"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_football.core.config import settings
from fantasy_football.core.database import get_db
from fantasy_football.core.rate_limit import limiter
from fantasy_football.schemas.common import envelope
from fantasy_football.schemas.team import TeamResponse
from fantasy_football.schemas.user import SessionResponse, SignIn, UpdateSession, UserCreate, UserResponse
from fantasy_football.services.iam_service import IAMService

router = APIRouter()


def _session_payload(result: dict) -> dict:
    team = result.get("team")
    return {
        "user": UserResponse.from_model(result["user"]).to_json(),
        "session": SessionResponse(**result["session"]).to_json(),
        "team": TeamResponse.from_model(team).to_json() if team is not None else None,
    }


@router.post("/signup", status_code=201)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def sign_up(request: Request, payload: UserCreate, db: AsyncSession = Depends(get_db)):
    """Cadastra usuário, gera o time inicial e abre sessão"""
    service = IAMService(db)
    result = await service.sign_up(payload.first_name, payload.last_name, payload.email, payload.password)
    return envelope("Cadastro realizado com sucesso", _session_payload(result), 201)


@router.post("/signin")
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def sign_in(request: Request, payload: SignIn, db: AsyncSession = Depends(get_db)):
    service = IAMService(db)
    result = await service.sign_in(payload.email, payload.password)
    return envelope("Login realizado com sucesso", _session_payload(result))


@router.post("/update-session")
async def update_session(payload: UpdateSession, db: AsyncSession = Depends(get_db)):
    """Troca o refresh token por uma nova sessão"""
    service = IAMService(db)
    session = await service.update_session(payload.refresh_token)
    return envelope("Sessão atualizada com sucesso", {"session": SessionResponse(**session).to_json()})
