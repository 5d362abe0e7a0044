"""Service de identidade: cadastro, login e renovação de sessão"""
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_football.core.config import settings
from fantasy_football.core.exceptions import InvalidCredentials, InvalidEmail, InvalidRefreshToken
from fantasy_football.core.security import (
    Principal,
    create_access_token,
    create_refresh_token_value,
    verify_password,
)
from fantasy_football.models.base import utcnow
from fantasy_football.models.user import User
from fantasy_football.repositories.refresh_token_repository import RefreshTokenRepository
from fantasy_football.repositories.user_repository import UserRepository
from fantasy_football.services.team_service import TeamService
from fantasy_football.services.user_service import UserService

logger = logging.getLogger(__name__)


class IAMService:
    """Fluxos de autenticação; cada novo usuário recebe um time gerado"""

    def __init__(self, db: AsyncSession, team_service: Optional[TeamService] = None):
        self.db = db
        self.users = UserRepository(db)
        self.refresh_tokens = RefreshTokenRepository(db)
        self.user_service = UserService(db)
        self.team_service = team_service or TeamService(db)

    async def sign_up(self, first_name: str, last_name: str, email: str, password: str) -> dict:
        user = await self.user_service.create_user(first_name, last_name, email, password)
        team = await self.team_service.auto_generate_team(user.id)
        session = await self.create_session(user)
        logger.info(f"Cadastro concluído: user={user.id} team={team.id}")
        return {"user": user, "session": session, "team": team}

    async def sign_in(self, email: str, password: str) -> dict:
        user = await self.users.get_by_email(email)
        if not user:
            raise InvalidEmail()
        if not verify_password(password, user.password_hash):
            logger.warning(f"Senha incorreta para user={user.id}")
            raise InvalidCredentials()

        session = await self.create_session(user)
        team = await self.team_service.get_team_for_user(user.id)
        return {"user": user, "session": session, "team": team}

    async def update_session(self, refresh_token: str) -> dict:
        """Troca um refresh token válido por uma nova sessão (o antigo é invalidado)"""
        token = await self.refresh_tokens.get_by_token(refresh_token)
        if not token or not token.is_valid:
            raise InvalidRefreshToken()

        user = await self.users.get_by_id(token.user_id)
        if not user:
            raise InvalidRefreshToken()

        token.invalidate()
        await self.refresh_tokens.save(token)
        return await self.create_session(user)

    async def create_session(self, user: User) -> dict:
        principal = Principal(
            id=user.id,
            role=user.role,
            name={"first": user.first_name, "last": user.last_name},
        )
        refresh_token = await self.refresh_tokens.create({
            "user_id": user.id,
            "token": create_refresh_token_value(),
            "valid_till": utcnow() + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        })
        return {
            "access_token": create_access_token(principal),
            "refresh_token": refresh_token.token,
        }
