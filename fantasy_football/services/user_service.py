"""Service de User (Async)"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_football.core.exceptions import EmailAlreadyRegistered, InvalidId
from fantasy_football.core.security import ROLE_USER, hash_password
from fantasy_football.models.user import User
from fantasy_football.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Service async para cadastro e manutenção de usuários"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = UserRepository(db)

    async def create_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: str = ROLE_USER,
    ) -> User:
        """Cria usuário com email único (case-insensitive) e senha em hash"""
        email = email.lower()
        if await self.repository.email_exists(email):
            raise EmailAlreadyRegistered()

        try:
            user = await self.repository.create({
                "first_name": first_name,
                "last_name": last_name,
                "email": email,
                "role": role,
                "password_hash": hash_password(password),
            })
        except IntegrityError:
            # Cadastro concorrente com o mesmo email
            logger.warning(f"Email já cadastrado (constraint): {email}")
            raise EmailAlreadyRegistered()
        logger.info(f"Usuário criado: {user.id} ({role})")
        return user

    async def get_user(self, user_id: str) -> User:
        user = await self.repository.get_by_id(user_id)
        if not user:
            raise InvalidId("Usuário não encontrado")
        return user

    async def list_users(
        self, skip: int = 0, limit: int = 10, user_id: Optional[str] = None
    ) -> tuple[List[User], int]:
        """Lista apenas usuários comuns"""
        return await self.repository.get_all(skip=skip, limit=limit, user_id=user_id, role=ROLE_USER)

    async def update_user(self, user_id: str, patch: dict) -> User:
        user = await self.get_user(user_id)
        changes = {
            key: value for key, value in patch.items()
            if key in ("first_name", "last_name") and value is not None
        }
        user = await self.repository.update(user, changes)
        logger.info(f"Usuário atualizado: {user.id} campos={sorted(changes)}")
        return user

    async def delete_user(self, user_id: str) -> None:
        user = await self.get_user(user_id)
        await self.repository.delete(user)
        logger.info(f"Usuário removido (soft delete): {user_id}")
