"""Repository de User (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List, Optional
from fantasy_football.models.user import User


class UserRepository:
    """Repository async para operações de banco com User"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _active(self):
        return select(User).filter(User.deleted_at.is_(None))

    async def get_by_id(self, user_id: str) -> Optional[User]:
        result = await self.db.execute(self._active().filter(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Busca por email (armazenado em minúsculas)"""
        result = await self.db.execute(self._active().filter(User.email == email.lower()))
        return result.scalars().first()

    async def email_exists(self, email: str) -> bool:
        result = await self.db.execute(
            select(func.count(User.id)).filter(User.email == email.lower())
        )
        return (result.scalar() or 0) > 0

    async def get_all(
        self, skip: int = 0, limit: int = 10, user_id: Optional[str] = None, role: Optional[str] = None
    ) -> tuple[List[User], int]:
        filters = [User.deleted_at.is_(None)]
        if user_id:
            filters.append(User.id == user_id)
        if role:
            filters.append(User.role == role)

        result = await self.db.execute(
            select(User)
            .filter(*filters)
            .order_by(User.created_at.desc(), User.id.desc())
            .offset(skip)
            .limit(limit)
        )
        total = (await self.db.execute(select(func.count(User.id)).filter(*filters))).scalar() or 0
        return list(result.scalars().all()), total

    async def create(self, user_data: dict) -> User:
        user = User(**user_data)
        self.db.add(user)
        await self.db.flush()
        return user

    async def update(self, user: User, user_data: dict) -> User:
        for key, value in user_data.items():
            setattr(user, key, value)
        await self.db.flush()
        return user

    async def delete(self, user: User) -> bool:
        user.soft_delete()
        await self.db.flush()
        return True
