"""Repository de RefreshToken (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional
from fantasy_football.models.refresh_token import RefreshToken


class RefreshTokenRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        result = await self.db.execute(
            select(RefreshToken).filter(
                RefreshToken.token == token,
                RefreshToken.deleted_at.is_(None),
            )
        )
        return result.scalar_one_or_none()

    async def create(self, token_data: dict) -> RefreshToken:
        refresh_token = RefreshToken(**token_data)
        self.db.add(refresh_token)
        await self.db.flush()
        return refresh_token

    async def save(self, refresh_token: RefreshToken) -> RefreshToken:
        await self.db.flush()
        return refresh_token
