"""Repository de TransferablePlayer (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
from typing import List, Optional
from fantasy_football.models.transferable_player import TransferablePlayer


class TransferablePlayerRepository:
    """Repository async para anúncios do mercado"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _active(self):
        return select(TransferablePlayer).filter(TransferablePlayer.deleted_at.is_(None))

    async def get_by_id(self, listing_id: str, populate: bool = False) -> Optional[TransferablePlayer]:
        query = self._active().filter(TransferablePlayer.id == listing_id)
        if populate:
            query = query.options(
                selectinload(TransferablePlayer.player),
                selectinload(TransferablePlayer.team),
            ).execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_active_for_player(self, player_id: str) -> Optional[TransferablePlayer]:
        """Anúncio ativo do jogador, se houver"""
        result = await self.db.execute(
            self._active()
            .filter(TransferablePlayer.player_id == player_id)
            .order_by(TransferablePlayer.created_at)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def search(self, filters: list, skip: int = 0, limit: int = 10) -> tuple[List[TransferablePlayer], int]:
        """Busca paginada (mais recentes primeiro) com player e team populados"""
        criteria = [TransferablePlayer.deleted_at.is_(None), *filters]
        result = await self.db.execute(
            select(TransferablePlayer)
            .filter(*criteria)
            .options(
                selectinload(TransferablePlayer.player),
                selectinload(TransferablePlayer.team),
            )
            .execution_options(populate_existing=True)
            .order_by(TransferablePlayer.created_at.desc(), TransferablePlayer.id.desc())
            .offset(skip)
            .limit(limit)
        )
        total = (
            await self.db.execute(select(func.count(TransferablePlayer.id)).filter(*criteria))
        ).scalar() or 0
        return list(result.scalars().all()), total

    async def create(self, listing_data: dict) -> TransferablePlayer:
        listing = TransferablePlayer(**listing_data)
        self.db.add(listing)
        await self.db.flush()
        return listing

    async def delete(self, listing: TransferablePlayer) -> bool:
        """Soft delete do anúncio"""
        listing.soft_delete()
        await self.db.flush()
        return True
