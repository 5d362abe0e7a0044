"""Repository de Player (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List, Optional, Sequence
from fantasy_football.models.player import Player


class PlayerRepository:
    """Repository async para operações de banco com Player"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _active(self):
        return select(Player).filter(Player.deleted_at.is_(None))

    async def get_by_id(self, player_id: str) -> Optional[Player]:
        """Obtém jogador ativo por ID"""
        result = await self.db.execute(
            self._active().filter(Player.id == player_id)
        )
        return result.scalar_one_or_none()

    async def get_many(self, player_ids: Sequence[str]) -> List[Player]:
        """Obtém jogadores ativos pelos IDs, na ordem recebida"""
        if not player_ids:
            return []
        result = await self.db.execute(
            self._active().filter(Player.id.in_(set(player_ids)))
        )
        by_id = {player.id: player for player in result.scalars().all()}
        return [by_id[player_id] for player_id in player_ids if player_id in by_id]

    async def sum_market_value(self, player_ids: Sequence[str]) -> int:
        """Soma dos valores de mercado atuais dos jogadores ativos"""
        if not player_ids:
            return 0
        result = await self.db.execute(
            select(func.coalesce(func.sum(Player.market_value), 0)).filter(
                Player.id.in_(set(player_ids)),
                Player.deleted_at.is_(None),
            )
        )
        return int(result.scalar() or 0)

    async def find_ids(
        self,
        name: Optional[str] = None,
        country: Optional[str] = None,
    ) -> List[str]:
        """IDs de jogadores por nome exato (primeiro ou último) e/ou país"""
        query = select(Player.id).filter(Player.deleted_at.is_(None))
        if name:
            query = query.filter((Player.first_name == name) | (Player.last_name == name))
        if country:
            query = query.filter(Player.country == country)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_all(
        self, skip: int = 0, limit: int = 10, player_id: Optional[str] = None
    ) -> tuple[List[Player], int]:
        """Lista paginada (mais recentes primeiro) e contagem total"""
        query = self._active()
        count_query = select(func.count(Player.id)).filter(Player.deleted_at.is_(None))
        if player_id:
            query = query.filter(Player.id == player_id)
            count_query = count_query.filter(Player.id == player_id)

        result = await self.db.execute(
            query.order_by(Player.created_at.desc(), Player.id.desc()).offset(skip).limit(limit)
        )
        total = (await self.db.execute(count_query)).scalar() or 0
        return list(result.scalars().all()), total

    async def create(self, player_data: dict) -> Player:
        """Cria novo jogador"""
        player = Player(**player_data)
        self.db.add(player)
        await self.db.flush()
        return player

    async def update(self, player: Player, player_data: dict) -> Player:
        """Atualiza jogador"""
        for key, value in player_data.items():
            setattr(player, key, value)
        await self.db.flush()
        return player

    async def delete(self, player: Player) -> bool:
        """Soft delete do jogador"""
        player.soft_delete()
        await self.db.flush()
        return True
