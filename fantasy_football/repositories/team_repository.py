"""Repository de Team (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
from typing import List, Optional, Sequence
from fantasy_football.models.team import Team, TeamPlayer


class TeamRepository:
    """Repository async para operações de banco com Team"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _active(self):
        return select(Team).filter(Team.deleted_at.is_(None))

    def _holding(self, player_ids: Sequence[str]):
        """Subquery: times que contêm algum dos jogadores"""
        return select(TeamPlayer.team_id).filter(TeamPlayer.player_id.in_(set(player_ids)))

    async def get_by_id(self, team_id: str, populate: bool = False) -> Optional[Team]:
        """Obtém time ativo por ID; ``populate`` carrega os jogadores do roster"""
        query = self._active().filter(Team.id == team_id)
        if populate:
            query = query.options(
                selectinload(Team.roster).selectinload(TeamPlayer.player)
            ).execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def find_holding_players(
        self, player_ids: Sequence[str], excluding_team_id: Optional[str] = None
    ) -> List[Team]:
        """Times ativos que contêm algum dos jogadores"""
        if not player_ids:
            return []
        query = self._active().filter(Team.id.in_(self._holding(player_ids)))
        if excluding_team_id:
            query = query.filter(Team.id != excluding_team_id)
        result = await self.db.execute(query.order_by(Team.created_at, Team.id))
        return list(result.scalars().all())

    async def find_current_team(self, player_id: str) -> Optional[Team]:
        """Time ativo que contém o jogador (no máximo um pelo invariante)"""
        teams = await self.find_holding_players([player_id])
        return teams[0] if teams else None

    async def find_one(
        self,
        team_id: Optional[str] = None,
        user_id: Optional[str] = None,
        not_holding_player_id: Optional[str] = None,
    ) -> Optional[Team]:
        """Busca um time ativo por critérios combinados (AND)"""
        query = self._active()
        if team_id:
            query = query.filter(Team.id == team_id)
        if user_id:
            query = query.filter(Team.user_id == user_id)
        if not_holding_player_id:
            query = query.filter(Team.id.not_in(self._holding([not_holding_player_id])))
        result = await self.db.execute(query.order_by(Team.created_at, Team.id).limit(1))
        return result.scalar_one_or_none()

    async def find_ids_by_name(self, name: str) -> List[str]:
        result = await self.db.execute(
            select(Team.id).filter(Team.deleted_at.is_(None), Team.name == name)
        )
        return list(result.scalars().all())

    async def get_all(
        self,
        skip: int = 0,
        limit: int = 10,
        team_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> tuple[List[Team], int]:
        """Lista paginada com roster populado e contagem total"""
        filters = [Team.deleted_at.is_(None)]
        if team_id:
            filters.append(Team.id == team_id)
        if user_id:
            filters.append(Team.user_id == user_id)

        result = await self.db.execute(
            select(Team)
            .filter(*filters)
            .options(selectinload(Team.roster).selectinload(TeamPlayer.player))
            .execution_options(populate_existing=True)
            .order_by(Team.created_at.desc(), Team.id.desc())
            .offset(skip)
            .limit(limit)
        )
        total = (await self.db.execute(select(func.count(Team.id)).filter(*filters))).scalar() or 0
        return list(result.scalars().all()), total

    async def add(self, team: Team) -> Team:
        """Persiste novo time"""
        self.db.add(team)
        await self.db.flush()
        return team

    async def save(self, team: Team) -> Team:
        await self.db.flush()
        return team

    async def delete(self, team: Team) -> bool:
        """Soft delete do time"""
        team.soft_delete()
        await self.db.flush()
        return True
