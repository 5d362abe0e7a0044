"""Service do mercado de transferências (Async)"""
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_football.core.exceptions import (
    InvalidId,
    InvalidPlayerId,
    PlayerAlreadyListed,
    Unauthorized,
)
from fantasy_football.core.security import Principal
from fantasy_football.models.transferable_player import TransferablePlayer
from fantasy_football.repositories.player_repository import PlayerRepository
from fantasy_football.repositories.team_repository import TeamRepository
from fantasy_football.repositories.transferable_player_repository import TransferablePlayerRepository
from fantasy_football.schemas.market import ListingSearch

logger = logging.getLogger(__name__)


class MarketService:
    """Service async para anúncios e busca no mercado"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = TransferablePlayerRepository(db)
        self.players = PlayerRepository(db)
        self.teams = TeamRepository(db)

    async def list_player(self, player_id: str, asking_price: int, principal: Principal) -> TransferablePlayer:
        """Coloca um jogador no mercado.

        Usuário comum só anuncia jogadores do próprio time; jogador sem time
        pode ser anunciado por qualquer papel.
        """
        player = await self.players.get_by_id(player_id)
        if not player:
            raise InvalidPlayerId()

        if await self.repository.get_active_for_player(player_id):
            raise PlayerAlreadyListed()

        team = await self.teams.find_current_team(player_id)
        if not principal.is_admin and team is not None and team.user_id != principal.id:
            raise Unauthorized("Jogador pertence ao time de outro usuário")

        listing = await self.repository.create({
            "player_id": player.id,
            "team_id": team.id if team else None,
            "asking_price": asking_price,
        })
        logger.info(
            f"Jogador {player.id} anunciado por {asking_price} "
            f"(time={listing.team_id}, por={principal.id})"
        )
        return await self.repository.get_by_id(listing.id, populate=True)

    async def search(self, filters: ListingSearch) -> tuple[List[TransferablePlayer], int]:
        """Busca anúncios ativos combinando filtros com AND"""
        criteria = []
        if filters.id:
            criteria.append(TransferablePlayer.id == filters.id)
        if filters.min_asking_price is not None:
            criteria.append(TransferablePlayer.asking_price >= filters.min_asking_price)
        if filters.max_asking_price is not None:
            criteria.append(TransferablePlayer.asking_price <= filters.max_asking_price)

        if filters.player_name or filters.country:
            player_ids = await self.players.find_ids(
                name=filters.player_name or None,
                country=filters.country.lower() if filters.country else None,
            )
            criteria.append(TransferablePlayer.player_id.in_(player_ids))

        if filters.team_name:
            team_ids = await self.teams.find_ids_by_name(filters.team_name)
            criteria.append(TransferablePlayer.team_id.in_(team_ids))

        return await self.repository.search(criteria, skip=filters.skip, limit=filters.limit)

    async def delete_listing(self, listing_id: str) -> None:
        listing = await self.repository.get_by_id(listing_id)
        if not listing:
            raise InvalidId("Anúncio não encontrado")
        await self.repository.delete(listing)
        logger.info(f"Anúncio removido (soft delete): {listing_id}")
