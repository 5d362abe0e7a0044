"""Service de transferências (Async) - motor de execução

Fluxo de uma transferência::

    REQUESTED -> VALIDATED -> MARKET_VALUE_UPDATED -> ROSTER_UPDATED
              -> LISTING_CLOSED -> COMPLETE

Qualquer falha de validação leva a REJECTED antes de qualquer escrita.
A ordem dos passos afeta o resultado financeiro: o valor de mercado é
valorizado antes da movimentação de rosters, então o time de destino
soma o valor novo ao custo total e o de origem desconta o valor antigo.
"""
import logging
import random
from enum import Enum
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_football.core.config import settings
from fantasy_football.core.exceptions import (
    AppError,
    InsufficientFunds,
    InvalidTeamId,
    PlayerNotTransferable,
    TeamIdRequired,
)
from fantasy_football.core.security import Principal
from fantasy_football.models.team import Team
from fantasy_football.repositories.player_repository import PlayerRepository
from fantasy_football.repositories.team_repository import TeamRepository
from fantasy_football.repositories.transferable_player_repository import TransferablePlayerRepository
from fantasy_football.services.team_service import TeamService

logger = logging.getLogger(__name__)


class TransferState(str, Enum):
    REQUESTED = "REQUESTED"
    VALIDATED = "VALIDATED"
    MARKET_VALUE_UPDATED = "MARKET_VALUE_UPDATED"
    ROSTER_UPDATED = "ROSTER_UPDATED"
    LISTING_CLOSED = "LISTING_CLOSED"
    COMPLETE = "COMPLETE"
    REJECTED = "REJECTED"


def appreciate(market_value: int, percentage: int) -> int:
    """Aplica valorização percentual arredondando para o inteiro mais próximo (meio para cima)"""
    return (market_value * (100 + percentage) * 2 + 100) // 200


class TransferService:
    """Executa a compra de um jogador anunciado no mercado"""

    def __init__(
        self,
        db: AsyncSession,
        rng: Optional[random.Random] = None,
        team_service: Optional[TeamService] = None,
    ):
        self.db = db
        self.rng = rng or random.Random()
        self.listings = TransferablePlayerRepository(db)
        self.players = PlayerRepository(db)
        self.teams = TeamRepository(db)
        self.team_service = team_service or TeamService(db)

    async def execute_transfer(
        self,
        player_id: str,
        principal: Principal,
        destination_team_id: Optional[str] = None,
    ) -> dict:
        state = TransferState.REQUESTED
        logger.info(f"Transferência {state.value}: jogador={player_id} por={principal.id}")

        try:
            listing = await self.listings.get_active_for_player(player_id)
            if not listing:
                raise PlayerNotTransferable()
            player = await self.players.get_by_id(player_id)
            if not player:
                raise PlayerNotTransferable()

            destination = await self._resolve_destination(player_id, principal, destination_team_id)

            if destination.balance_amount < listing.asking_price:
                raise InsufficientFunds()
        except AppError as error:
            logger.info(
                f"Transferência {TransferState.REJECTED.value}: jogador={player_id} motivo={error.code}"
            )
            raise
        state = TransferState.VALIDATED

        # Valorização do jogador
        previous_market_value = player.market_value
        percentage = self.rng.randint(
            settings.PLAYER_INCREMENT_PERCENTAGE_MIN,
            settings.PLAYER_INCREMENT_PERCENTAGE_MAX,
        )
        new_market_value = appreciate(previous_market_value, percentage)
        await self.players.update(player, {"market_value": new_market_value})
        state = TransferState.MARKET_VALUE_UPDATED

        # Saída do time atual (jogador sem time não gera crédito)
        origin = await self.teams.find_current_team(player_id)
        if origin is not None:
            origin.remove_players([player_id])
            origin.balance_amount += listing.asking_price
            await self.team_service.save_team(origin, roster_changed=True)

        # Entrada no time de destino
        destination.add_player(player_id)
        destination.balance_amount -= listing.asking_price
        await self.team_service.save_team(destination, roster_changed=True)
        state = TransferState.ROSTER_UPDATED

        await self.listings.delete(listing)
        state = TransferState.LISTING_CLOSED

        state = TransferState.COMPLETE
        logger.info(
            f"Transferência {state.value}: jogador={player_id} "
            f"{origin.id if origin else '-'} -> {destination.id} "
            f"preço={listing.asking_price} valor={previous_market_value}->{new_market_value} (+{percentage}%)"
        )
        return {
            "player_id": player_id,
            "from_team_id": origin.id if origin else None,
            "to_team_id": destination.id,
            "asking_price": listing.asking_price,
            "previous_market_value": previous_market_value,
            "new_market_value": new_market_value,
        }

    async def _resolve_destination(
        self,
        player_id: str,
        principal: Principal,
        destination_team_id: Optional[str],
    ) -> Team:
        """ADMIN escolhe o time; USER sempre compra para o próprio time"""
        if principal.is_admin:
            if not destination_team_id:
                raise TeamIdRequired()
            team = await self.teams.find_one(team_id=destination_team_id, not_holding_player_id=player_id)
        else:
            team = await self.teams.find_one(user_id=principal.id, not_holding_player_id=player_id)

        if not team:
            raise InvalidTeamId()
        return team
