"""Service de Team (Async) - gerenciador de rosters

Regras centrais:
- um jogador pertence a no máximo um time ativo;
- ``total_cost`` é sempre recalculado a partir dos valores de mercado
  atuais quando o roster muda (``save_team``), nunca atribuído direto;
- ``balance_amount`` só muda por transferência ou atualização explícita.
"""
import logging
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_football.core.config import settings
from fantasy_football.core.exceptions import (
    InvalidId,
    InvalidPlayerId,
    InvalidUserId,
    PlayerAlreadyRostered,
    ValidationError,
)
from fantasy_football.models.player import Player
from fantasy_football.models.team import Team
from fantasy_football.repositories.player_repository import PlayerRepository
from fantasy_football.repositories.team_repository import TeamRepository
from fantasy_football.repositories.user_repository import UserRepository
from fantasy_football.services.player_service import PlayerService, FIRST_NAMES

logger = logging.getLogger(__name__)


class TeamService:
    """Service async para operações com times e rosters"""

    def __init__(self, db: AsyncSession, player_service: Optional[PlayerService] = None):
        self.db = db
        self.repository = TeamRepository(db)
        self.players = PlayerRepository(db)
        self.users = UserRepository(db)
        self.player_service = player_service or PlayerService(db)

    async def save_team(self, team: Team, roster_changed: bool, is_new: bool = False) -> Team:
        """Único caminho de persistência de um time.

        Com roster alterado, relê os jogadores e recalcula ``total_cost``.
        """
        if roster_changed:
            team.total_cost = await self.players.sum_market_value(team.player_ids)
        if is_new:
            return await self.repository.add(team)
        return await self.repository.save(team)

    async def get_team(self, team_id: str, populate: bool = False) -> Team:
        team = await self.repository.get_by_id(team_id, populate=populate)
        if not team:
            raise InvalidId("Time não encontrado")
        return team

    async def get_team_for_user(self, user_id: str) -> Optional[Team]:
        """Time do usuário com roster populado (None se não tiver)"""
        team = await self.repository.find_one(user_id=user_id)
        if not team:
            return None
        return await self.repository.get_by_id(team.id, populate=True)

    async def list_teams(
        self,
        skip: int = 0,
        limit: int = 10,
        team_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> tuple[List[Team], int]:
        return await self.repository.get_all(skip=skip, limit=limit, team_id=team_id, user_id=user_id)

    async def create_team(
        self,
        user_id: str,
        player_ids: Sequence[str],
        name: str,
        country: str,
        balance_amount: int,
        transfer: bool = False,
    ) -> Team:
        """Cria time com roster informado.

        Sem ``transfer``, jogadores que já estão em outro time geram
        PlayerAlreadyRostered; com ``transfer`` eles são desligados antes.
        """
        if not await self.users.get_by_id(user_id):
            raise InvalidUserId()

        player_ids = list(player_ids)
        await self._prepare_roster(player_ids, transfer=transfer)

        team = Team(
            name=name,
            country=country.lower(),
            user_id=user_id,
            balance_amount=balance_amount,
            total_cost=0,
        )
        team.set_players(player_ids)
        await self.save_team(team, roster_changed=True, is_new=True)
        logger.info(f"Time criado: {team.id} ({len(player_ids)} jogadores, user={user_id})")
        return await self.get_team(team.id, populate=True)

    async def auto_generate_team(self, user_id: str) -> Team:
        """Gera time completo para um novo usuário conforme TEAM_COMBINATION"""
        player_ids: List[str] = []
        for combination in settings.TEAM_COMBINATION:
            for _ in range(combination["count"]):
                player = await self.player_service.generate_random_player(combination["role"])
                player_ids.append(player.id)

        rng = self.player_service.rng
        team = Team(
            name=rng.choice(FIRST_NAMES),
            country=rng.choice(settings.DEFAULT_COUNTRIES),
            user_id=user_id,
            total_cost=settings.TEAM_PLACEHOLDER_TOTAL_COST,
            balance_amount=settings.TEAM_STARTING_BALANCE,
        )
        team.set_players(player_ids)
        await self.save_team(team, roster_changed=True, is_new=True)
        logger.info(f"Time gerado automaticamente: {team.id} para user={user_id}")
        return await self.get_team(team.id, populate=True)

    async def update_team(self, team_id: str, patch: dict, transfer: bool = False) -> Team:
        """Atualização parcial; ``players`` substitui o roster inteiro"""
        team = await self.get_team(team_id)

        user_id = patch.get("user")
        if user_id:
            if not await self.users.get_by_id(user_id):
                raise InvalidUserId()
            team.user_id = user_id

        if patch.get("name"):
            team.name = patch["name"]
        if patch.get("country"):
            team.country = patch["country"].lower()
        if patch.get("balance_amount") is not None:
            team.balance_amount = patch["balance_amount"]

        roster_changed = False
        player_ids = patch.get("players")
        if player_ids is not None:
            player_ids = list(player_ids)
            await self._prepare_roster(player_ids, transfer=transfer, excluding_team_id=team.id)
            team.set_players(player_ids)
            roster_changed = True

        await self.save_team(team, roster_changed=roster_changed)
        logger.info(f"Time atualizado: {team.id} roster_changed={roster_changed}")
        return await self.get_team(team.id, populate=True)

    async def delete_team(self, team_id: str) -> None:
        team = await self.get_team(team_id)
        await self.repository.delete(team)
        logger.info(f"Time removido (soft delete): {team_id}")

    async def detach_players(
        self, player_ids: Sequence[str], excluding_team_id: Optional[str] = None
    ) -> List[Team]:
        """Desliga jogadores dos times atuais creditando o valor de mercado.

        Cada time afetado é salvo uma única vez, com crédito igual à soma
        dos valores de mercado dos jogadores que saíram.
        """
        teams = await self.repository.find_holding_players(player_ids, excluding_team_id)
        if not teams:
            return []

        players_by_id = {player.id: player for player in await self.players.get_many(list(player_ids))}
        for team in teams:
            removed = team.remove_players(player_ids)
            credit = sum(players_by_id[player_id].market_value for player_id in removed if player_id in players_by_id)
            team.balance_amount += credit
            await self.save_team(team, roster_changed=True)
            logger.info(
                f"Jogadores {removed} desligados do time {team.id}, crédito de {credit}"
            )
        return teams

    async def _prepare_roster(
        self,
        player_ids: List[str],
        transfer: bool,
        excluding_team_id: Optional[str] = None,
    ) -> List[Player]:
        """Valida ids do roster e resolve conflitos com outros times"""
        if len(set(player_ids)) != len(player_ids):
            raise ValidationError("Lista de jogadores contém ids repetidos")

        players = await self.players.get_many(player_ids)
        if len(players) != len(player_ids):
            raise InvalidPlayerId()

        holding = await self.repository.find_holding_players(player_ids, excluding_team_id)
        if holding and not transfer:
            raise PlayerAlreadyRostered()
        if holding:
            await self.detach_players(player_ids, excluding_team_id=excluding_team_id)
        return players
