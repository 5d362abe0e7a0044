"""Service de Player (Async) - registro de jogadores"""
import logging
import random
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from fantasy_football.core.config import settings
from fantasy_football.core.exceptions import InvalidId, Unauthorized, ValidationError
from fantasy_football.core.security import ROLE_ADMIN
from fantasy_football.models.player import Player, PLAYER_ROLES
from fantasy_football.repositories.player_repository import PlayerRepository

logger = logging.getLogger(__name__)

FIRST_NAMES = (
    "James", "Lucas", "Mateo", "Noah", "Liam", "Gabriel", "Rafael", "Diego",
    "Marco", "Luca", "Thiago", "Hugo", "Leon", "Arjun", "Rohan", "Pedro",
    "Joao", "Kevin", "Oliver", "Adrian", "Samuel", "Bruno", "Felix", "Ivan",
)
LAST_NAMES = (
    "Silva", "Santos", "Smith", "Garcia", "Muller", "Rossi", "Martin", "Costa",
    "Fernandes", "Lopez", "Schmidt", "Bernard", "Sharma", "Patel", "Jones",
    "Moreau", "Ricci", "Alves", "Romero", "Weber", "Dubois", "Kumar", "Taylor",
)

# Campos que só administradores podem alterar
ADMIN_ONLY_FIELDS = ("role", "age", "market_value")


class PlayerService:
    """Service async para operações com jogadores"""

    def __init__(self, db: AsyncSession, rng: Optional[random.Random] = None):
        self.db = db
        self.repository = PlayerRepository(db)
        self.rng = rng or random.Random()

    async def create_player(self, data: dict) -> Player:
        """Cria jogador a partir de dados já validados pelo schema"""
        self._check_ranges(data)
        player = await self.repository.create({
            "first_name": data["first_name"],
            "last_name": data["last_name"],
            "role": data["role"],
            "age": data["age"],
            "market_value": data["market_value"],
            "country": data["country"].lower(),
        })
        logger.info(f"Jogador criado: {player.id} ({player.role})")
        return player

    async def generate_random_player(self, role: str) -> Player:
        """Gera jogador aleatório com valor de mercado base (usado na geração de times)"""
        if role not in PLAYER_ROLES:
            raise ValidationError(f"`{role}` não é um papel válido")

        return await self.repository.create({
            "first_name": self.rng.choice(FIRST_NAMES),
            "last_name": self.rng.choice(LAST_NAMES),
            "country": self.rng.choice(settings.DEFAULT_COUNTRIES),
            "role": role,
            "age": self.rng.randint(settings.PLAYER_MIN_AGE, settings.PLAYER_MAX_AGE),
            "market_value": settings.PLAYER_BASE_MARKET_VALUE,
        })

    async def get_player(self, player_id: str) -> Player:
        player = await self.repository.get_by_id(player_id)
        if not player:
            raise InvalidId("Jogador não encontrado")
        return player

    async def update_player(self, player_id: str, patch: dict, requester_role: str) -> Player:
        """Atualização parcial; papel, idade e valor de mercado só por ADMIN.

        A decisão de autorização vem do chamador via ``requester_role``.
        """
        player = await self.get_player(player_id)

        patch = {key: value for key, value in patch.items() if value is not None}
        restricted = [field for field in ADMIN_ONLY_FIELDS if field in patch]
        if restricted and requester_role != ROLE_ADMIN:
            raise Unauthorized(f"Somente administradores podem alterar: {', '.join(restricted)}")

        self._check_ranges(patch)
        if "country" in patch:
            patch["country"] = patch["country"].lower()

        player = await self.repository.update(player, patch)
        logger.info(f"Jogador atualizado: {player.id} campos={sorted(patch)}")
        return player

    async def delete_player(self, player_id: str) -> None:
        """Soft delete; o time que o contém tem o custo total recalculado"""
        from fantasy_football.services.team_service import TeamService

        player = await self.get_player(player_id)
        await self.repository.delete(player)

        team_service = TeamService(self.db, player_service=self)
        for team in await team_service.repository.find_holding_players([player_id]):
            await team_service.save_team(team, roster_changed=True)
            logger.info(f"Custo total do time {team.id} recalculado: {team.total_cost}")
        logger.info(f"Jogador removido (soft delete): {player_id}")

    async def list_players(
        self, skip: int = 0, limit: int = 10, player_id: Optional[str] = None
    ) -> tuple[List[Player], int]:
        return await self.repository.get_all(skip=skip, limit=limit, player_id=player_id)

    @staticmethod
    def _check_ranges(data: dict):
        """Revalida faixas de domínio (o schema já valida na borda HTTP)"""
        role = data.get("role")
        if role is not None and role not in PLAYER_ROLES:
            raise ValidationError(f"`{role}` não é um papel válido")

        age = data.get("age")
        if age is not None and not settings.PLAYER_MIN_AGE <= age <= settings.PLAYER_MAX_AGE:
            raise ValidationError(
                f"Idade deve estar entre {settings.PLAYER_MIN_AGE} e {settings.PLAYER_MAX_AGE}"
            )

        market_value = data.get("market_value")
        if market_value is not None and market_value < settings.PLAYER_MIN_MARKET_VALUE:
            raise ValidationError(
                f"Valor de mercado mínimo é {settings.PLAYER_MIN_MARKET_VALUE}"
            )
