"""Sistema de validação e integridade de dados"""
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from fantasy_football.models.team import Team, TeamPlayer
from fantasy_football.models.transferable_player import TransferablePlayer

logger = logging.getLogger(__name__)


class DataIntegrityChecker:
    """Classe para verificar os invariantes de times e do mercado"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def validate_team(self, team: Team) -> tuple[bool, Optional[str]]:
        """Valida custo total e saldo de um time (roster com jogadores carregados)"""
        if team.balance_amount < 0:
            return False, f"Saldo negativo ({team.balance_amount})"

        live_total = sum(
            entry.player.market_value
            for entry in team.roster
            if entry.player is not None and not entry.player.is_deleted
        )
        if team.total_cost != live_total:
            return False, f"Custo total {team.total_cost} difere da soma dos jogadores ({live_total})"

        return True, None

    async def check_data_consistency(self) -> Dict[str, Any]:
        """Verifica consistência geral dos dados no banco"""
        issues = []

        result = await self.db.execute(
            select(Team)
            .filter(Team.deleted_at.is_(None))
            .options(selectinload(Team.roster).selectinload(TeamPlayer.player))
            .execution_options(populate_existing=True)
        )
        teams = list(result.scalars().all())

        owners: Counter = Counter()
        for team in teams:
            valid, error = self.validate_team(team)
            if not valid:
                issues.append(f"Time {team.id}: {error}")
            owners.update(set(team.player_ids))

        for player_id, count in owners.items():
            if count > 1:
                issues.append(f"Jogador {player_id}: presente em {count} times")

        result = await self.db.execute(
            select(TransferablePlayer.player_id).filter(TransferablePlayer.deleted_at.is_(None))
        )
        listings = Counter(result.scalars().all())
        for player_id, count in listings.items():
            if count > 1:
                issues.append(f"Jogador {player_id}: {count} anúncios ativos")

        if issues:
            logger.warning(f"Integridade: {len(issues)} problemas encontrados")

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "teams_checked": len(teams),
            "issues_found": len(issues),
            "issues": issues,
            "status": "ok" if len(issues) == 0 else "issues_found",
        }
