"""Testes da verificação de integridade"""
import pytest

from fantasy_football.core.data_integrity import DataIntegrityChecker
from fantasy_football.models.team import TeamPlayer
from fantasy_football.services.market_service import MarketService


class TestDataIntegrityChecker:

    @pytest.mark.asyncio
    async def test_consistent_data(self, db, player_factory, team_factory, admin):
        player = await player_factory()
        await team_factory(players=[player, await player_factory()])
        await MarketService(db).list_player(player.id, 1_000_000, admin)

        result = await DataIntegrityChecker(db).check_data_consistency()

        assert result["status"] == "ok"
        assert result["teams_checked"] == 1
        assert result["issues"] == []

    @pytest.mark.asyncio
    async def test_stale_total_cost_and_negative_balance(self, db, player_factory, team_factory):
        team = await team_factory(players=[await player_factory()])
        team.total_cost = 1
        team.balance_amount = -10
        await db.flush()

        result = await DataIntegrityChecker(db).check_data_consistency()

        assert result["status"] == "issues_found"
        assert result["issues_found"] == 1
        assert result["issues"][0].startswith(f"Time {team.id}")

    @pytest.mark.asyncio
    async def test_player_on_two_teams(self, db, player_factory, team_factory):
        player = await player_factory()
        await team_factory(players=[player])
        other = await team_factory(players=[])
        db.add(TeamPlayer(team_id=other.id, player_id=player.id, position=0))
        await db.flush()

        result = await DataIntegrityChecker(db).check_data_consistency()

        assert f"Jogador {player.id}: presente em 2 times" in result["issues"]
