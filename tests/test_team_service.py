"""Testes do gerenciador de rosters"""
from collections import Counter

import pytest

from fantasy_football.core.config import settings
from fantasy_football.core.exceptions import (
    InvalidPlayerId,
    InvalidUserId,
    PlayerAlreadyRostered,
    ValidationError,
)
from fantasy_football.services.player_service import PlayerService
from fantasy_football.services.team_service import TeamService


class TestCreateTeam:

    @pytest.mark.asyncio
    async def test_total_cost_is_sum_of_market_values(self, db, user_factory, player_factory):
        user = await user_factory()
        players = [
            await player_factory(market_value=1_000_000),
            await player_factory(market_value=2_500_000),
        ]
        service = TeamService(db)

        team = await service.create_team(
            user_id=user.id,
            player_ids=[p.id for p in players],
            name="Rovers",
            country="England",
            balance_amount=5_000_000,
        )

        assert team.total_cost == 3_500_000
        assert team.country == "england"
        assert team.player_ids == [p.id for p in players]

    @pytest.mark.asyncio
    async def test_unknown_user(self, db, player_factory):
        player = await player_factory()
        service = TeamService(db)

        with pytest.raises(InvalidUserId):
            await service.create_team("f" * 24, [player.id], "Rovers", "England", 5_000_000)

    @pytest.mark.asyncio
    async def test_unknown_player(self, db, user_factory, player_factory):
        user = await user_factory()
        player = await player_factory()
        service = TeamService(db)

        with pytest.raises(InvalidPlayerId):
            await service.create_team(user.id, [player.id, "f" * 24], "Rovers", "England", 5_000_000)

    @pytest.mark.asyncio
    async def test_repeated_player_ids(self, db, user_factory, player_factory):
        user = await user_factory()
        player = await player_factory()
        service = TeamService(db)

        with pytest.raises(ValidationError):
            await service.create_team(user.id, [player.id, player.id], "Rovers", "England", 5_000_000)

    @pytest.mark.asyncio
    async def test_player_rostered_elsewhere_without_transfer(self, db, user_factory, player_factory, team_factory):
        contested = await player_factory()
        await team_factory(players=[contested])
        user = await user_factory()
        service = TeamService(db)

        with pytest.raises(PlayerAlreadyRostered):
            await service.create_team(user.id, [contested.id], "Rovers", "England", 5_000_000)

    @pytest.mark.asyncio
    async def test_player_rostered_elsewhere_with_transfer(self, db, user_factory, player_factory, team_factory):
        contested = await player_factory(market_value=1_500_000)
        kept = await player_factory(market_value=1_000_000)
        donor = await team_factory(players=[contested, kept], balance_amount=5_000_000)
        user = await user_factory()
        service = TeamService(db)

        team = await service.create_team(
            user.id, [contested.id], "Rovers", "England", 5_000_000, transfer=True
        )

        donor = await service.get_team(donor.id)
        assert team.player_ids == [contested.id]
        assert donor.player_ids == [kept.id]
        assert donor.balance_amount == 6_500_000
        assert donor.total_cost == 1_000_000


class TestAutoGenerateTeam:

    @pytest.mark.asyncio
    async def test_generates_configured_combination(self, db, user_factory):
        user = await user_factory()
        service = TeamService(db)

        team = await service.auto_generate_team(user.id)

        expected = {combination["role"]: combination["count"] for combination in settings.TEAM_COMBINATION}
        roles = Counter(entry.player.role for entry in team.roster)
        assert dict(roles) == expected
        assert len(team.player_ids) == 20
        assert team.user_id == user.id
        assert team.balance_amount == settings.TEAM_STARTING_BALANCE
        assert team.total_cost == 20 * settings.PLAYER_BASE_MARKET_VALUE


class TestUpdateTeam:

    @pytest.mark.asyncio
    async def test_roster_replacement_is_wholesale(self, db, player_factory, team_factory):
        first = await player_factory(market_value=1_000_000)
        second = await player_factory(market_value=2_000_000)
        third = await player_factory(market_value=3_000_000)
        team = await team_factory(players=[first, second])
        service = TeamService(db)

        team = await service.update_team(team.id, {"players": [third.id, first.id]})

        assert team.player_ids == [third.id, first.id]
        assert team.total_cost == 4_000_000

    @pytest.mark.asyncio
    async def test_patch_without_players_keeps_roster(self, db, player_factory, team_factory):
        player = await player_factory()
        team = await team_factory(players=[player], balance_amount=5_000_000)
        service = TeamService(db)

        team = await service.update_team(team.id, {"name": "Renamed", "balance_amount": 700_000})

        assert team.name == "Renamed"
        assert team.balance_amount == 700_000
        assert team.player_ids == [player.id]

    @pytest.mark.asyncio
    async def test_own_players_do_not_conflict(self, db, player_factory, team_factory):
        own = await player_factory()
        new = await player_factory()
        team = await team_factory(players=[own])
        service = TeamService(db)

        team = await service.update_team(team.id, {"players": [own.id, new.id]})

        assert team.player_ids == [own.id, new.id]

    @pytest.mark.asyncio
    async def test_total_cost_follows_live_market_values(self, db, player_factory, team_factory):
        player = await player_factory(market_value=1_000_000)
        other = await player_factory(market_value=1_000_000)
        team = await team_factory(players=[player])
        await PlayerService(db).update_player(player.id, {"market_value": 4_000_000}, requester_role="ADMIN")
        service = TeamService(db)

        team = await service.update_team(team.id, {"players": [player.id, other.id]})

        assert team.total_cost == 5_000_000

    @pytest.mark.asyncio
    async def test_player_rostered_elsewhere_without_transfer(self, db, player_factory, team_factory):
        contested = await player_factory()
        await team_factory(players=[contested])
        team = await team_factory(players=[])
        service = TeamService(db)

        with pytest.raises(PlayerAlreadyRostered):
            await service.update_team(team.id, {"players": [contested.id]})

    @pytest.mark.asyncio
    async def test_player_rostered_elsewhere_with_transfer(self, db, player_factory, team_factory):
        contested = await player_factory(market_value=1_000_000)
        donor = await team_factory(players=[contested], balance_amount=1_500_000)
        team = await team_factory(players=[])
        service = TeamService(db)

        team = await service.update_team(team.id, {"players": [contested.id]}, transfer=True)

        assert team.player_ids == [contested.id]
        assert team.total_cost == 1_000_000
        donor = await service.get_team(donor.id)
        assert donor.player_ids == []
        assert donor.balance_amount == 2_500_000
        assert donor.total_cost == 0


class TestDetachPlayers:

    @pytest.mark.asyncio
    async def test_credits_each_team_once(self, db, player_factory, team_factory):
        a1 = await player_factory(market_value=1_000_000)
        a2 = await player_factory(market_value=2_000_000)
        b1 = await player_factory(market_value=3_000_000)
        team_a = await team_factory(players=[a1, a2], balance_amount=1_000_000)
        team_b = await team_factory(players=[b1], balance_amount=1_000_000)
        service = TeamService(db)

        affected = await service.detach_players([a1.id, a2.id, b1.id])

        assert {team.id for team in affected} == {team_a.id, team_b.id}
        assert team_a.balance_amount == 4_000_000
        assert team_b.balance_amount == 4_000_000
        assert team_a.player_ids == [] and team_a.total_cost == 0
        assert team_b.player_ids == [] and team_b.total_cost == 0
