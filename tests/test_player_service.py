"""Testes do registro de jogadores"""
import random

import pytest

from fantasy_football.core.config import settings
from fantasy_football.core.data_integrity import DataIntegrityChecker
from fantasy_football.core.exceptions import InvalidId, Unauthorized, ValidationError
from fantasy_football.core.security import ROLE_ADMIN, ROLE_USER
from fantasy_football.services.player_service import PlayerService


class TestCreatePlayer:

    @pytest.mark.asyncio
    async def test_create_player_normalizes_country(self, db):
        service = PlayerService(db)
        player = await service.create_player({
            "first_name": "Lionel",
            "last_name": "Messi",
            "role": "ATTACKER",
            "age": 36,
            "market_value": 2_000_000,
            "country": "Argentina",
        })

        assert len(player.id) == 24
        assert player.country == "argentina"
        assert player.market_value == 2_000_000

    @pytest.mark.asyncio
    async def test_create_player_rejects_out_of_range_age(self, db):
        service = PlayerService(db)
        with pytest.raises(ValidationError):
            await service.create_player({
                "first_name": "Too",
                "last_name": "Young",
                "role": "DEFENDER",
                "age": 16,
                "market_value": 1_000_000,
                "country": "Brazil",
            })

    @pytest.mark.asyncio
    async def test_generate_random_player_uses_base_market_value(self, db):
        service = PlayerService(db, rng=random.Random(3))
        player = await service.generate_random_player("GOALKEEPER")

        assert player.role == "GOALKEEPER"
        assert player.market_value == settings.PLAYER_BASE_MARKET_VALUE
        assert settings.PLAYER_MIN_AGE <= player.age <= settings.PLAYER_MAX_AGE
        assert player.country in settings.DEFAULT_COUNTRIES

    @pytest.mark.asyncio
    async def test_generate_random_player_rejects_unknown_role(self, db):
        service = PlayerService(db)
        with pytest.raises(ValidationError):
            await service.generate_random_player("COACH")


class TestUpdatePlayer:

    @pytest.mark.asyncio
    async def test_user_can_rename_player(self, db, player_factory):
        player = await player_factory()
        service = PlayerService(db)

        updated = await service.update_player(
            player.id, {"first_name": "Renamed", "country": "Germany"}, requester_role=ROLE_USER
        )

        assert updated.first_name == "Renamed"
        assert updated.country == "germany"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field, value", [
        ("market_value", 5_000_000),
        ("age", 30),
        ("role", "GOALKEEPER"),
    ])
    async def test_user_cannot_change_admin_only_fields(self, db, player_factory, field, value):
        player = await player_factory()
        service = PlayerService(db)

        with pytest.raises(Unauthorized):
            await service.update_player(player.id, {field: value}, requester_role=ROLE_USER)

    @pytest.mark.asyncio
    async def test_admin_can_change_market_value(self, db, player_factory):
        player = await player_factory()
        service = PlayerService(db)

        updated = await service.update_player(
            player.id, {"market_value": 3_000_000, "age": None}, requester_role=ROLE_ADMIN
        )

        assert updated.market_value == 3_000_000
        assert updated.age == 25

    @pytest.mark.asyncio
    async def test_update_unknown_player(self, db):
        service = PlayerService(db)
        with pytest.raises(InvalidId):
            await service.update_player("f" * 24, {"first_name": "Ghost"}, requester_role=ROLE_ADMIN)


class TestDeletePlayer:

    @pytest.mark.asyncio
    async def test_soft_deleted_player_is_hidden(self, db, player_factory):
        player = await player_factory()
        other = await player_factory()
        service = PlayerService(db)

        await service.delete_player(player.id)

        assert player.deleted_at is not None
        with pytest.raises(InvalidId):
            await service.get_player(player.id)

        players, total = await service.list_players()
        assert total == 1
        assert [p.id for p in players] == [other.id]

    @pytest.mark.asyncio
    async def test_holding_team_total_cost_is_recomputed(self, db, player_factory, team_factory):
        removed = await player_factory(market_value=1_000_000)
        kept = await player_factory(market_value=2_500_000)
        team = await team_factory(players=[removed, kept])
        assert team.total_cost == 3_500_000

        await PlayerService(db).delete_player(removed.id)

        assert team.total_cost == 2_500_000
        result = await DataIntegrityChecker(db).check_data_consistency()
        assert result["status"] == "ok"
