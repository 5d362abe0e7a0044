"""Fixtures compartilhadas: banco SQLite temporário e fábricas de entidades"""
import os
import tempfile
from pathlib import Path

_TMP_DIR = Path(tempfile.mkdtemp(prefix="fantasy_football_tests_"))
DB_PATH = _TMP_DIR / "test.db"

# Precisa estar definido antes de importar a aplicação
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["CACHE_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_FILE"] = str(_TMP_DIR / "app.log")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DEBUG"] = "false"

import pytest
import pytest_asyncio
from sqlalchemy import create_engine

import fantasy_football.models  # noqa: F401
from fantasy_football.core.database import AsyncSessionLocal, Base
from fantasy_football.core.security import ROLE_ADMIN, ROLE_USER, Principal
from fantasy_football.services.player_service import PlayerService
from fantasy_football.services.team_service import TeamService
from fantasy_football.services.user_service import UserService


@pytest.fixture(autouse=True)
def reset_database():
    """Recria o schema antes de cada teste"""
    sync_engine = create_engine(f"sqlite:///{DB_PATH}")
    Base.metadata.drop_all(sync_engine)
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()
    yield


@pytest_asyncio.fixture
async def db():
    async with AsyncSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
def admin():
    return Principal(id="a" * 24, role=ROLE_ADMIN, name={"first": "Admin", "last": "Root"})


@pytest.fixture
def player_factory(db):
    service = PlayerService(db)

    async def create(**overrides):
        data = {
            "first_name": "Player",
            "last_name": "Doe",
            "role": "MIDFIELDER",
            "age": 25,
            "market_value": 1_000_000,
            "country": "Brazil",
        }
        data.update(overrides)
        return await service.create_player(data)

    return create


@pytest.fixture
def user_factory(db):
    service = UserService(db)
    counter = {"value": 0}

    async def create(role=ROLE_USER, **overrides):
        counter["value"] += 1
        data = {
            "first_name": "Test",
            "last_name": "User",
            "email": f"user{counter['value']}@example.com",
            "password": "secret123",
        }
        data.update(overrides)
        return await service.create_user(role=role, **data)

    return create


@pytest.fixture
def team_factory(db, user_factory, player_factory):
    service = TeamService(db)

    async def create(players=None, balance_amount=5_000_000, user=None, name="Test Team", transfer=False):
        if user is None:
            user = await user_factory()
        if players is None:
            players = [await player_factory() for _ in range(3)]
        return await service.create_team(
            user_id=user.id,
            player_ids=[player.id for player in players],
            name=name,
            country="England",
            balance_amount=balance_amount,
            transfer=transfer,
        )

    return create


@pytest.fixture
def as_principal():
    """Converte um User em Principal autenticado"""
    def convert(user) -> Principal:
        return Principal(id=user.id, role=user.role, name={"first": user.first_name, "last": user.last_name})

    return convert
