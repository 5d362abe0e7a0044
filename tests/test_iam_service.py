"""Testes de cadastro, login e renovação de sessão"""
import pytest

from fantasy_football.core.exceptions import (
    EmailAlreadyRegistered,
    InvalidCredentials,
    InvalidEmail,
    InvalidRefreshToken,
)
from fantasy_football.core.security import ROLE_USER, decode_access_token
from fantasy_football.services.iam_service import IAMService
from fantasy_football.services.user_service import UserService


class TestSignUp:

    @pytest.mark.asyncio
    async def test_sign_up_creates_user_team_and_session(self, db):
        service = IAMService(db)

        result = await service.sign_up("Ana", "Souza", "Ana@Example.com", "secret123")

        user = result["user"]
        assert user.email == "ana@example.com"
        assert user.role == ROLE_USER
        assert user.password_hash != "secret123"
        assert result["team"].user_id == user.id
        assert len(result["team"].player_ids) == 20

        principal = decode_access_token(result["session"]["access_token"])
        assert principal.id == user.id
        assert principal.name == {"first": "Ana", "last": "Souza"}

    @pytest.mark.asyncio
    async def test_email_is_unique_ignoring_case(self, db):
        service = IAMService(db)
        await service.sign_up("Ana", "Souza", "ana@example.com", "secret123")

        with pytest.raises(EmailAlreadyRegistered):
            await service.sign_up("Ana", "Lima", "ANA@example.com", "secret456")

    @pytest.mark.asyncio
    async def test_email_constraint_catches_concurrent_sign_up(self, db):
        await UserService(db).create_user("Ana", "Souza", "ana@example.com", "secret123")

        service = UserService(db)

        async def not_registered_yet(email):
            return False

        # Cadastro concorrente passa pela checagem antes do primeiro gravar
        service.repository.email_exists = not_registered_yet

        with pytest.raises(EmailAlreadyRegistered):
            await service.create_user("Ana", "Lima", "ana@example.com", "secret456")


class TestSignIn:

    @pytest.mark.asyncio
    async def test_sign_in_returns_team(self, db):
        service = IAMService(db)
        created = await service.sign_up("Ana", "Souza", "ana@example.com", "secret123")

        result = await service.sign_in("ANA@example.com", "secret123")

        assert result["user"].id == created["user"].id
        assert result["team"].id == created["team"].id

    @pytest.mark.asyncio
    async def test_admin_created_user_has_no_team(self, db):
        await UserService(db).create_user("Bia", "Reis", "bia@example.com", "secret123")

        result = await IAMService(db).sign_in("bia@example.com", "secret123")

        assert result["team"] is None

    @pytest.mark.asyncio
    async def test_unknown_email(self, db):
        with pytest.raises(InvalidEmail):
            await IAMService(db).sign_in("nobody@example.com", "secret123")

    @pytest.mark.asyncio
    async def test_wrong_password(self, db):
        service = IAMService(db)
        await service.sign_up("Ana", "Souza", "ana@example.com", "secret123")

        with pytest.raises(InvalidCredentials):
            await service.sign_in("ana@example.com", "wrong-password")


class TestUpdateSession:

    @pytest.mark.asyncio
    async def test_refresh_token_is_single_use(self, db):
        service = IAMService(db)
        created = await service.sign_up("Ana", "Souza", "ana@example.com", "secret123")
        refresh_token = created["session"]["refresh_token"]

        session = await service.update_session(refresh_token)

        assert session["refresh_token"] != refresh_token
        with pytest.raises(InvalidRefreshToken):
            await service.update_session(refresh_token)

    @pytest.mark.asyncio
    async def test_unknown_refresh_token(self, db):
        with pytest.raises(InvalidRefreshToken):
            await IAMService(db).update_session("does-not-exist")
