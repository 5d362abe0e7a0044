"""Testes de autenticação e guarda de papéis"""
from datetime import timedelta

import pytest

from fantasy_football.core.exceptions import AuthenticationFailed, Unauthorized
from fantasy_football.core.security import (
    ROLE_ADMIN,
    ROLE_USER,
    Principal,
    create_access_token,
    decode_access_token,
    get_optional_principal,
    hash_password,
    require_role,
    verify_password,
)


class TestPasswords:

    def test_hash_and_verify(self):
        password_hash = hash_password("secret123")

        assert password_hash != "secret123"
        assert verify_password("secret123", password_hash)
        assert not verify_password("wrong", password_hash)


class TestAccessToken:

    def test_round_trip(self):
        principal = Principal(id="b" * 24, role=ROLE_USER, name={"first": "Ana", "last": "Souza"})

        decoded = decode_access_token(create_access_token(principal))

        assert decoded == principal

    def test_expired_token(self):
        principal = Principal(id="b" * 24, role=ROLE_USER)
        token = create_access_token(principal, expires_delta=timedelta(seconds=-1))

        with pytest.raises(AuthenticationFailed):
            decode_access_token(token)

    def test_garbage_token(self):
        with pytest.raises(AuthenticationFailed):
            decode_access_token("not-a-token")

    def test_missing_header_gives_no_principal(self):
        assert get_optional_principal(None) is None

    def test_header_requires_bearer_scheme(self):
        with pytest.raises(AuthenticationFailed):
            get_optional_principal("Basic abc")

    def test_bearer_header(self):
        principal = Principal(id="c" * 24, role=ROLE_ADMIN)
        token = create_access_token(principal)

        assert get_optional_principal(f"Bearer {token}") == principal


class TestRequireRole:

    def test_missing_principal(self):
        with pytest.raises(AuthenticationFailed):
            require_role(None, [ROLE_ADMIN])

    def test_wrong_role(self):
        with pytest.raises(Unauthorized):
            require_role(Principal(id="d" * 24, role=ROLE_USER), [ROLE_ADMIN])

    def test_allowed_role(self):
        principal = Principal(id="d" * 24, role=ROLE_USER)
        assert require_role(principal, [ROLE_ADMIN, ROLE_USER]) is principal
