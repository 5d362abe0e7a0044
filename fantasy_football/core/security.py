"""Autenticação: hash de senha, tokens JWT e guarda de papéis"""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from fastapi import Header
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from fantasy_football.core.config import settings
from fantasy_football.core.exceptions import AuthenticationFailed, Unauthorized

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class Principal(BaseModel):
    """Identidade autenticada extraída do access token"""
    id: str
    role: str
    name: Optional[dict] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


def create_access_token(principal: Principal, expires_delta: Optional[timedelta] = None) -> str:
    """Gera JWT com o payload {"user": {id, role, name}}"""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {"user": principal.model_dump(), "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Principal:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationFailed("Token inválido ou expirado")

    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id") or not user.get("role"):
        raise AuthenticationFailed("Token inválido")
    return Principal(**user)


def create_refresh_token_value() -> str:
    """Gera valor opaco para refresh token"""
    return secrets.token_urlsafe(64)


def get_optional_principal(authorization: Optional[str] = Header(None)) -> Optional[Principal]:
    """Dependency: principal do header Authorization, ou None se ausente"""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationFailed("Header Authorization deve ser 'Bearer <token>'")
    return decode_access_token(token.strip())


def require_role(principal: Optional[Principal], roles: Iterable[str]) -> Principal:
    """Guarda invocada no topo de cada operação protegida.

    Sem credencial -> AuthenticationFailed (401); papel fora de ``roles``
    -> Unauthorized (403).
    """
    if principal is None:
        raise AuthenticationFailed()
    if principal.role not in set(roles):
        raise Unauthorized()
    return principal
