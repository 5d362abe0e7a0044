"""Modelo base para todos os models"""
import secrets
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime
from fantasy_football.core.database import Base


def generate_id() -> str:
    """Identificador opaco de 24 caracteres hexadecimais"""
    return secrets.token_hex(12)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Base):
    """Classe base abstrata para todos os modelos (soft delete via deleted_at)"""
    __abstract__ = True

    id = Column(String(24), primary_key=True, default=generate_id)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self):
        self.deleted_at = utcnow()
