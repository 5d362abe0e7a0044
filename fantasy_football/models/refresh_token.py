"""Modelo RefreshToken"""
from sqlalchemy import Column, String, DateTime, ForeignKey
from fantasy_football.models.base import BaseModel, utcnow


class RefreshToken(BaseModel):
    """Refresh token opaco associado a um usuário"""
    __tablename__ = "refresh_tokens"

    user_id = Column(String(24), ForeignKey("users.id"), nullable=False, index=True)
    token = Column(String(128), nullable=False, unique=True, index=True)
    valid_till = Column(DateTime(timezone=True), nullable=False)

    @property
    def is_valid(self) -> bool:
        valid_till = self.valid_till
        if valid_till.tzinfo is None:
            valid_till = valid_till.replace(tzinfo=utcnow().tzinfo)
        return valid_till > utcnow()

    def invalidate(self):
        self.valid_till = utcnow()

    def __repr__(self):
        return f"<RefreshToken(id={self.id}, user_id={self.user_id})>"
