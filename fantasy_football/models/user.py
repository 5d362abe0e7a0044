"""Modelo User"""
from sqlalchemy import Column, String
from fantasy_football.models.base import BaseModel

USER_ROLES = ("USER", "ADMIN")


class User(BaseModel):
    """Modelo de Usuário"""
    __tablename__ = "users"

    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(String(10), nullable=False, default="USER", index=True)
    password_hash = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
