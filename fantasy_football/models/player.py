"""Modelo Player"""
from sqlalchemy import Column, Integer, BigInteger, String
from fantasy_football.models.base import BaseModel

PLAYER_ROLES = ("GOALKEEPER", "DEFENDER", "MIDFIELDER", "ATTACKER")


class Player(BaseModel):
    """Modelo de Jogador"""
    __tablename__ = "players"

    first_name = Column(String(50), nullable=False, index=True)
    last_name = Column(String(50), nullable=False, index=True)
    role = Column(String(20), nullable=False, index=True)
    country = Column(String(56), nullable=False, index=True)
    age = Column(Integer, nullable=False)
    market_value = Column(BigInteger, nullable=False, index=True)

    version = Column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return (
            f"<Player(id={self.id}, name='{self.first_name} {self.last_name}', "
            f"role='{self.role}', market_value={self.market_value})>"
        )
