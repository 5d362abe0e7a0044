"""Modelo TransferablePlayer"""
from sqlalchemy import Column, BigInteger, String, ForeignKey
from sqlalchemy.orm import relationship
from fantasy_football.models.base import BaseModel


class TransferablePlayer(BaseModel):
    """Anúncio de jogador no mercado de transferências"""
    __tablename__ = "transferable_players"

    player_id = Column(String(24), ForeignKey("players.id"), nullable=False, index=True)
    team_id = Column(String(24), ForeignKey("teams.id"), nullable=True, index=True)
    asking_price = Column(BigInteger, nullable=False, index=True)

    # Relationships
    player = relationship("Player", lazy="raise")
    team = relationship("Team", lazy="raise")

    def __repr__(self):
        return (
            f"<TransferablePlayer(id={self.id}, player_id={self.player_id}, "
            f"asking_price={self.asking_price})>"
        )
