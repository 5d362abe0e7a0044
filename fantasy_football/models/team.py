"""Modelos Team e TeamPlayer"""
from sqlalchemy import Column, Integer, BigInteger, String, ForeignKey
from sqlalchemy.orm import relationship
from fantasy_football.models.base import BaseModel


class Team(BaseModel):
    """Modelo de Time

    ``roster`` é a lista ordenada de jogadores; ``total_cost`` é cache da
    soma dos valores de mercado e só é recalculado pelo TeamService.
    """
    __tablename__ = "teams"

    name = Column(String(50), nullable=False, index=True)
    country = Column(String(56), nullable=False, index=True)
    user_id = Column(String(24), ForeignKey("users.id"), nullable=True, index=True)
    total_cost = Column(BigInteger, nullable=False, default=0)
    balance_amount = Column(BigInteger, nullable=False, default=0)

    version = Column(Integer, nullable=False, default=1)

    # Relationships
    roster = relationship(
        "TeamPlayer",
        order_by="TeamPlayer.position",
        cascade="all, delete-orphan",
        lazy="selectin",
        back_populates="team",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def player_ids(self) -> list[str]:
        return [entry.player_id for entry in self.roster]

    def set_players(self, player_ids: list[str]):
        """Substitui o roster inteiro mantendo a ordem recebida"""
        self.roster = [
            TeamPlayer(player_id=player_id, position=index)
            for index, player_id in enumerate(player_ids)
        ]

    def add_player(self, player_id: str):
        next_position = max((entry.position for entry in self.roster), default=-1) + 1
        self.roster.append(TeamPlayer(player_id=player_id, position=next_position))

    def remove_players(self, player_ids) -> list[str]:
        """Remove jogadores do roster; retorna os ids efetivamente removidos"""
        to_remove = set(player_ids)
        removed = [entry.player_id for entry in self.roster if entry.player_id in to_remove]
        if removed:
            self.roster = [entry for entry in self.roster if entry.player_id not in to_remove]
        return removed

    def __repr__(self):
        return f"<Team(id={self.id}, name='{self.name}', user_id={self.user_id})>"


class TeamPlayer(BaseModel):
    """Associação ordenada Time -> Jogador"""
    __tablename__ = "team_players"

    team_id = Column(String(24), ForeignKey("teams.id"), nullable=False, index=True)
    player_id = Column(String(24), ForeignKey("players.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    # Relationships
    team = relationship("Team", back_populates="roster")
    player = relationship("Player", lazy="raise")

    def __repr__(self):
        return f"<TeamPlayer(team_id={self.team_id}, player_id={self.player_id}, position={self.position})>"
