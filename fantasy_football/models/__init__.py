"""Models - modelos SQLAlchemy"""
from fantasy_football.models.player import Player, PLAYER_ROLES
from fantasy_football.models.team import Team, TeamPlayer
from fantasy_football.models.transferable_player import TransferablePlayer
from fantasy_football.models.user import User, USER_ROLES
from fantasy_football.models.refresh_token import RefreshToken

__all__ = [
    "Player",
    "PLAYER_ROLES",
    "Team",
    "TeamPlayer",
    "TransferablePlayer",
    "User",
    "USER_ROLES",
    "RefreshToken",
]
