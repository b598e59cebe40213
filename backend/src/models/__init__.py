from models.base import Base
from models.profile import Profile
from models.team import Team
from models.gameweek import Fixture, Gameweek
from models.pick import GameweekScore, Pick, UserStanding
from models.league import League, LeagueMember

__all__ = [
    "Base",
    "Profile",
    "Team",
    "Gameweek",
    "Fixture",
    "Pick",
    "GameweekScore",
    "UserStanding",
    "League",
    "LeagueMember",
]
