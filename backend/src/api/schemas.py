import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class PickIn(BaseModel):
    fixture_id: uuid.UUID
    team_id: uuid.UUID


class PickOut(ORMModel):
    id: uuid.UUID
    gameweek_id: uuid.UUID
    fixture_id: uuid.UUID
    picked_team_id: uuid.UUID
    created_at: datetime


class LeagueCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=500)
    is_public: bool = False
    max_members: int | None = Field(default=None, ge=2, le=500)


class LeagueJoin(BaseModel):
    invite_code: str = Field(min_length=1, max_length=20)


class LeagueOut(ORMModel):
    id: uuid.UUID
    name: str
    description: str | None
    invite_code: str
    creator_id: str
    is_public: bool
    max_members: int | None
    created_at: datetime


class MemberOut(ORMModel):
    user_id: str
    created_at: datetime


class StandingOut(ORMModel):
    user_id: str
    total_points: int
    correct_picks: int
    total_picks: int
    current_rank: int | None


class LeagueStandingOut(StandingOut):
    league_id: uuid.UUID


class ScoreOut(ORMModel):
    user_id: str
    gameweek_id: uuid.UUID
    points: int
    is_correct: bool


class EfficiencyOut(ORMModel):
    gameweek: int
    points_earned: int
    max_possible: int
    efficiency: float


class EfficiencySummary(BaseModel):
    overall: float
    gameweeks: list[EfficiencyOut]


class FixtureDifficultyOut(ORMModel):
    team: str
    current_difficulty: int
    next_five_games: list[int]
    average_difficulty: float


class PickRecommendationOut(ORMModel):
    club: str
    gameweek: int
    win_probability: float


class PremiumVerifyIn(BaseModel):
    session_id: str = Field(min_length=1, max_length=255)


class UpgradeUserIn(BaseModel):
    email: str = Field(min_length=3, max_length=255)


class RefreshStandingsIn(BaseModel):
    gameweek: int | None = Field(default=None, ge=1, le=38)


class RateLimitStatus(BaseModel):
    limiter: str
    key: str
    time_until_reset: int
