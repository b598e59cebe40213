import uuid

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Pick(Base):
    __tablename__ = "user_picks"
    __table_args__ = (
        UniqueConstraint("user_id", "gameweek_id", name="uq_pick_user_gameweek"),
    )

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    gameweek_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("gameweeks.id"), nullable=False
    )
    fixture_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("fixtures.id"), nullable=False
    )
    picked_team_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("teams.id"), nullable=False
    )


class GameweekScore(Base):
    __tablename__ = "gameweek_scores"
    __table_args__ = (
        UniqueConstraint("user_id", "gameweek_id", name="uq_score_user_gameweek"),
    )

    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    gameweek_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("gameweeks.id"), nullable=False
    )
    points: Mapped[int] = mapped_column(Integer, default=0)
    is_correct: Mapped[bool] = mapped_column(Boolean, default=False)


class UserStanding(Base):
    __tablename__ = "user_standings"

    user_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    total_points: Mapped[int] = mapped_column(Integer, default=0)
    correct_picks: Mapped[int] = mapped_column(Integer, default=0)
    total_picks: Mapped[int] = mapped_column(Integer, default=0)
    current_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
