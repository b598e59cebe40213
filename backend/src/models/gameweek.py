import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, SmallInteger, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class Gameweek(Base):
    __tablename__ = "gameweeks"

    number: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    deadline: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_current: Mapped[bool] = mapped_column(Boolean, default=False)

    fixtures: Mapped[list["Fixture"]] = relationship(back_populates="gameweek")


class Fixture(Base):
    __tablename__ = "fixtures"

    external_id: Mapped[int | None] = mapped_column(Integer, unique=True, nullable=True)
    gameweek_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("gameweeks.id"), nullable=False
    )
    home_team_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("teams.id"), nullable=False
    )
    away_team_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("teams.id"), nullable=False
    )
    kickoff_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="scheduled")
    home_score: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    away_score: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    home_difficulty: Mapped[int] = mapped_column(SmallInteger, default=3)
    away_difficulty: Mapped[int] = mapped_column(SmallInteger, default=3)

    gameweek: Mapped["Gameweek"] = relationship(back_populates="fixtures")

    def involves(self, team_id: uuid.UUID) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def winner_id(self) -> uuid.UUID | None:
        if self.home_score is None or self.away_score is None:
            return None
        if self.home_score > self.away_score:
            return self.home_team_id
        if self.away_score > self.home_score:
            return self.away_team_id
        return None
