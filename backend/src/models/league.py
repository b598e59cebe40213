import uuid

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class League(Base):
    __tablename__ = "leagues"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    invite_code: Mapped[str] = mapped_column(String(6), unique=True, nullable=False)
    creator_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False)
    max_members: Mapped[int | None] = mapped_column(Integer, nullable=True)

    members: Mapped[list["LeagueMember"]] = relationship(back_populates="league")


class LeagueMember(Base):
    __tablename__ = "league_members"
    __table_args__ = (
        UniqueConstraint("league_id", "user_id", name="uq_league_member"),
    )

    league_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("leagues.id"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)

    league: Mapped["League"] = relationship(back_populates="members")
