from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    username: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False)
    premium_activated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    upgraded_by_admin: Mapped[bool] = mapped_column(Boolean, default=False)
    payment_session_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
