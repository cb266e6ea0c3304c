"""Revoked JWT tokens - survives process restarts."""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from wordbox.core.database import Base


class BlacklistedToken(Base):
    """A token string revoked by logout before its natural expiry."""

    __tablename__ = "token_blacklist"

    token: Mapped[str] = mapped_column(String(2048), primary_key=True)
    revoked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
