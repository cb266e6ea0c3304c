"""User credential model for the database-backed credential store."""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from wordbox.core.database import Base


class UserCredential(Base):
    """A registered user and the Argon2 hash of their password.

    The plaintext password is never stored.
    """

    __tablename__ = "user_credentials"

    name: Mapped[str] = mapped_column(String(255), primary_key=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<UserCredential {self.name}>"
