"""Blacklisted usernames - survives process restarts."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from pingboard.core.database import Base


class BlacklistEntry(Base):
    """A username excluded from logging in and from every authenticated call.

    Entries are created by an admin ban and deleted by an admin unban.
    """

    __tablename__ = "blacklist"

    username: Mapped[str] = mapped_column(String(255), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    def __repr__(self) -> str:
        return f"<BlacklistEntry {self.username}>"
