import datetime
from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


#Author
class Author(Base):
    __tablename__: str = "authors"
    __table_args__: dict[str, object] = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    github: Mapped[str | None] = mapped_column(Text, nullable=True)
    twitter: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    latest_article_published: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def touch(self) -> None:
        """Bump updated_at, never moving it backwards."""
        now = utcnow()
        previous = self.updated_at
        if previous is not None:
            # SQLite hands back naive datetimes
            if previous.tzinfo is None:
                previous = previous.replace(tzinfo=datetime.timezone.utc)
            now = max(now, previous)
        self.updated_at = now
