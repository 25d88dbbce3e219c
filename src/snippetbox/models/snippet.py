from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from snippetbox.database.base import Base
from snippetbox.database.types import UTCDateTime


class Snippet(Base):
    """
    SQLAlchemy model for a Snippet.

    A snippet is never updated after insert; it stops being visible once
    `expires` is in the past, but the row itself stays.
    """
    __tablename__ = "snippets"

    # Monotonically assigned by the database; latest() orders on it
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    title: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    # Stored verbatim, newlines included
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False
    )

    created: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False
    )

    # Indexed: every read filters on expires > now
    expires: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        return f"<Snippet(id={self.id!r}, title={self.title!r}, expires={self.expires!r})>"
