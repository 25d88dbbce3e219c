from sqlalchemy import Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from snippetbox.database.base import Base
from snippetbox.database.types import UTCDateTime


class User(Base):
    """
    SQLAlchemy model for User.

    Represents a registered user. The email uniqueness rule lives here, in the
    database (constraint "uq_users_email"), not in application code.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )

    # Email address (must be unique and non-null)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False
    )

    # bcrypt output (never store plain-text passwords)
    hashed_password: Mapped[bytes] = mapped_column(
        LargeBinary(60),
        nullable=False
    )

    created: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, name={self.name!r}, email={self.email!r})>"
