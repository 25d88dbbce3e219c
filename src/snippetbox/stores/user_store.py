"""
User credential store backed by SQLAlchemy.

Passwords are hashed with bcrypt before they reach the database and are only ever
checked with bcrypt's own verification routine.

Authentication failures are deliberately uniform: an unknown email and a wrong
password raise the same InvalidCredentialsError, and the unknown-email path still
runs a bcrypt verification (against a throwaway hash of the same cost) so the two
paths take roughly the same time.
"""
from datetime import datetime
from typing import Callable

from sqlalchemy import exists, insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from snippetbox.core.security import (
    DEFAULT_ROUNDS,
    hash_password,
    hash_password_async,
    verify_password_async,
)
from snippetbox.database.types import utcnow
from snippetbox.exceptions.base import InvalidCredentialsError, RepositoryError
from snippetbox.exceptions.mapper import db_error_handler
from snippetbox.models.user import User as UserRow
from .records import is_storable_id


class UserStore:
    """
    Create users, authenticate them and check they exist.

    Args:
        sessions: async session factory bound to the process-wide engine
        rounds: bcrypt cost factor (12 in production; tests lower it)
        clock: returns the current time (timezone-aware UTC)
    """

    def __init__(
        self,
        sessions: async_sessionmaker[AsyncSession],
        rounds: int = DEFAULT_ROUNDS,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.sessions = sessions
        self.rounds = rounds
        self.clock = clock
        # verified against on the unknown-email path to keep both failure paths equally slow
        self._dummy_hash = hash_password("snippetbox-dummy-password", rounds)

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def insert(self, name: str, email: str, password: str) -> None:
        """
        Hash the password and store a new user.

        Raises:
            PasswordHashingError: bcrypt rejected the password (nothing is written)
            DuplicateEmailError: the email is already registered
            StorageUnavailableError / RepositoryError: any other storage failure
        """
        # hashing happens first so a rejected password never touches the database
        hashed_password = await hash_password_async(password, self.rounds)

        statement = insert(UserRow).values(
            name=name,
            email=email.strip(),
            hashed_password=hashed_password,
            created=self.clock(),
        )

        async with db_error_handler("User"):
            async with self.sessions() as session, session.begin():
                await session.execute(statement)

    # =================================================================================================================
    # Authentication
    # =================================================================================================================

    async def authenticate(self, email: str, password: str) -> int:
        """
        Return the id of the user owning `email` if `password` matches.

        Raises:
            InvalidCredentialsError: unknown email or wrong password (same error for both)
        """
        statement = select(UserRow.id, UserRow.hashed_password).where(UserRow.email == email.strip())

        async with db_error_handler("User"):
            async with self.sessions() as session:
                row = (await session.execute(statement)).one_or_none()

        if row is None:
            await self._burn_verification(password)
            raise InvalidCredentialsError()

        try:
            matched = await verify_password_async(password, bytes(row.hashed_password))
        except ValueError as exc:
            # stored value is not a bcrypt hash
            raise RepositoryError("Stored credentials are unreadable") from exc

        if not matched:
            raise InvalidCredentialsError()
        return row.id

    async def _burn_verification(self, password: str) -> None:
        await verify_password_async(password, self._dummy_hash)

    # =================================================================================================================
    # Existence
    # =================================================================================================================

    async def exists(self, user_id: int) -> bool:
        """True when a user with this id exists. Absence is not an error."""
        if not is_storable_id(user_id):
            return False

        statement = select(exists().where(UserRow.id == user_id))

        async with db_error_handler("User"):
            async with self.sessions() as session:
                return bool((await session.execute(statement)).scalar())
