"""
Snippet store backed by SQLAlchemy.

Visibility rule: a snippet exists for callers only while `expires > now`. Expired
rows are not deleted; every query simply filters them out, so an expired snippet
is indistinguishable from one that never existed.
"""
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from snippetbox.database.types import utcnow
from snippetbox.exceptions.base import NotFoundError
from snippetbox.exceptions.mapper import db_error_handler
from snippetbox.models.snippet import Snippet as SnippetRow
from .records import Snippet, is_storable_id

LATEST_LIMIT = 10


class SnippetStore:
    """
    Create, fetch and list snippets.

    Each call opens its own session from the shared factory and runs a single
    statement, so concurrent callers never share a session.

    Args:
        sessions: async session factory bound to the process-wide engine
        clock: returns the current time (timezone-aware UTC); injectable for tests
    """

    def __init__(self, sessions: async_sessionmaker[AsyncSession], clock: Callable[[], datetime] = utcnow):
        self.sessions = sessions
        self.clock = clock

    async def insert(self, title: str, content: str, expires_days: int) -> int:
        """
        Persist a new snippet and return its id.

        `expires_days` is trusted: callers validate it against the permitted set.
        """
        now = self.clock()
        statement = (
            insert(SnippetRow)
            .values(
                title=title,
                content=content,
                created=now,
                expires=now + timedelta(days=expires_days),
            )
            .returning(SnippetRow.id)
        )

        async with db_error_handler("Snippet"):
            async with self.sessions() as session, session.begin():
                result = await session.execute(statement)
                return result.scalar_one()

    async def get(self, snippet_id: int) -> Snippet:
        """
        Return the snippet with this id if it is still visible.

        Raises:
            NotFoundError: no such id, or the snippet has expired (same error for both)
        """
        if not is_storable_id(snippet_id):
            raise NotFoundError("Snippet not found")

        statement = select(SnippetRow).where(
            SnippetRow.id == snippet_id,
            SnippetRow.expires > self.clock(),
        )

        async with db_error_handler("Snippet"):
            async with self.sessions() as session:
                row = (await session.execute(statement)).scalar_one_or_none()
                if row is None:
                    raise NotFoundError("Snippet not found")
                return Snippet.from_row(row)

    async def latest(self) -> list[Snippet]:
        """Up to 10 visible snippets, newest (highest id) first. May be empty."""
        statement = (
            select(SnippetRow)
            .where(SnippetRow.expires > self.clock())
            .order_by(SnippetRow.id.desc())
            .limit(LATEST_LIMIT)
        )

        async with db_error_handler("Snippet"):
            async with self.sessions() as session:
                rows = (await session.execute(statement)).scalars().all()
                return [Snippet.from_row(row) for row in rows]
