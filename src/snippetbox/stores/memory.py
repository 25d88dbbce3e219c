"""
In-memory stores implementing the same contract as the SQL stores.

Used by the HTTP-layer tests and handy for local experiments without a database.
They keep the observable behaviour of the real stores: expiry filtering, id-descending
ordering with a limit of 10, DuplicateEmailError on a repeated email, and the same
InvalidCredentialsError for unknown emails and wrong passwords.
"""
from datetime import datetime, timedelta
from typing import Callable

from snippetbox.core.security import (
    DEFAULT_ROUNDS,
    hash_password,
    hash_password_async,
    verify_password_async,
)
from snippetbox.database.types import utcnow
from snippetbox.exceptions.base import DuplicateEmailError, InvalidCredentialsError, NotFoundError
from .records import Snippet, User, is_storable_id
from .snippet_store import LATEST_LIMIT


class InMemorySnippetStore:
    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock
        self._rows: dict[int, Snippet] = {}
        self._next_id = 1

    async def insert(self, title: str, content: str, expires_days: int) -> int:
        now = self.clock()
        snippet_id = self._next_id
        self._next_id += 1
        self._rows[snippet_id] = Snippet(
            id=snippet_id,
            title=title,
            content=content,
            created=now,
            expires=now + timedelta(days=expires_days),
        )
        return snippet_id

    async def get(self, snippet_id: int) -> Snippet:
        snippet = self._rows.get(snippet_id) if is_storable_id(snippet_id) else None
        if snippet is None or snippet.expires <= self.clock():
            raise NotFoundError("Snippet not found")
        return snippet

    async def latest(self) -> list[Snippet]:
        now = self.clock()
        visible = [s for s in self._rows.values() if s.expires > now]
        visible.sort(key=lambda s: s.id, reverse=True)
        return visible[:LATEST_LIMIT]


class InMemoryUserStore:
    def __init__(self, rounds: int = DEFAULT_ROUNDS, clock: Callable[[], datetime] = utcnow):
        self.rounds = rounds
        self.clock = clock
        self._users: dict[int, User] = {}
        self._next_id = 1
        self._dummy_hash = hash_password("snippetbox-dummy-password", rounds)

    async def insert(self, name: str, email: str, password: str) -> None:
        hashed_password = await hash_password_async(password, self.rounds)
        email = email.strip()
        # no await between the check and the write, so concurrent inserts cannot both pass
        if any(u.email == email for u in self._users.values()):
            raise DuplicateEmailError()
        user_id = self._next_id
        self._next_id += 1
        self._users[user_id] = User(
            id=user_id,
            name=name,
            email=email,
            hashed_password=hashed_password,
            created=self.clock(),
        )

    async def authenticate(self, email: str, password: str) -> int:
        email = email.strip()
        user = next((u for u in self._users.values() if u.email == email), None)
        if user is None:
            await verify_password_async(password, self._dummy_hash)
            raise InvalidCredentialsError()
        if not await verify_password_async(password, user.hashed_password):
            raise InvalidCredentialsError()
        return user.id

    async def exists(self, user_id: int) -> bool:
        return is_storable_id(user_id) and user_id in self._users
