"""Store contracts the HTTP layer depends on.

Implemented by the SQLAlchemy stores (snippet_store.py, user_store.py) and by the
in-memory doubles (memory.py). Structural typing: implementations do not inherit
from these classes.
"""

from typing import Protocol

from .records import Snippet


class SnippetStoreProtocol(Protocol):
    """Contract for snippet persistence."""
    async def insert(self, title: str, content: str, expires_days: int) -> int: ...
    async def get(self, snippet_id: int) -> Snippet: ...
    async def latest(self) -> list[Snippet]: ...


class UserStoreProtocol(Protocol):
    """Contract for user credential persistence."""
    async def insert(self, name: str, email: str, password: str) -> None: ...
    async def authenticate(self, email: str, password: str) -> int: ...
    async def exists(self, user_id: int) -> bool: ...
