"""
Store layer.

    from snippetbox.stores import SnippetStore, UserStore

`SnippetStore` / `UserStore` talk to the database; `InMemorySnippetStore` /
`InMemoryUserStore` are drop-in doubles. Callers should type against
`SnippetStoreProtocol` / `UserStoreProtocol`.
"""

from .records import MAX_ID, Snippet, User
from .protocols import SnippetStoreProtocol, UserStoreProtocol
from .snippet_store import SnippetStore
from .user_store import UserStore
from .memory import InMemorySnippetStore, InMemoryUserStore

__all__ = [
    "MAX_ID",
    "Snippet",
    "User",
    "SnippetStoreProtocol",
    "UserStoreProtocol",
    "SnippetStore",
    "UserStore",
    "InMemorySnippetStore",
    "InMemoryUserStore",
]
