"""
Central access to the ORM models.

Importing this package registers every table on `Base.metadata`, which is what
`create_schema()` and the test fixtures rely on.

    from snippetbox.models import Snippet, User
"""

from .snippet import Snippet
from .user import User

__all__ = [
    "Snippet",
    "User",
]
