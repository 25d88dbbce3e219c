"""
Plain records returned by the stores.

Stores never hand ORM instances to callers: each query result is copied into one
of these frozen dataclasses, which the caller then owns outright.
"""
from dataclasses import dataclass
from datetime import datetime

# Ids are storage-generated 64-bit integers; anything outside 1..MAX_ID can never match a row.
MAX_ID = 2**63 - 1


def is_storable_id(value: int) -> bool:
    return 1 <= value <= MAX_ID


@dataclass(frozen=True)
class Snippet:
    id: int
    title: str
    content: str
    created: datetime
    expires: datetime

    @classmethod
    def from_row(cls, row) -> "Snippet":
        return cls(
            id=row.id,
            title=row.title,
            content=row.content,
            created=row.created,
            expires=row.expires,
        )


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str
    hashed_password: bytes
    created: datetime

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, name={self.name!r}, email={self.email!r}, created={self.created!r})"
