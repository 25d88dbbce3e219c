# snippetbox/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Domain errors (NotFoundError, DuplicateEmailError, ...)
# │   ├── integrity_classifier.py    # SQL-level / DB-specific constraint classification
# │   └── mapper.py                  # Driver errors -> domain errors
from .base import (
    RepositoryError,
    NotFoundError,
    DuplicateError,
    DuplicateEmailError,
    InvalidCredentialsError,
    PasswordHashingError,
    StorageUnavailableError,
    ValidationFailedError,
)
from .mapper import map_db_error, db_error_handler

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "PasswordHashingError",
    "StorageUnavailableError",
    "ValidationFailedError",
    "map_db_error",
    "db_error_handler",
]
