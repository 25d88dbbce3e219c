import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
    CheckConstraintError,
)
from .base import (
    DuplicateEmailError,
    DuplicateError,
    RepositoryError,
    StorageUnavailableError,
)

logger = logging.getLogger(__name__)

# Name given to users.email's unique constraint by the naming convention in database/base.py
EMAIL_UNIQUE_CONSTRAINT = "uq_users_email"

# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_postgres(msg: str) -> list[str] | None:
    """
    Column names from Postgres messages:
      - 'null value in column "name" violates not-null constraint'
      - 'DETAIL:  Key (email)=(a@b.com) already exists.'
    """
    if not msg:
        return None

    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    return None


def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # 'UNIQUE constraint failed: users.email' / 'NOT NULL constraint failed: users.name'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>[\w., ]+)', msg, flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols").strip())]
    return None


def _extract_columns_mysql(msg: str) -> list[str] | None:
    # "Duplicate entry 'a@b.com' for key 'users.uq_users_email'"
    m = re.search(r"Duplicate entry .* for key '?([^']+)'?", msg, flags=re.IGNORECASE)
    if m:
        return [m.group(1).split('.')[-1]]
    return None


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """Best-effort extraction of column names from the DB message (Postgres, SQLite, MySQL)."""
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)

    for extractor in (_extract_columns_postgres, _extract_columns_sqlite, _extract_columns_mysql):
        cols = extractor(msg)
        if cols:
            return cols
    return None


def _is_email_violation(columns: list[str] | None, constraint_name: str | None, model_name: str | None) -> bool:
    if constraint_name == EMAIL_UNIQUE_CONSTRAINT:
        return True
    if columns and (EMAIL_UNIQUE_CONSTRAINT in columns or (model_name == "User" and "email" in columns)):
        return True
    return False


# -----------------------
# Mapper
# -----------------------

def map_integrity_error(exc: IntegrityError, model_name: str | None = None) -> RepositoryError:
    """
    Translate a SQLAlchemy IntegrityError into a domain error.

    The returned error carries `.fields` / `.constraint` where they could be recovered;
    raw DB text is never put into the message.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"

    if exc_cls is UniqueConstraintError:
        if _is_email_violation(columns, constraint_name, model_name):
            return DuplicateEmailError(constraint=constraint_name or EMAIL_UNIQUE_CONSTRAINT)
        if columns:
            return DuplicateError(f"{model_part} already exists for field(s): {', '.join(columns)}",
                                  fields=columns, constraint=constraint_name)
        return DuplicateError(f"{model_part} already exists (unique constraint)", constraint=constraint_name)

    if exc_cls is NotNullConstraintError:
        if columns:
            return RepositoryError(f"Missing required field(s): {', '.join(columns)} for {model_part}",
                                   fields=columns, constraint=constraint_name)
        return RepositoryError(f"Missing required field for {model_part}", constraint=constraint_name)

    if exc_cls is ForeignKeyConstraintError:
        return RepositoryError(f"{model_part} foreign key constraint violated",
                               fields=columns, constraint=constraint_name)

    if exc_cls is CheckConstraintError:
        logger.debug(
            "mapper.check_constraint_failure",
            extra={"model": model_part, "raw": str(exc.orig), "constraint": constraint_name},
        )
        return RepositoryError(f"{model_part} business rule violated (check constraint).",
                               constraint=constraint_name)

    logger.debug("mapper.unknown_integrity_raw", extra={"model": model_part, "raw": str(exc.orig)})
    return RepositoryError(f"{model_part} database integrity error.")


def map_db_error(exc: Exception, model_name: str | None = None) -> RepositoryError:
    """
    Translate any exception raised by the storage driver into a domain error.

    | Raised by the driver                                   | Domain error               |
    | ------------------------------------------------------ | -------------------------- |
    | domain error (already translated)                      | unchanged                  |
    | IntegrityError                                         | see map_integrity_error()  |
    | OperationalError / InterfaceError / DisconnectionError | StorageUnavailableError    |
    | DBAPIError with an invalidated connection, OSError     | StorageUnavailableError    |
    | anything else                                          | RepositoryError (generic)  |
    """
    if isinstance(exc, RepositoryError):
        return exc
    if isinstance(exc, IntegrityError):
        return map_integrity_error(exc, model_name)
    if isinstance(exc, (OperationalError, InterfaceError, DisconnectionError, OSError)):
        return StorageUnavailableError()
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return StorageUnavailableError()
    if isinstance(exc, SQLAlchemyError):
        return RepositoryError(f"Failed to operate on {model_name or 'database'}")
    return RepositoryError(f"Unexpected error while operating on {model_name or 'database'}")


# -----------------------
# Async context manager to DRY error handling in stores
# -----------------------
@asynccontextmanager
async def db_error_handler(model_name: str | None = None):
    """
    Usage:
        async with db_error_handler("User"):
            ... DB ops that may raise ...

    Rollback is left to the session/transaction context managers around the block;
    this only translates. Cancellation (BaseException) passes through untouched.
    """
    try:
        yield
    except RepositoryError:
        raise
    except Exception as exc:
        raise map_db_error(exc, model_name) from exc
