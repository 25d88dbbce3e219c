# snippetbox/api/v1/error_handlers.py
"""
FastAPI exception handlers that map domain errors to HTTP responses.

Stores and validators raise snippetbox.exceptions.base.* errors; the status code
comes from `exc.http_status()` and the body from `exc.to_payload()`.

Client errors (validation, not found, duplicate, bad credentials) are logged at
INFO. Server-side failures (storage unavailable, hashing failure, anything
generic) are logged with their cause and answered with an opaque body, so no
driver or library text reaches the client.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
import logging
from snippetbox.exceptions.base import (
    RepositoryError,
    DuplicateError,
    InvalidCredentialsError,
    NotFoundError,
    PasswordHashingError,
    StorageUnavailableError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

OPAQUE_DETAIL = "Internal Server Error"


def _opaque(exc: RepositoryError) -> JSONResponse:
    payload = {"detail": OPAQUE_DETAIL}
    if exc.error_code:
        payload["code"] = exc.error_code
    return JSONResponse(status_code=exc.http_status(), content=payload)


async def validation_failed_handler(request: Request, exc: ValidationFailedError) -> JSONResponse:
    """422 with per-field messages."""
    logger.info("ValidationFailedError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def duplicate_error_handler(request: Request, exc: DuplicateError) -> JSONResponse:
    """409 Conflict for duplicates (DuplicateEmailError included)."""
    logger.info("DuplicateError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("NotFoundError for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError) -> JSONResponse:
    # the submitted email is not logged
    logger.info("InvalidCredentialsError for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def password_hashing_handler(request: Request, exc: PasswordHashingError) -> JSONResponse:
    logger.error("PasswordHashingError for %s %s: %s", request.method, request.url.path, exc.message)
    return _opaque(exc)


async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError) -> JSONResponse:
    logger.error("StorageUnavailableError for %s %s", request.method, request.url.path,
                 exc_info=(type(exc), exc, exc.__traceback__))
    return _opaque(exc)


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """Fallback for generic store errors -> 500 with an opaque body."""
    logger.error("RepositoryError for %s %s: %s", request.method, request.url.path, str(exc),
                 exc_info=(type(exc), exc, exc.__traceback__))
    return _opaque(exc)


def register_exception_handlers(app) -> None:
    """Install all handlers on `app`. Starlette picks the most specific class first."""
    app.add_exception_handler(ValidationFailedError, validation_failed_handler)
    app.add_exception_handler(DuplicateError, duplicate_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InvalidCredentialsError, invalid_credentials_handler)
    app.add_exception_handler(PasswordHashingError, password_hashing_handler)
    app.add_exception_handler(StorageUnavailableError, storage_unavailable_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
