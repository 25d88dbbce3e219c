"""
Domain errors raised by the stores and the validator.

Every error carries:
    - message: human-friendly text (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['email'])
    - constraint: optional DB constraint name (for logs only, never sent to clients)
    - error_code: canonical short code clients can switch on

The HTTP layer turns these into responses with `to_payload()` and `http_status()`;
nothing below this module knows about HTTP.
"""

from typing import Iterable, Mapping


class RepositoryError(Exception):
    """
    Base exception for store errors.

    Raised as-is for unexpected driver failures (the generic, fatal kind).
    Subclasses narrow it down to the recoverable cases.
    """

    # Map canonical error_code -> default HTTP status.
    ERROR_CODE_TO_STATUS = {
        "not_found": 404,
        "validation_failed": 422,
        "duplicate": 409,
        "duplicate_email": 409,
        "invalid_credentials": 401,
        "password_hashing_failed": 500,
        "storage_unavailable": 503,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.

        Standard shape:
            {
                "detail": "A human-friendly message",
                "code": "duplicate_email",     # optional canonical code
                "fields": ["email"],           # optional list for client usage
            }
        `constraint` is intentionally left out of the payload.
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        """
        HTTP status that should accompany this error.
        Unknown or missing codes are server-side failures (500).
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)
        return 500


class NotFoundError(RepositoryError):
    """Lookup target absent or no longer visible (expired)."""

    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class DuplicateError(RepositoryError):
    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str = "duplicate"):
        super().__init__(message, fields=fields, constraint=constraint, error_code=error_code)


class DuplicateEmailError(DuplicateError):
    """A user with this email address already exists."""

    def __init__(self, message: str = "Email address is already in use", *, constraint: str | None = None):
        super().__init__(message, fields=["email"], constraint=constraint, error_code="duplicate_email")


class InvalidCredentialsError(RepositoryError):
    """
    Authentication failed.

    Raised for an unknown email and for a wrong password alike. The message is
    fixed so the two cases cannot be told apart by the caller.
    """

    MESSAGE = "Email or password is incorrect"

    def __init__(self):
        super().__init__(self.MESSAGE, error_code="invalid_credentials")


class PasswordHashingError(RepositoryError):
    """The password hashing primitive rejected its input."""

    def __init__(self, message: str = "Password could not be hashed", *, fields: Iterable[str] | None = ("password",)):
        super().__init__(message, fields=fields, error_code="password_hashing_failed")


class StorageUnavailableError(RepositoryError):
    """Connectivity or driver-level failure; the database could not be reached."""

    def __init__(self, message: str = "Storage is unavailable"):
        super().__init__(message, error_code="storage_unavailable")


class ValidationFailedError(RepositoryError):
    """
    Structured, per-field validation failure produced by a Validator.

    `field_errors` maps a field name to its first error message;
    `non_field_errors` holds form-level messages.
    """

    def __init__(self, field_errors: Mapping[str, str], non_field_errors: Iterable[str] = (),
                 message: str = "Submitted data is invalid"):
        self.field_errors = dict(field_errors)
        self.non_field_errors = list(non_field_errors)
        super().__init__(message, fields=sorted(self.field_errors) or None, error_code="validation_failed")

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["field_errors"] = dict(self.field_errors)
        if self.non_field_errors:
            payload["non_field_errors"] = list(self.non_field_errors)
        return payload


__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "PasswordHashingError",
    "StorageUnavailableError",
    "ValidationFailedError",
]
