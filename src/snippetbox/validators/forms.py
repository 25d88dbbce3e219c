"""
Field validation for submitted forms.

A `Validator` collects per-field error messages; the rule functions below are pure
predicates that callers feed into `check_field`:

    v = Validator()
    v.check_field(not_blank(title), "title", "This field cannot be blank")
    v.check_field(max_chars(title, 100), "title", "This field cannot be more than 100 characters long")
    if not v.valid():
        ...  # re-present v.field_errors to the user

Only the first failure per field is kept, so ordering the checks from the most
basic to the most specific decides which message the user sees.

Use a fresh Validator per request/form.
"""
import re
from typing import Any, Pattern

from snippetbox.exceptions.base import ValidationFailedError

# Same pattern the W3C recommends for <input type="email">.
EMAIL_RX: Pattern[str] = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

PERMITTED_EXPIRY_DAYS = (1, 7, 365)
TITLE_MAX_CHARS = 100
PASSWORD_MIN_CHARS = 8

BLANK_MESSAGE = "This field cannot be blank"


class Validator:
    """Accumulates field-keyed error messages for one form."""

    def __init__(self):
        self.field_errors: dict[str, str] = {}
        self.non_field_errors: list[str] = []

    def valid(self) -> bool:
        return not self.field_errors and not self.non_field_errors

    def add_field_error(self, field: str, message: str) -> None:
        # first failure wins; later messages for the same field are dropped
        if field not in self.field_errors:
            self.field_errors[field] = message

    def add_non_field_error(self, message: str) -> None:
        self.non_field_errors.append(message)

    def check_field(self, ok: bool, field: str, message: str) -> None:
        if not ok:
            self.add_field_error(field, message)

    def raise_if_invalid(self) -> None:
        """Raise ValidationFailedError carrying a copy of the collected errors."""
        if not self.valid():
            raise ValidationFailedError(self.field_errors, self.non_field_errors)


# -----------------------
# Rules
# -----------------------

def not_blank(value: str) -> bool:
    return value.strip() != ""


def max_chars(value: str, n: int) -> bool:
    # len() counts code points, not bytes
    return len(value) <= n


def min_chars(value: str, n: int) -> bool:
    return len(value) >= n


def permitted_value(value: Any, *permitted: Any) -> bool:
    return value in permitted


def matches(value: str, rx: Pattern[str]) -> bool:
    return rx.match(value) is not None


# -----------------------
# Form checks
# -----------------------

def validate_snippet_create(title: str, content: str, expires: int) -> Validator:
    v = Validator()
    v.check_field(not_blank(title), "title", BLANK_MESSAGE)
    v.check_field(max_chars(title, TITLE_MAX_CHARS), "title",
                  f"This field cannot be more than {TITLE_MAX_CHARS} characters long")
    v.check_field(not_blank(content), "content", BLANK_MESSAGE)
    v.check_field(permitted_value(expires, *PERMITTED_EXPIRY_DAYS), "expires", "This field must equal 1, 7 or 365")
    return v


def validate_user_signup(name: str, email: str, password: str) -> Validator:
    v = Validator()
    v.check_field(not_blank(name), "name", BLANK_MESSAGE)
    v.check_field(not_blank(email), "email", BLANK_MESSAGE)
    v.check_field(matches(email, EMAIL_RX), "email", "This field must be a valid email address")
    v.check_field(not_blank(password), "password", BLANK_MESSAGE)
    v.check_field(min_chars(password, PASSWORD_MIN_CHARS), "password",
                  f"This field must be at least {PASSWORD_MIN_CHARS} characters long")
    return v


def validate_user_login(email: str, password: str) -> Validator:
    v = Validator()
    v.check_field(not_blank(email), "email", BLANK_MESSAGE)
    v.check_field(matches(email, EMAIL_RX), "email", "This field must be a valid email address")
    v.check_field(not_blank(password), "password", BLANK_MESSAGE)
    return v
