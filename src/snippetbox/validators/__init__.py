from .forms import (
    EMAIL_RX,
    Validator,
    not_blank,
    max_chars,
    min_chars,
    permitted_value,
    matches,
    validate_snippet_create,
    validate_user_signup,
    validate_user_login,
)

__all__ = [
    "EMAIL_RX",
    "Validator",
    "not_blank",
    "max_chars",
    "min_chars",
    "permitted_value",
    "matches",
    "validate_snippet_create",
    "validate_user_signup",
    "validate_user_login",
]
