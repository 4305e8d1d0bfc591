import re

from authgate.errors import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    """Validate email shape and return it trimmed and lower-cased.

    Raises:
        ValidationError: If the value does not look like an email address
    """
    email = email.strip().lower()
    if not EMAIL_RE.fullmatch(email):
        raise ValidationError(f"'{email}' is not a valid email address")
    return email


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - No whitespace characters
    - Minimum length of 8 characters
    - At most 72 bytes once UTF-8 encoded (bcrypt input limit)

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < 8:
        raise ValidationError("Password must be at least 8 characters long")

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

    if any(char.isspace() for char in password):
        raise ValidationError("Password cannot contain whitespace characters")
