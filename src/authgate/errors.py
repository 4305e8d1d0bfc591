from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """

    error_type: str | None = None  # Stable machine-readable kind, overrides the category default


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class AccountNotFoundError(NotFoundError):
    """No account is registered for the given email or id."""

    error_type = "account_not_found"

    def __init__(self, message: str = "account not found or has been deleted") -> None:
        super().__init__(message)


class AccountInvalidError(NotFoundError):
    """The account has no pending verification token."""

    error_type = "account_invalid"

    def __init__(self, message: str = "account not valid or has been deleted") -> None:
        super().__init__(message)


class SessionNotFoundError(NotFoundError):
    """No live session matches the presented user and access token."""

    error_type = "session_not_found"

    def __init__(self, message: str = "the login session has ended, please login again") -> None:
        super().__init__(message)


class DuplicateEmailError(ValidationError):
    error_type = "duplicate_email"

    def __init__(self, email: str) -> None:
        super().__init__(f"email '{email}' is already registered")


class InvalidCredentialsError(ValidationError):
    error_type = "invalid_credentials"

    def __init__(self, message: str = "incorrect email or password!") -> None:
        super().__init__(message)


class AccountNotVerifiedError(ValidationError):
    error_type = "account_not_verified"

    def __init__(
        self,
        message: str = "please check your email account to verify your email and continue the registration process.",
    ) -> None:
        super().__init__(message)


class InvalidVerificationError(ValidationError):
    error_type = "invalid_verification"

    def __init__(self, message: str = "Invalid token & mail combination.") -> None:
        super().__init__(message)


class UnauthorizedError(AuthenticationError):
    """The verified token belongs to a different user than the one addressed."""

    error_type = "unauthorized"

    def __init__(self, message: str = "Invalid user login!") -> None:
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Token signature, shape or expiry check failed."""

    error_type = "invalid_token"

    def __init__(self, message: str = "token is invalid or has expired") -> None:
        super().__init__(message)
