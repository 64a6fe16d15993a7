from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-facing errors.

    All errors that inherit from UserError will have their messages
    returned to the client in the response envelope. These errors should
    not contain any sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Record not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when a request cannot be tied to an active user."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class UpstreamError(UserError):
    """Raised when a third-party service answers with an error or cannot be reached."""
