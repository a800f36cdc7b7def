from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a user tries to access a resource they do not have permission for."""


class ValidationError(UserError):
    """Raised when user input fails validation."""


class PersistenceError(UserError):
    """Raised when a write to the database fails.

    The message is a generic "Could not ..." sentence; the underlying
    driver error is logged, never shown.
    """


class InvalidSessionError(Exception):
    """Raised when a session token cannot be verified.

    Not a UserError: callers map it to a redirect, it never reaches the client.
    """
