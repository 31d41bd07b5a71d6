from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when the session cookie does not authenticate the request.

    `reason` is the machine-readable cause (usually a CookieError value) and
    `requires_reauth` tells the client to go through Discord login again.
    """

    def __init__(
        self, message: str = "Authentication required", reason: str | None = None, requires_reauth: bool = True
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.requires_reauth = requires_reauth


class ValidationError(UserError):
    """Raised when user input fails validation."""


class ConfigurationError(Exception):
    """Raised at startup when the session configuration is unusable."""
