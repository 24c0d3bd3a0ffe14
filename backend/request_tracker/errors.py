"""Typed error kinds raised by the core.

The core never builds HTTP responses itself; ``main.py`` maps each kind to a
status code through a single exception handler.
"""


class TrackerError(Exception):
    """Base exception for request tracker errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """Raised when input is malformed or violates a constraint."""

    status_code = 400


class AuthorizationError(TrackerError):
    """Raised when the caller's role or ownership forbids the operation."""

    status_code = 403


class NotFoundError(TrackerError):
    """Raised when a referenced request does not exist."""

    status_code = 404


class ConflictError(TrackerError):
    """Raised by the identity collaborator on duplicate registration."""

    status_code = 409
