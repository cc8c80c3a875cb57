from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AlreadyRegistered(DomainError):
    """The participant already holds a registration for this event."""

    def __init__(self, message: str, registration=None):
        super().__init__(message)
        self.registration = registration


class NotFound(DomainError):
    """No registration matches the requested keys."""


class DecodeError(DomainError):
    """The credential payload is not a well-formed credential."""


class AlreadyMarked(DomainError):
    """An attendance row already exists for this registration."""


class GenerationCollision(DomainError):
    """A freshly generated registration identifier is already taken."""


class StorageUnavailable(DomainError):
    """Transient storage failure. Retry policy belongs to the caller."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""
