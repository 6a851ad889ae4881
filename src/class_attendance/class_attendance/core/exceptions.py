class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an edit/delete target no longer exists."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""
