class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when no valid user identity is available."""


class UnauthenticatedError(AuthenticationError):
    """Raised when an operation needs an acting user and there is none."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when an attendance, worker or payroll id does not exist."""


class DataUnavailableError(DomainError):
    """Raised when the roster or attendance history cannot be fetched."""
