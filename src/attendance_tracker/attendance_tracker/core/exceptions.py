class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when a record already exists for the target employee and date."""


class NotFoundError(DomainError):
    """Raised when no record exists for the requested employee and date."""


class InvalidStateError(DomainError):
    """Raised when a transition is not allowed from the record's current state."""


class StorageError(DomainError):
    """Raised when the database fails for reasons unrelated to the input."""
