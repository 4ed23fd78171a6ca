class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class BatchError(ValidationError):
    """Raised when an attendance batch is empty or mixes (date, class) keys."""


class UnknownStatusError(ValidationError):
    """Raised when a record carries a status outside present/absent/late."""


class NotFoundError(DomainError):
    """Raised when a referenced class or student does not exist."""
