"""
Domain Exceptions

Exceptions raised by the domain and application layers. The API layer maps
each class to an HTTP status, so callers can tell "not found" apart from
"validation failed" and "access denied".
"""


class DomainException(Exception):
    """Base domain exception."""
    pass


class DomainValidationError(DomainException):
    """An entity or command failed validation."""
    pass


class EntityNotFoundError(DomainException):
    """The requested entity does not exist."""
    pass


class DuplicateEntityError(DomainException):
    """A unique field (slug, email) is already taken."""
    pass


class AccessDeniedError(DomainException):
    """The acting identity may not touch this entity."""
    pass
