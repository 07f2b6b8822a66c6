"""Shared exception hierarchy."""

from .domain_exceptions import (
    AccessDeniedError,
    DomainException,
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
)
from .infrastructure_exceptions import (
    ExternalServiceError,
    InfrastructureException,
)

__all__ = [
    "DomainException",
    "DomainValidationError",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "AccessDeniedError",
    "InfrastructureException",
    "ExternalServiceError",
]
