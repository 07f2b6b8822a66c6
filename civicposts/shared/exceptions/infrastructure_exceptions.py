"""
Infrastructure Exceptions

Exceptions raised by adapters (CDN, revalidation webhook).
"""


class InfrastructureException(Exception):
    """Base infrastructure exception."""
    pass


class ExternalServiceError(InfrastructureException):
    """An external HTTP service (CDN, revalidation endpoint) failed."""
    pass
