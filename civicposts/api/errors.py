"""
Mapping of domain exceptions to HTTP responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from civicposts.shared.exceptions.domain_exceptions import (
    AccessDeniedError,
    DomainException,
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
)
from civicposts.shared.exceptions.infrastructure_exceptions import InfrastructureException

logger = logging.getLogger(__name__)

STATUS_CODES = {
    DomainValidationError: 400,
    EntityNotFoundError: 404,
    DuplicateEntityError: 409,
    AccessDeniedError: 403,
}


def status_code_for(exc: DomainException) -> int:
    for exc_type in type(exc).__mro__:
        if exc_type in STATUS_CODES:
            return STATUS_CODES[exc_type]
    return 400


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    return JSONResponse(status_code=status_code_for(exc), content={"detail": str(exc)})


async def infrastructure_exception_handler(request: Request, exc: InfrastructureException) -> JSONResponse:
    logger.error(f"[API] {request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Service temporarily unavailable"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(InfrastructureException, infrastructure_exception_handler)
