"""Interface layer error handling.

Maps domain errors raised by use cases onto HTTP responses.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from townhall.domain.error import (
    ConflictError,
    DomainError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

# Most specific first; DomainError catches the rest
STATUS_CODES: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (ValidationError, 422),
    (ConflictError, status.HTTP_409_CONFLICT),
    (DomainError, status.HTTP_400_BAD_REQUEST),
]


def status_code_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    for error_type, code in STATUS_CODES:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as a JSON error response."""
    code = status_code_for(exc)
    if code == status.HTTP_409_CONFLICT:
        logfire.warn("Request conflicted", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=code, content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Register domain error handlers on the application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
