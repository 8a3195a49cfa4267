"""Interface layer errors and HTTP mapping."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import logfire

from portal.domain.error import (
    AlreadyRegisteredError,
    AlreadyVotedError,
    ConflictError,
    DomainError,
    NotFoundError,
    StoreError,
    ToggleInProgressError,
    UnauthenticatedError,
    ValidationError,
)


# Order matters: subclasses before their bases
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AlreadyVotedError, status.HTTP_409_CONFLICT),
    (AlreadyRegisteredError, status.HTTP_409_CONFLICT),
    (ToggleInProgressError, status.HTTP_409_CONFLICT),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
]


def status_for(error: DomainError) -> int:
    """Map a domain error to an HTTP status code."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def register_error_handlers(app: FastAPI) -> None:
    """Render domain errors as JSON responses with a ``detail`` message."""

    @app.exception_handler(DomainError)
    async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
        code = status_for(exc)
        logfire.info(
            "Request failed",
            path=request.url.path,
            error_type=type(exc).__name__,
            status_code=code,
        )
        return JSONResponse(status_code=code, content={"detail": str(exc)})
