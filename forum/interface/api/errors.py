"""Exception handlers mapping domain errors to HTTP responses.

Every error response has the same shape:

    {"kind": "<stable error kind>", "detail": "<human readable message>"}
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from forum.domain.error import (
    DomainError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    StoreUnavailableError,
    TargetNotFoundError,
    UnauthenticatedError,
    VoteConflictError,
)

# Checked in order, so subclasses must come before their bases
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (TargetNotFoundError, status.HTTP_404_NOT_FOUND),
    (VoteConflictError, status.HTTP_409_CONFLICT),
    # A vote vanishing mid-cast is normally retried; if it escapes it is a conflict
    (NotFoundError, status.HTTP_409_CONFLICT),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


INTERNAL_ERROR_KIND = "internal_error"


def error_body(kind: str, detail: str) -> dict[str, str]:
    return {"kind": kind, "detail": detail}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error."""
    status_code = status_for(exc)
    if status_code >= 500:
        logfire.error(
            "Unhandled domain error",
            kind=exc.kind,
            error=str(exc),
            path=request.url.path,
            _exc_info=exc,
        )
        detail = "Internal server error"
    else:
        logfire.info(
            "Request rejected",
            kind=exc.kind,
            status_code=status_code,
            path=request.url.path,
        )
        detail = str(exc)

    return JSONResponse(status_code=status_code, content=error_body(exc.kind, detail))


async def store_unavailable_handler(
    request: Request, exc: StoreUnavailableError
) -> JSONResponse:
    """Render a store failure without leaking driver details."""
    logfire.error(
        "Store unavailable",
        error=str(exc.__cause__ or exc),
        path=request.url.path,
        _exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(StoreUnavailableError.kind, "Internal server error"),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any other failure as an opaque internal error."""
    logfire.error(
        "Unhandled error",
        error_type=type(exc).__name__,
        error=str(exc),
        path=request.url.path,
        _exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(INTERNAL_ERROR_KIND, "Internal server error"),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as invalid input (400, not 422)."""
    messages = []
    for error in exc.errors():
        # Drop the leading "body"/"path"/"header" segment
        field = ".".join(str(part) for part in error["loc"][1:])
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(InvalidInputError.kind, "; ".join(messages)),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on an application."""
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
