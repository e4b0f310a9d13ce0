import logging
from contextlib import contextmanager
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

log = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base error turned into a `{success: false}` envelope."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error or message


class InvalidArgument(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class DatabaseError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_envelope(message: str, error: str) -> dict:
    return {"success": False, "message": message, "error": error}


@contextmanager
def database_errors(message: str):
    """Wrap database failures raised inside the block into a DatabaseError."""
    try:
        yield
    except SQLAlchemyError as exc:
        log.exception("%s", message)
        raise DatabaseError(message, error=str(exc)) from exc


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.message, exc.error)
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"] if part != "body")
        details.append(f"{field}: {err['msg']}" if field else err["msg"])
    log.info("Rejected %s %s: %s", request.method, request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope("Invalid request", "; ".join(details))
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope("Internal server error", str(exc) or type(exc).__name__)
    )
