from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
import logging

logger = logging.getLogger("wander_ledger.errors")


class StorageError(Exception):
    """Raised by persistence backends when a read or write cannot complete."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


def http_error_handler(request: Request, exc):  # type: ignore
    detail = getattr(exc, "detail", None)
    if exc.status_code != status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "http_error", "detail": detail},
        )
    if not detail or detail == "Not Found":
        detail = f"No route for {request.method} {request.url.path}"
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "not_found", "detail": detail},
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def storage_error_handler(request: Request, exc: StorageError):  # type: ignore
    logger.error("storage failure: %s", exc, extra={"storage_key": exc.key})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "error": "storage_unavailable",
            "detail": "The operation could not be saved. Please try again.",
        },
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
