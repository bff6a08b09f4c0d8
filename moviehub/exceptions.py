from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from pymongo.errors import PyMongoError
import logging

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all exception handler.
    Returns 500 JSON response and hides internal error details.
    """
    request_id = _request_id(request)

    logger.error(
        "Unhandled exception occurred",
        extra={"request_id": request_id, "path": request.url.path},
        exc_info=exc
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred. Please contact support.",
            "request_id": request_id
        },
    )


async def store_exception_handler(request: Request, exc: PyMongoError):
    """
    Document store failures (connection refused, timeouts, ...).
    Logged with traceback, surfaced as an opaque 503. Never retried here.
    """
    request_id = _request_id(request)

    logger.error(
        "Document store error",
        extra={"request_id": request_id, "path": request.url.path},
        exc_info=exc
    )

    return JSONResponse(
        status_code=503,
        content={
            "error": "Service Unavailable",
            "message": "The data store is temporarily unavailable.",
            "request_id": request_id
        },
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Handle standard FastAPI HTTPExceptions.
    """
    request_id = _request_id(request)

    # Log 5xx errors as errors, 4xx as info
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code} error", extra={"request_id": request_id, "detail": exc.detail})
    else:
        logger.info(f"HTTP {exc.status_code} error", extra={"request_id": request_id, "detail": exc.detail})

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "request_id": request_id},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle Pydantic validation errors.
    """
    request_id = _request_id(request)
    logger.info("Validation error", extra={"request_id": request_id, "detail": str(exc.errors())})

    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation Error",
            "details": jsonable_encoder(exc.errors()),
            "request_id": request_id
        },
    )
