"""
Exception handlers translating failures into JSON error responses.

Every error body has the shape {"message": "..."}. Store failures of any
kind are reported as 500, including client-caused ones such as a
malformed id or a missing record.
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models import ErrorResponse
from store.exceptions import BookStoreError

logger = structlog.get_logger(__name__)

NOT_FOUND = "Not Found"
INVALID_BODY = "Invalid Body"
METHOD_NOT_ALLOWED = "Method not allowed"
INTERNAL_SERVER_ERROR = "Internal Server Error"


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    """Build a JSON error response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle routing failures and explicit HTTP exceptions."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(exc.status_code, NOT_FOUND)
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return error_response(exc.status_code, METHOD_NOT_ALLOWED, headers=exc.headers)
    if exc.status_code == status.HTTP_400_BAD_REQUEST:
        # Body decoding failures other than malformed JSON, e.g. invalid UTF-8
        return error_response(exc.status_code, INVALID_BODY)

    logger.error("Unexpected HTTP exception", status_code=exc.status_code, detail=str(exc.detail))
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request bodies that fail to parse."""
    logger.info("Rejected request body", errors=len(exc.errors()))
    return error_response(status.HTTP_400_BAD_REQUEST, INVALID_BODY)


async def store_exception_handler(request: Request, exc: BookStoreError):
    """Handle book store failures."""
    logger.error("Book store error", kind=type(exc).__name__, error=exc.message)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR)


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        method=request.method,
        path=request.url.path
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error translation handlers on an application."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(BookStoreError, store_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
