"""Exception handlers that keep every error body in the ``{"error": ...}`` shape."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from tripmatch.exceptions import SearchError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = SearchError.default_message


async def search_error_handler(request: Request, exc: SearchError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {type(exc).__name__}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR_MESSAGE},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SearchError, search_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
