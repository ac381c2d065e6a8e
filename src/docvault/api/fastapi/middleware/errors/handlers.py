from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from docvault.exceptions import DocVaultError

logger = logging.getLogger(__name__)


def envelope(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


async def _docvault_error_handler(request: Request, exc: DocVaultError) -> JSONResponse:
    extra = {"http_method": request.method, "path": request.url.path, "status_code": exc.status_code}
    if exc.status_code >= 500:
        cause = exc.__cause__
        logger.error(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
            + (f" (caused by {type(cause).__name__}: {cause})" if cause else ""),
            extra=extra,
        )
    else:
        logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}", extra=extra)
    return envelope(exc.status_code, exc.message)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected malformed request on %s: %s", request.url.path, exc.errors())
    return envelope(400, "Invalid request")


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) and exc.status_code < 500 else "Internal server error"
    return envelope(exc.status_code, message, headers=getattr(exc, "headers", None))


def register_error_handlers(app: FastAPI) -> None:
    """Translate every known failure into the ``{success, message}`` envelope."""
    app.add_exception_handler(DocVaultError, _docvault_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
