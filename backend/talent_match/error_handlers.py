from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from talent_match.errors import (
    DuplicateKey,
    ExtractionFailed,
    InsufficientInput,
    ObjectStoreUnavailable,
    TalentMatchError,
)


STATUS_BY_ERROR: dict[type[TalentMatchError], int] = {
    InsufficientInput: status.HTTP_400_BAD_REQUEST,
    DuplicateKey: status.HTTP_409_CONFLICT,
    ExtractionFailed: 422,
    ObjectStoreUnavailable: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def attach_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TalentMatchError)
    async def _domain_error(request: Request, exc: TalentMatchError):
        status_code = next(
            (code for error_type, code in STATUS_BY_ERROR.items() if isinstance(exc, error_type)),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        logger.warning(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}")
        return _error(status_code, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        return _error(422, f"{location}: {message}" if location else message)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or type(exc).__name__)
