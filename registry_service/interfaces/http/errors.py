"""Сопоставление ошибок предметной области с HTTP-ответами.

Тело ответа всегда ``{"detail": ...}``; для ошибок валидации добавляется
``errors`` со списком всех нарушенных полей. Подробности внутренних ошибок
уходят только в лог.
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ...domain.errors import (
    ConflictError,
    InternalError,
    NotFound,
    RegistryError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

# порядок важен: NotFoundEmpty наследует NotFound
STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (InternalError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: RegistryError) -> int:
    for error_cls, code in STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(code: int, detail: str, errors: list[dict] | None = None) -> JSONResponse:
    body = {"detail": detail}
    if errors is not None:
        body["errors"] = errors
    return JSONResponse(status_code=code, content=body)


def _field_name(loc) -> str:
    # ("body", "email") -> "email", ("query", "pageNumber") -> "pageNumber"
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [{"field": _field_name(e["loc"]), "message": e["msg"]} for e in exc.errors()]
        logger.info("validation_failed", path=request.url.path, fields=[e["field"] for e in errors])
        return error_response(status.HTTP_400_BAD_REQUEST, ValidationError.message, errors)

    @app.exception_handler(RegistryError)
    async def registry_error_handler(request: Request, exc: RegistryError):
        code = status_for(exc)
        if code >= 500:
            return error_response(code, InternalError.message)
        errors = exc.errors if isinstance(exc, ValidationError) else None
        return error_response(code, exc.message, errors)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("unhandled_error", path=request.url.path, method=request.method, exc_info=exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.message)
