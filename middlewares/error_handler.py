import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from services.errors import (
    ConflictError, NotFoundError, SchoolError, StoreError, UniquenessConflict, ValidationError,
)

logger = logging.getLogger(__name__)

# 도메인 예외 → HTTP 상태 코드
_STATUS_BY_ERROR = (
    (ValidationError, 422),
    (NotFoundError, 404),
    (ConflictError, 409),
    (UniquenessConflict, 409),
    (StoreError, 503),
)


def _error_response(status_code: int, code: str, message: str, fields=None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, fields=fields or None))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", exclude_none=True))


def add_error_handlers(app: FastAPI):
    @app.exception_handler(SchoolError)
    async def school_error_handler(request: Request, exc: SchoolError):
        status_code = next((s for cls, s in _STATUS_BY_ERROR if isinstance(exc, cls)), 500)
        if status_code >= 500:
            logger.warning("%s %s 실패: %s", request.method, request.url.path, exc.message)
        return _error_response(status_code, exc.code, exc.message, getattr(exc, "fields", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        fields = {}
        for err in exc.errors():
            # ("body", "term") → "term"
            loc = [str(part) for part in err["loc"] if part not in ("body", "query", "path")]
            fields.setdefault(".".join(loc) or "__root__", err["msg"])
        return _error_response(422, ValidationError.code, "입력값이 올바르지 않습니다", fields)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("처리되지 않은 예외: %s %s", request.method, request.url.path)
        return _error_response(500, "INTERNAL_ERROR", str(exc))
