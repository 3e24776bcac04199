from __future__ import annotations

import logging
import traceback
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.requests import Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from kennel.common.responses import ApiErrorResponse
from kennel.common.request_context import get_request_id

_HTTP_STATUS_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    413: "PAYLOAD_TOO_LARGE",
    415: "UNSUPPORTED_MEDIA_TYPE",
}


class ApiException(StarletteHTTPException):
    def __init__(
        self,
        status_code: int = 400,
        code: str = "BAD_REQUEST",
        message: str = "Bad Request",
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.code = code
        self.message = message
        self.details = details


class AuthorizationError(ApiException):
    """Missing or invalid bearer credential."""

    def __init__(self, message: str = "需要登入") -> None:
        super().__init__(status_code=401, code="UNAUTHORIZED", message=message)


class DataAccessError(Exception):
    """An operation against the backing store failed."""


def validation_error(details: Any, message: str = "資料驗證失敗") -> ApiException:
    return ApiException(status_code=400, code="VALIDATION_ERROR", message=message, details=details)


def not_found(code: str, message: str) -> ApiException:
    return ApiException(status_code=404, code=code, message=message)


def _simplify_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    # `ctx` may hold exception instances that JSON cannot encode.
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in errors
    ]


def register_exception_handlers(app: FastAPI, *, debug: bool = False) -> None:
    logger = logging.getLogger(__name__)

    @app.exception_handler(ApiException)
    async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
        request_id = get_request_id() or getattr(request.state, "request_id", None)
        logger.warning(
            "api_exception request_id=%s method=%s path=%s status=%s code=%s message=%s",
            request_id,
            request.method,
            request.url.path,
            exc.status_code,
            exc.code,
            exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=ApiErrorResponse.fail(error=exc.message, code=exc.code, details=exc.details).to_content(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        request_id = get_request_id() or getattr(request.state, "request_id", None)
        details = _simplify_validation_errors(list(exc.errors()))
        logger.warning(
            "validation_error request_id=%s method=%s path=%s errors=%s",
            request_id,
            request.method,
            request.url.path,
            details,
        )
        return JSONResponse(
            status_code=400,
            content=ApiErrorResponse.fail(
                error="資料驗證失敗",
                code="VALIDATION_ERROR",
                details=details,
            ).to_content(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = str(exc.detail) if exc.detail is not None else "HTTP Error"
        request_id = get_request_id() or getattr(request.state, "request_id", None)
        logger.warning(
            "http_exception request_id=%s method=%s path=%s status=%s message=%s",
            request_id,
            request.method,
            request.url.path,
            exc.status_code,
            message,
        )
        code = _HTTP_STATUS_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")
        return JSONResponse(
            status_code=exc.status_code,
            content=ApiErrorResponse.fail(error=message, code=code).to_content(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        request_id = get_request_id() or getattr(request.state, "request_id", None)
        logger.warning(
            "integrity_error request_id=%s method=%s path=%s error=%s",
            request_id,
            request.method,
            request.url.path,
            exc.orig,
        )
        return JSONResponse(
            status_code=409,
            content=ApiErrorResponse.fail(error="資源已存在", code="DUPLICATE_RESOURCE").to_content(),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        request_id = get_request_id() or getattr(request.state, "request_id", None)
        logger.exception(
            "database_error request_id=%s method=%s path=%s",
            request_id,
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=ApiErrorResponse.fail(error="資料庫操作失敗", code="DATABASE_ERROR").to_content(),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = get_request_id() or getattr(request.state, "request_id", None)
        logger.exception(
            "unhandled_exception request_id=%s method=%s path=%s",
            request_id,
            request.method,
            request.url.path,
        )
        details: Any | None = None
        if debug:
            details = {
                "requestId": request_id,
                "type": exc.__class__.__name__,
                "message": str(exc),
                "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            }
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=ApiErrorResponse.fail(
                error="Internal Server Error",
                code="INTERNAL_ERROR",
                details=details,
            ).to_content(),
        )
