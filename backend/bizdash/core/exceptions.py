"""
异常定义与统一错误响应

错误响应体统一为 {"error": str}，可选 {"details": str}。
校验细节只写日志，不返回给调用方。
"""
from enum import Enum
from typing import Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_VALIDATION_ERROR = "Invalid form data. Please check your input."
GENERIC_UNKNOWN_ERROR = "An unexpected error occurred."


class ErrorKind(str, Enum):
    """操作失败类型"""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PERSISTENCE = "persistence"
    UNKNOWN = "unknown"


ERROR_STATUS = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.PERSISTENCE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class RecordNotFound(Exception):
    """记录不存在"""

    def __init__(self, resource: str, record_id: int):
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"{resource} {record_id} not found")


class RecordInUse(Exception):
    """记录仍被销售单引用，禁止删除"""

    def __init__(self, resource: str, record_id: int, reference_count: int):
        self.resource = resource
        self.record_id = record_id
        self.reference_count = reference_count
        super().__init__(
            f"{resource} {record_id} is referenced by {reference_count} sale(s) and cannot be deleted"
        )


class ActionError(Exception):
    """接口层错误，由异常处理器渲染为 {error, details}"""

    def __init__(self, status_code: int, error: str, details: Optional[str] = None):
        self.status_code = status_code
        self.error = error
        self.details = details
        super().__init__(error)

    @classmethod
    def from_kind(cls, kind: ErrorKind, error: str, details: Optional[str] = None) -> "ActionError":
        return cls(ERROR_STATUS.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR), error, details)


def error_body(error: str, details: Optional[str] = None) -> dict:
    body = {"error": error}
    if details:
        body["details"] = details
    return body


async def action_error_handler(request: Request, exc: ActionError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.error, exc.details))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # 请求体不是合法 JSON、查询参数类型错误等
    logger.warning(f"请求参数无效: {request.method} {request.url.path} - {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(GENERIC_VALIDATION_ERROR),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ActionError, action_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
