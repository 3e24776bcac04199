from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel

DEFAULT_SUCCESS_MESSAGE = "操作成功"


class ApiResponse(BaseModel):
    success: bool
    data: Optional[Any] = None
    message: str = DEFAULT_SUCCESS_MESSAGE

    @classmethod
    def ok(cls, data: Any = None, message: str = DEFAULT_SUCCESS_MESSAGE) -> "ApiResponse":
        return cls(success=True, data=data, message=message)


class ApiErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: Optional[str] = None
    details: Optional[Any] = None

    @classmethod
    def fail(cls, error: str, code: str | None = None, details: Any = None) -> "ApiErrorResponse":
        return cls(success=False, error=error, code=code, details=details)

    def to_content(self) -> dict[str, Any]:
        # `details` is omitted when empty so failures never carry a stray `data`-like field.
        return self.model_dump(exclude_none=True)
