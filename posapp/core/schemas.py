from typing import Any, Dict, Generic, List, Optional, TypeVar
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from fastapi.responses import JSONResponse

T = TypeVar("T")


class Meta(BaseModel):
    code: int
    status: str
    message: str


class ErrorInfo(BaseModel):
    code: str
    msg: str
    field: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class ApiResponse(BaseModel, Generic[T]):
    """Response envelope shared by every tenant endpoint."""

    meta: Meta
    data: Optional[T] = None
    errors: List[ErrorInfo] = []
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with JSON-serializable values."""
        return self.model_dump(mode="json")

    @classmethod
    def ok(cls, data: Any, message: str = "Success", code: int = 200) -> "ApiResponse[T]":
        return cls(meta=Meta(code=code, status="success", message=message), data=data)

    @classmethod
    def fail(cls, message: str, code: int, errors: Optional[List[ErrorInfo]] = None) -> "ApiResponse[T]":
        return cls(meta=Meta(code=code, status="error", message=message), errors=errors or [])


def json_response(data: Any = None, message: str = "Success", status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse.ok(data, message=message, code=status_code).to_dict(),
    )
