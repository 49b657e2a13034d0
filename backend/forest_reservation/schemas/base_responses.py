"""
Base response schemas for standardized API responses.

Every endpoint answers with the same envelope, success or not:
``{"success": bool, "data": T | null, "message": str}``.
"""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard envelope for all API responses."""

    success: bool = Field(default=True, description="Operation success status")
    data: Optional[T] = Field(default=None, description="Payload, null on failure")
    message: str = Field(default="", description="Human-readable (Korean) message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "data": None,
                "message": "예약이 성공적으로 완료되었습니다.",
            }
        }
    )


def error_envelope(message: str, data: Optional[Any] = None) -> Dict[str, Any]:
    """Body used by the exception handlers."""
    return {"success": False, "data": data, "message": message}
