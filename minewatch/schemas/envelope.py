from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from minewatch.domain.equipment import utcnow


class ApiResponse(BaseModel):
    success: bool = True
    message: str
    data: Optional[Any] = None
    metadata: Optional[Dict[str, Any]] = None
    timestamp: datetime = Field(default_factory=utcnow)


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: List[str] = []
    timestamp: datetime = Field(default_factory=utcnow)


def ok(message: str, data: Any = None, metadata: Optional[Dict[str, Any]] = None) -> ApiResponse:
    return ApiResponse(message=message, data=data, metadata=metadata)
