"""Standard single-object response envelope.

    {"success": <bool>, "message": <str>, "data": <object|null>, "errors": <list|null>}

Paginated endpoints return ``PaginatedResponse`` from
``stockapi.schemas.pagination`` instead.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    message: str = ""
    data: Optional[T] = None
    errors: Optional[List[str]] = None

    @classmethod
    def ok(cls, data: T, message: str = "Operation completed successfully") -> "ApiResponse[T]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, errors: Optional[List[str]] = None) -> "ApiResponse[T]":
        return cls(success=False, message=message, errors=errors)
