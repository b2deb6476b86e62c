"""Response envelope models.

Successful responses are {"data": ...}; failures are
{"error": {"code", "message", "details"}}. Clients tell them apart by the
top-level key alone.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

from bookstore.core.errors import APIError

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Success envelope for single resources and collections.

    Usage:
        @router.get("/orders")
        async def list_orders(...) -> DataResponse[list[OrderDetail]]:
            return DataResponse(data=await service.list_orders(subject))
    """

    data: T


class ErrorDetail(BaseModel):
    """Body of the error envelope.

    Attributes:
        code: Machine-readable error code (e.g., "UNAUTHORIZED").
        message: Human-readable error message.
        details: Field-level errors, only for validation failures.
    """

    code: str
    message: str
    details: list[dict] | None = None


class ErrorResponse(BaseModel):
    """Failure envelope."""

    error: ErrorDetail

    @classmethod
    def from_error(cls, exc: APIError) -> "ErrorResponse":
        return cls(
            error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details)
        )
