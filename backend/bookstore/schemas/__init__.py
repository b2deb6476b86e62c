"""Pydantic request/response schemas for API endpoints."""

from bookstore.schemas.auth import RegisterRequest, RegisterResponse, TokenResponse
from bookstore.schemas.order import (
    BookRead,
    CreateOrderRequest,
    OrderDetail,
    OrderItemRead,
    OrderItemRequest,
    OrderRead,
)

__all__ = [
    # Auth
    "RegisterRequest",
    "RegisterResponse",
    "TokenResponse",
    # Books
    "BookRead",
    # Orders
    "CreateOrderRequest",
    "OrderDetail",
    "OrderItemRead",
    "OrderItemRequest",
    "OrderRead",
]
