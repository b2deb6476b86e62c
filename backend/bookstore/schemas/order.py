"""Order and book schemas.

Request bodies for order creation, plus the read models returned by the
order and book endpoints. OrderDetail is a view assembled from a joined
query, never a table.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Requests
# =============================================================================


class OrderItemRequest(BaseModel):
    """One requested line item.

    Attributes:
        book_id: Book to order.
        quantity: Copies to order. Positivity is enforced by OrderService.
    """

    model_config = ConfigDict(extra="forbid")

    book_id: int
    quantity: int


class CreateOrderRequest(BaseModel):
    """Request body for POST /orders.

    An empty items list is accepted here and rejected by OrderService, so
    the rule holds for every caller, not just HTTP.
    """

    model_config = ConfigDict(extra="forbid")

    items: list[OrderItemRequest] = Field(default_factory=list)


# =============================================================================
# Read models
# =============================================================================


class BookRead(BaseModel):
    """A catalog book."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str


class OrderRead(BaseModel):
    """An order header.

    Attributes:
        id: Order ID.
        user: Owner email.
        date: Creation time.
        status: Order status ("pending").
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    user: str
    date: datetime
    status: str


class OrderItemRead(BaseModel):
    """A line item as returned inside an OrderDetail.

    Attributes:
        id: Item ID.
        user: Owner email (same as the parent order).
        order_id: Parent order ID.
        book_id: Ordered book.
        quantity: Copies ordered.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    user: str
    order_id: int
    book_id: int
    quantity: int


class OrderDetail(OrderRead):
    """An order header with its line items in id order (never empty)."""

    items: list[OrderItemRead] = Field(default_factory=list)
