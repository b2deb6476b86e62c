"""Order endpoints.

All routes require a bearer token. The token subject is the only source of
the owning user; it is never read from the request body.
"""

from fastapi import APIRouter

from bookstore.api.deps import CurrentSubject, Orders
from bookstore.core.responses import DataResponse
from bookstore.schemas.order import CreateOrderRequest, OrderDetail, OrderRead

router = APIRouter()


@router.get("/orders")
async def list_orders(
    subject: CurrentSubject,
    orders: Orders,
) -> DataResponse[list[OrderDetail]]:
    """List the caller's orders with items, newest first."""
    return DataResponse(data=await orders.list_orders(subject))


@router.post("/orders", status_code=201)
async def create_order(
    body: CreateOrderRequest,
    subject: CurrentSubject,
    orders: Orders,
) -> DataResponse[OrderRead]:
    """Create an order for the caller.

    400 when items is empty or a quantity is not positive.
    """
    order = await orders.create_order(subject, body.items)
    return DataResponse(data=OrderRead.model_validate(order))
