"""Order creation and listing for an authenticated subject.

The service performs no authentication. Callers must pass ``user`` only as
the subject of a verified session token; it is the tenancy key for every
query and insert.

Order creation is all-or-nothing: header and items are written inside one
transaction, so an order without items is never observable.
"""

import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.database import transaction
from bookstore.core.errors import InternalError, ValidationError
from bookstore.models.order import Order
from bookstore.repositories.order_repository import OrderRepository
from bookstore.schemas.order import OrderDetail, OrderItemRequest

logger = logging.getLogger(__name__)


class OrderService:
    """Create and list orders scoped to one user.

    Args:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def create_order(
        self, user: str, items: Sequence[OrderItemRequest]
    ) -> Order:
        """Create an order with its items in one transaction.

        Args:
            user: Verified token subject (owner email).
            items: Requested items; must be non-empty with positive quantities.

        Returns:
            Persisted Order header with generated id.

        Raises:
            ValidationError: Empty items or non-positive quantity (no storage
                call is made).
            InternalError: Any storage failure; nothing is persisted.
        """
        if not items:
            raise ValidationError("Order must have at least one item")

        bad_quantities = [
            {"loc": ["items", index, "quantity"], "msg": "must be greater than 0"}
            for index, item in enumerate(items)
            if item.quantity <= 0
        ]
        if bad_quantities:
            raise ValidationError("Invalid item quantity", details=bad_quantities)

        try:
            async with transaction(self._db):
                order = await OrderRepository.create_with_items(
                    self._db, user=user, items=items
                )
        except SQLAlchemyError as exc:
            logger.error("Order creation rolled back: %s", type(exc).__name__)
            raise InternalError("Failed to create order") from exc

        logger.info("Created order %s with %d item(s)", order.id, len(items))
        return order

    async def list_orders(self, user: str) -> list[OrderDetail]:
        """List a user's orders with their items, newest first.

        Args:
            user: Verified token subject (owner email).

        Returns:
            OrderDetails; empty list when the user has no orders.

        Raises:
            InternalError: Storage failure.
        """
        try:
            return await OrderRepository.list_by_user(self._db, user)
        except SQLAlchemyError as exc:
            logger.error("Order listing failed: %s", type(exc).__name__)
            raise InternalError() from exc
