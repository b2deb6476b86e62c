"""Repository for orders and their line items.

Writes an order header plus its items in the caller's transaction, and
rebuilds nested OrderDetail views from a single flat join.

Listing is one join query with no relationship() loading. fold_order_rows()
works on any order-clustered row stream, database or not.
"""

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import NamedTuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.models.order import Order, OrderItem, OrderStatus
from bookstore.schemas.order import OrderDetail, OrderItemRead, OrderItemRequest


class OrderRow(NamedTuple):
    """One row of the orders ⋈ order_items join, in select order."""

    order_id: int
    user: str
    date: datetime
    status: str
    item_id: int
    item_user: str
    item_order_id: int
    book_id: int
    quantity: int


def fold_order_rows(rows: Iterable[OrderRow]) -> list[OrderDetail]:
    """Group a flat, order-clustered row stream into OrderDetails.

    A new OrderDetail opens whenever the order id differs from the previous
    row's; every row's item is appended to the currently open detail. Rows
    must arrive with each order's rows contiguous (the join query's ORDER BY
    guarantees this).

    Args:
        rows: Joined rows, clustered by order.

    Returns:
        OrderDetails in stream order. Empty when there are no rows.
    """
    details: list[OrderDetail] = []
    current: OrderDetail | None = None

    for row in rows:
        if current is None or current.id != row.order_id:
            current = OrderDetail(
                id=row.order_id,
                user=row.user,
                date=row.date,
                status=row.status,
            )
            details.append(current)

        current.items.append(
            OrderItemRead(
                id=row.item_id,
                user=row.item_user,
                order_id=row.item_order_id,
                book_id=row.book_id,
                quantity=row.quantity,
            )
        )

    return details


class OrderRepository:
    """Stateless repository for Order/OrderItem operations.

    Static methods only. Pass an AsyncSession
    for every call so the caller controls transaction boundaries.
    """

    @staticmethod
    async def create_with_items(
        db: AsyncSession,
        *,
        user: str,
        items: Sequence[OrderItemRequest],
    ) -> Order:
        """Insert an order header and one row per item.

        Does not commit. Run inside bookstore.core.database.transaction() so a
        failed item insert also discards the header.

        Args:
            db: Async database session.
            user: Owner email, copied onto every item.
            items: Requested items (book_id, quantity).

        Returns:
            Created Order with generated id and server-assigned date.

        Raises:
            sqlalchemy.exc.IntegrityError: On unknown book_id or bad quantity.
        """
        order = Order(user=user, status=OrderStatus.PENDING.value)
        db.add(order)
        await db.flush()
        await db.refresh(order)

        db.add_all(
            [
                OrderItem(
                    user=user,
                    order_id=order.id,
                    book_id=item.book_id,
                    quantity=item.quantity,
                )
                for item in items
            ]
        )
        await db.flush()
        return order

    @staticmethod
    async def list_detail_rows(db: AsyncSession, user: str) -> list[OrderRow]:
        """Fetch all (order, item) rows for a user in one join query.

        Ordered newest order first; id breaks ties between orders created in
        the same instant so each order's rows stay contiguous. Items within
        an order come in id (insertion) order.

        Args:
            db: Async database session.
            user: Owner email.

        Returns:
            Flat rows ready for fold_order_rows().
        """
        stmt = (
            select(
                Order.id,
                Order.user,
                Order.date,
                Order.status,
                OrderItem.id,
                OrderItem.user,
                OrderItem.order_id,
                OrderItem.book_id,
                OrderItem.quantity,
            )
            .join(OrderItem, OrderItem.order_id == Order.id)
            .where(Order.user == user)
            .order_by(Order.date.desc(), Order.id.desc(), OrderItem.id)
        )
        result = await db.execute(stmt)
        return [OrderRow._make(row) for row in result.all()]

    @staticmethod
    async def list_by_user(db: AsyncSession, user: str) -> list[OrderDetail]:
        """Return a user's orders as nested OrderDetails, newest first."""
        rows = await OrderRepository.list_detail_rows(db, user)
        return fold_order_rows(rows)
