"""Order models - order headers and line items.

An Order is always created together with at least one OrderItem in a single
transaction, and neither is modified afterwards.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    ForeignKeyConstraint,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.models.base import Base


class OrderStatus(str, Enum):
    """Lifecycle state of an order. Only pending is in use."""

    PENDING = "pending"


class Order(Base):
    """Order header owned by one user.

    Attributes:
        id: Integer primary key (database generated).
        user: Owner email (token subject at creation).
        date: Server time when the creating transaction started.
        status: OrderStatus value.
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    date: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=OrderStatus.PENDING.value,
    )

    __table_args__ = (
        # Target of the composite FK from order_items (order_id, user)
        UniqueConstraint("id", "user", name="uq_orders_id_user"),
        CheckConstraint("status IN ('pending')", name="ck_orders_status"),
    )


class OrderItem(Base):
    """Line item of an order.

    Attributes:
        id: Integer primary key (database generated).
        user: Denormalized owner email; must equal the parent order's user.
        order_id: Parent order.
        book_id: Ordered book.
        quantity: Number of copies, always positive.
    """

    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user: Mapped[str] = mapped_column(String(255), nullable=False)
    order_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("books.id", ondelete="RESTRICT"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        ForeignKeyConstraint(
            ["order_id", "user"],
            ["orders.id", "orders.user"],
            ondelete="CASCADE",
            name="fk_order_items_order_user",
        ),
        CheckConstraint("quantity > 0", name="ck_order_items_quantity"),
    )
