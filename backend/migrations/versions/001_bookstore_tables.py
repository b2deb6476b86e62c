"""Create bookstore tables: logins, books, orders, order_items.

Revision ID: 001_bookstore_tables
Revises:
Create Date: 2026-10-18

logins       - one hashed credential per email (email is the primary key)
books        - read-only catalog, seeded below
orders       - order headers, owner email in "user"
order_items  - line items; (order_id, user) must match the parent order
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001_bookstore_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "logins",
        sa.Column("email", sa.String(255), primary_key=True),
        sa.Column("hash", sa.String(255), nullable=False),
    )

    op.create_table(
        "books",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("author", sa.String(200), nullable=False),
    )

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user", sa.String(255), nullable=False),
        sa.Column(
            "date",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("status", sa.String(20), nullable=False),
        sa.UniqueConstraint("id", "user", name="uq_orders_id_user"),
        sa.CheckConstraint("status IN ('pending')", name="ck_orders_status"),
    )
    op.create_index("ix_orders_user", "orders", ["user"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user", sa.String(255), nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=False),
        sa.Column(
            "book_id",
            sa.Integer(),
            sa.ForeignKey("books.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["order_id", "user"],
            ["orders.id", "orders.user"],
            ondelete="CASCADE",
            name="fk_order_items_order_user",
        ),
        sa.CheckConstraint("quantity > 0", name="ck_order_items_quantity"),
    )
    op.create_index("ix_order_items_order_id", "order_items", ["order_id"])

    # Seed catalog
    op.execute(
        """
        INSERT INTO books (title, author) VALUES
            ('The Pragmatic Programmer', 'Andrew Hunt'),
            ('Designing Data-Intensive Applications', 'Martin Kleppmann'),
            ('Structure and Interpretation of Computer Programs', 'Harold Abelson')
        """
    )


def downgrade() -> None:
    op.drop_index("ix_order_items_order_id", table_name="order_items")
    op.drop_table("order_items")
    op.drop_index("ix_orders_user", table_name="orders")
    op.drop_table("orders")
    op.drop_table("books")
    op.drop_table("logins")
