"""SQLAlchemy ORM models for the bookstore.

All models are exported from this module for convenient imports:
    from bookstore.models import Login, Book, Order, OrderItem

Models are organized by domain:
- login.py: Login (credentials)
- book.py: Book (read-only catalog)
- order.py: Order, OrderItem, OrderStatus
"""

from bookstore.models.base import Base
from bookstore.models.book import Book
from bookstore.models.login import Login
from bookstore.models.order import Order, OrderItem, OrderStatus

__all__ = [
    "Base",
    "Login",
    "Book",
    "Order",
    "OrderItem",
    "OrderStatus",
]
