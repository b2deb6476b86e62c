"""Book model - read-only catalog.

Rows are seeded by migration; the API only lists them.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.models.base import Base


class Book(Base):
    """A book that can be ordered.

    Attributes:
        id: Integer primary key.
        title: Book title.
        author: Author name.
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(200), nullable=False)
