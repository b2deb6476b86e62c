"""Repository for the read-only book catalog."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.models.book import Book


class BookRepository:
    """Stateless repository for Book table reads."""

    @staticmethod
    async def list_all(db: AsyncSession) -> list[Book]:
        """Return every book ordered by ID."""
        result = await db.execute(select(Book).order_by(Book.id))
        return list(result.scalars().all())
