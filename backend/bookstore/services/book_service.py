"""Book catalog listing."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.errors import InternalError
from bookstore.repositories.book_repository import BookRepository
from bookstore.schemas.order import BookRead

logger = logging.getLogger(__name__)


class BookService:
    """Read-only access to the catalog.

    Args:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_books(self) -> list[BookRead]:
        """Return every book ordered by ID.

        Raises:
            InternalError: Storage failure.
        """
        try:
            books = await BookRepository.list_all(self._db)
        except SQLAlchemyError as exc:
            logger.error("Book listing failed: %s", type(exc).__name__)
            raise InternalError() from exc
        return [BookRead.model_validate(book) for book in books]
