"""Book catalog endpoint (authenticated, read-only)."""

from fastapi import APIRouter

from bookstore.api.deps import Books, CurrentSubject
from bookstore.core.responses import DataResponse
from bookstore.schemas.order import BookRead

router = APIRouter()


@router.get("/books")
async def list_books(
    _subject: CurrentSubject,
    books: Books,
) -> DataResponse[list[BookRead]]:
    """List every book in the catalog."""
    return DataResponse(data=await books.list_books())
