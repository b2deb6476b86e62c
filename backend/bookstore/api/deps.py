"""Shared dependencies for API endpoints.

Authentication: bearer tokens are verified with the issuer stored on
app.state by create_app(); the verified subject (email) is what order
endpoints receive as their tenancy key.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.database import get_db
from bookstore.core.errors import UnauthorizedError
from bookstore.core.tokens import TokenIssuer
from bookstore.services.auth_service import AuthService
from bookstore.services.book_service import BookService
from bookstore.services.order_service import OrderService

# auto_error=False: a missing header must produce our own 401 envelope
_bearer_scheme = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_token_issuer(request: Request) -> TokenIssuer:
    """Return the issuer created once at startup."""
    return request.app.state.token_issuer


Issuer = Annotated[TokenIssuer, Depends(get_token_issuer)]


def get_current_subject(
    issuer: Issuer,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)
    ],
) -> str:
    """Get the authenticated email from the bearer token.

    Validation steps:
    1. Read token from Authorization: Bearer header
    2. Verify EdDSA signature with the public key
    3. Verify iss, nbf, exp claims
    4. Return sub

    Args:
        issuer: Token issuer (injected).
        credentials: Parsed Authorization header, or None.

    Returns:
        Subject email of the verified token.

    Raises:
        UnauthorizedError: 401 for any auth failure, with no detail on why.
    """
    if credentials is None:
        raise UnauthorizedError()
    return issuer.verify(credentials.credentials).subject


CurrentSubject = Annotated[str, Depends(get_current_subject)]


def get_auth_service(db: DbSession, issuer: Issuer) -> AuthService:
    return AuthService(db, issuer)


def get_order_service(db: DbSession) -> OrderService:
    return OrderService(db)


def get_book_service(db: DbSession) -> BookService:
    return BookService(db)


Auth = Annotated[AuthService, Depends(get_auth_service)]
Orders = Annotated[OrderService, Depends(get_order_service)]
Books = Annotated[BookService, Depends(get_book_service)]
