"""Registration and login.

Orchestrates LoginRepository, the password hasher, and the token issuer.
Stateless per request: the only state is the database row written by
register() and the signed token returned by login_token().

Error precedence (register):
1. Malformed email -> ValidationError
2. Empty or unencodable password -> ValidationError
3. Duplicate email -> ConflictError
Steps 1-2 never touch storage, so a malformed email is always "invalid"
even when a conflicting row exists.

Security (login): unknown email and wrong password raise the identical
UnauthorizedError, and both paths run one full password verification.
"""

import asyncio
import logging

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.errors import (
    ConflictError,
    InternalError,
    UnauthorizedError,
    ValidationError,
)
from bookstore.core.passwords import hash_password, verify_dummy, verify_password
from bookstore.core.tokens import SessionClaims, TokenIssuer
from bookstore.repositories.login_repository import LoginRepository

logger = logging.getLogger(__name__)

_LOGIN_FAILED_MSG = "Invalid email or password"


def _check_email(email: str) -> None:
    # Syntax only: intranet hosts without a dot are accepted
    try:
        validate_email(email, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError as exc:
        raise ValidationError("Invalid email address") from exc


def _check_password(password: str) -> None:
    if not password:
        raise ValidationError("Password is required")
    try:
        password.encode()
    except UnicodeEncodeError as exc:
        raise ValidationError("Password must be valid Unicode text") from exc


class AuthService:
    """Credential registration and login.

    Args:
        db: Async database session.
        token_issuer: Issuer built from the startup signing key.
    """

    def __init__(self, db: AsyncSession, token_issuer: TokenIssuer) -> None:
        self._db = db
        self._token_issuer = token_issuer

    async def register(self, email: str, password: str) -> None:
        """Store a new credential.

        Args:
            email: Email address, stored as given (case-sensitive).
            password: Plain-text password, must be non-empty.

        Raises:
            ValidationError: Malformed email, or empty or unencodable password.
            ConflictError: EMAIL_ALREADY_EXISTS if the email is registered.
            InternalError: Any other storage failure.
        """
        _check_email(email)
        _check_password(password)

        # Argon2id is CPU and memory bound; run it off the event loop
        hash_record = await asyncio.to_thread(hash_password, password)

        try:
            await LoginRepository.create(self._db, email=email, hash_record=hash_record)
            await self._db.commit()
        except IntegrityError as exc:
            await self._db.rollback()
            raise ConflictError(
                code="EMAIL_ALREADY_EXISTS",
                message="Email already registered",
            ) from exc
        except SQLAlchemyError as exc:
            await self._db.rollback()
            logger.error("Credential insert failed: %s", type(exc).__name__)
            raise InternalError() from exc

        logger.info("Registered new user")

    async def login(self, email: str, password: str) -> SessionClaims:
        """Authenticate and build session claims.

        Args:
            email: Email address.
            password: Plain-text password.

        Returns:
            SessionClaims with subject = email.

        Raises:
            UnauthorizedError: Unknown email or wrong password (same error).
            InternalError: Storage failure during lookup.
        """
        try:
            login = await LoginRepository.get_by_email(self._db, email)
        except SQLAlchemyError as exc:
            logger.error("Credential lookup failed: %s", type(exc).__name__)
            raise InternalError() from exc

        if login is None:
            # Security: same KDF cost as a real mismatch
            matched = await asyncio.to_thread(verify_dummy, password)
        else:
            matched = await asyncio.to_thread(verify_password, password, login.hash)

        if login is None or not matched:
            # One message for both causes, logs included
            logger.info("Login rejected")
            raise UnauthorizedError(_LOGIN_FAILED_MSG)

        return self._token_issuer.issue_claims(login.email)

    async def login_token(self, email: str, password: str) -> str:
        """Authenticate and return a signed session token.

        Raises:
            UnauthorizedError: Unknown email or wrong password.
            InternalError: Storage failure during lookup.
        """
        claims = await self.login(email, password)
        return self._token_issuer.sign(claims)
