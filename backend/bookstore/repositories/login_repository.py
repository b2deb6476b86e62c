"""Repository for stored credentials.

Provides database access for the logins table. Email uniqueness is enforced
by the table's primary key, not by a read-before-write check.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.models.login import Login


class LoginRepository:
    """Stateless repository for Login table operations.

    Static methods only. Pass an AsyncSession
    for every call so the caller controls transaction boundaries.
    """

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Login | None:
        """Fetch a credential by email (exact, case-sensitive match).

        Args:
            db: Async database session.
            email: Email address to look up.

        Returns:
            Login if found, None otherwise.
        """
        stmt = select(Login).where(Login.email == email)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(db: AsyncSession, *, email: str, hash_record: str) -> Login:
        """Insert a credential.

        Args:
            db: Async database session.
            email: Email address, stored as given.
            hash_record: Output of hash_password().

        Returns:
            Created Login.

        Raises:
            sqlalchemy.exc.IntegrityError: If email already exists.
        """
        login = Login(email=email, hash=hash_record)
        db.add(login)
        await db.flush()
        return login
