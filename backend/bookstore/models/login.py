"""Login model - stored credentials.

One row per registered email. Rows are inserted on registration and never
updated.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.models.base import Base


class Login(Base):
    """Hashed credential for one email address.

    Attributes:
        email: Primary key. Case-sensitive; stored exactly as registered.
        hash: Opaque record from bookstore.core.passwords.hash_password().
    """

    __tablename__ = "logins"

    email: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
    )
    hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
