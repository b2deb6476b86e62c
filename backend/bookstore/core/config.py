"""Bookstore settings.

Every value comes from a BOOKSTORE_-prefixed environment variable (or .env),
e.g. BOOKSTORE_DATABASE_HOST, BOOKSTORE_AUTH_KEY, BOOKSTORE_BASE_PATH.
"""

import re

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Development-only password; refused when environment == "production"
_DEV_DB_PASSWORD = "bookstore_dev_password"  # nosec B105

# Ed25519 seeds are 32 bytes, hex-encoded
_AUTH_KEY_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")


class Settings(BaseSettings):
    """Process-wide configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BOOKSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # PostgreSQL
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = "bookstore"
    database_user: str = "bookstore_user"
    database_password: str = _DEV_DB_PASSWORD

    # HTTP server (0.0.0.0 so the API is reachable inside a container)
    api_host: str = "0.0.0.0"  # nosec B104
    api_port: int = 8000
    # Mounted after /v1, e.g. "/store" serves /v1/store/orders
    base_path: str = ""

    environment: str = "development"
    log_level: str = "INFO"

    # Hex-encoded 32-byte Ed25519 seed.
    # Generate with: python -c "import secrets; print(secrets.token_hex(32))"
    auth_key: SecretStr = SecretStr("")

    @property
    def database_url(self) -> str:
        """asyncpg URL for the SQLAlchemy engine."""
        return (
            f"postgresql+asyncpg://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @field_validator("base_path")
    @classmethod
    def _absolute_base_path(cls, value: str) -> str:
        if value and not value.startswith("/"):
            msg = f"BASE_PATH must start with '/'. Got: {value!r}"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def check_production_security(self) -> "Settings":
        """Refuse development credentials in production.

        Raises:
            ValueError: Default database password, or an auth key that is
                not 64 hex characters.
        """
        if self.environment != "production":
            return self

        if self.database_password == _DEV_DB_PASSWORD:
            msg = (
                "Cannot use default database password in production. "
                "Set BOOKSTORE_DATABASE_PASSWORD."
            )
            raise ValueError(msg)

        if not _AUTH_KEY_PATTERN.match(self.auth_key.get_secret_value()):
            msg = (
                "BOOKSTORE_AUTH_KEY must be 64 hex characters in production. "
                'Generate with: python -c "import secrets; '
                'print(secrets.token_hex(32))"'
            )
            raise ValueError(msg)

        return self


settings = Settings()
