"""Secrets capability for the token signing seed.

Anything with a get_auth_key() method can supply the seed. Production reads
it from settings (BOOKSTORE_AUTH_KEY); tests pass a fixed key directly.
"""

from typing import Protocol

from bookstore.core.config import settings


class SecretsProvider(Protocol):
    """Supplies the hex-encoded Ed25519 seed."""

    def get_auth_key(self) -> str: ...


class EnvSecrets:
    """Reads the signing seed from environment-backed settings."""

    def get_auth_key(self) -> str:
        return settings.auth_key.get_secret_value()


class FixedSecrets:
    """Returns a seed given at construction (scripts, tests)."""

    def __init__(self, auth_key: str) -> None:
        self._auth_key = auth_key

    def get_auth_key(self) -> str:
        return self._auth_key
