"""Session token issuance and verification.

Tokens are compact EdDSA (Ed25519) JWTs carrying exactly five claims:
iss, sub, iat, nbf, exp. They are stateless bearer tokens valid for 24 hours;
there is no server-side session table.

Pipeline:
- SigningKeyPair.from_seed_hex: derive the key pair once at startup
- TokenIssuer.issue_claims / sign: build and sign claims after login
- TokenVerifier.verify: check signature, issuer, nbf, exp (public key only)

Security: every verification failure raises the same UnauthorizedError.
The specific reason is only logged at debug level.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from bookstore.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

TOKEN_ISSUER = "gotu"
TOKEN_LIFETIME = timedelta(hours=24)

_ALGORITHM = "EdDSA"
_SEED_LENGTH = 32
_REQUIRED_CLAIMS = ["iss", "sub", "iat", "nbf", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class SigningKeyPair:
    """Ed25519 key pair derived deterministically from a 32-byte seed.

    Attributes:
        private_key: Signing half. Never leaves the issuer.
        public_key: Verification half.
    """

    private_key: Ed25519PrivateKey = field(repr=False)
    public_key: Ed25519PublicKey

    @classmethod
    def from_seed_hex(cls, seed_hex: str) -> "SigningKeyPair":
        """Derive the key pair from a hex-encoded seed.

        Args:
            seed_hex: 64 hex characters (32 bytes).

        Returns:
            SigningKeyPair for that seed. The same seed always yields the
            same keys.

        Raises:
            ValueError: If the seed is not hex or not 32 bytes long.
        """
        try:
            seed = bytes.fromhex(seed_hex)
        except ValueError as exc:
            msg = "Auth key must be hex-encoded"
            raise ValueError(msg) from exc
        if len(seed) != _SEED_LENGTH:
            msg = f"Auth key must decode to {_SEED_LENGTH} bytes, got {len(seed)}"
            raise ValueError(msg)

        private_key = Ed25519PrivateKey.from_private_bytes(seed)
        return cls(private_key=private_key, public_key=private_key.public_key())


@dataclass(frozen=True)
class SessionClaims:
    """Signed assertions embedded in a session token.

    Attributes:
        issuer: Fixed issuer string (TOKEN_ISSUER).
        subject: Authenticated user's email.
        issued_at: Issuance time (whole seconds, UTC).
        not_before: Equal to issued_at.
        expires_at: issued_at + 24 hours.
    """

    issuer: str
    subject: str
    issued_at: datetime
    not_before: datetime
    expires_at: datetime

    def to_payload(self) -> dict[str, Any]:
        """Registered-claim JWT payload (PyJWT encodes datetimes as ints)."""
        return {
            "iss": self.issuer,
            "sub": self.subject,
            "iat": self.issued_at,
            "nbf": self.not_before,
            "exp": self.expires_at,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "SessionClaims":
        return cls(
            issuer=payload["iss"],
            subject=payload["sub"],
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            not_before=datetime.fromtimestamp(payload["nbf"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )


class TokenVerifier:
    """Validates session tokens with the public key only.

    Args:
        public_key: Ed25519 public key of the issuer.
    """

    def __init__(self, public_key: Ed25519PublicKey) -> None:
        self._public_key = public_key

    def verify(self, token: str) -> SessionClaims:
        """Verify a token and return its claims.

        Checked against the current time: signature, issuer, presence of all
        five claims, nbf not in the future, exp not in the past.

        Args:
            token: Compact JWS string.

        Returns:
            Decoded SessionClaims.

        Raises:
            UnauthorizedError: For any rejection, without saying which check
                failed.
        """
        try:
            payload = jwt.decode(
                token,
                self._public_key,
                algorithms=[_ALGORITHM],
                issuer=TOKEN_ISSUER,
                options={"require": _REQUIRED_CLAIMS},
            )
            return SessionClaims.from_payload(payload)
        except (jwt.InvalidTokenError, KeyError, TypeError, ValueError) as exc:
            logger.debug("Token rejected: %s", type(exc).__name__)
            raise UnauthorizedError() from exc


class TokenIssuer:
    """Builds, signs, and verifies session tokens.

    Args:
        key_pair: Signing key pair, constructed once at startup.
        clock: Returns the current UTC time. Injected by tests.
    """

    def __init__(
        self,
        key_pair: SigningKeyPair,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._key_pair = key_pair
        self._clock = clock
        self.verifier = TokenVerifier(key_pair.public_key)

    def issue_claims(self, subject: str) -> SessionClaims:
        """Build claims for a freshly authenticated subject.

        Microseconds are dropped because JWT timestamps are whole seconds.

        Args:
            subject: Authenticated email.

        Returns:
            SessionClaims valid for TOKEN_LIFETIME from now.
        """
        now = self._clock().replace(microsecond=0)
        return SessionClaims(
            issuer=TOKEN_ISSUER,
            subject=subject,
            issued_at=now,
            not_before=now,
            expires_at=now + TOKEN_LIFETIME,
        )

    def sign(self, claims: SessionClaims) -> str:
        """Serialize and sign claims into a compact token."""
        return jwt.encode(
            claims.to_payload(),
            self._key_pair.private_key,
            algorithm=_ALGORITHM,
        )

    def verify(self, token: str) -> SessionClaims:
        """Verify a token issued by this key pair.

        Raises:
            UnauthorizedError: For any rejection.
        """
        return self.verifier.verify(token)
