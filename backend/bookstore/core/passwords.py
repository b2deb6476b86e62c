"""Password hashing and verification.

Argon2id (memory-hard) with a fresh 128-bit salt per hash. The stored record
is ``base64(digest) + "." + base64(salt)``; its format is private to
hash_password() / verify_password().

Security:
- Digest comparison is constant-time (hmac.compare_digest)
- Malformed records verify as False, never raise
- verify_dummy() gives unknown-user logins the same cost as wrong passwords
"""

import base64
import binascii
import hmac
import secrets

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

# Argon2id cost parameters. Changing any of these invalidates every stored
# record, since verification recomputes with the same constants.
_TIME_COST = 1
_MEMORY_COST_KIB = 64 * 1024
_PARALLELISM = 1
_DIGEST_LENGTH = 32
_SALT_LENGTH = 16

_SEPARATOR = "."

# Fixed record used to burn one full KDF run when no credential exists.
# Its digest is all zeros, so it never matches a real password.
_DUMMY_RECORD = _SEPARATOR.join(
    (
        base64.b64encode(bytes(_DIGEST_LENGTH)).decode(),
        base64.b64encode(bytes(_SALT_LENGTH)).decode(),
    )
)


def _derive(password: str, salt: bytes) -> bytes:
    return hash_secret_raw(
        secret=password.encode(),
        salt=salt,
        time_cost=_TIME_COST,
        memory_cost=_MEMORY_COST_KIB,
        parallelism=_PARALLELISM,
        hash_len=_DIGEST_LENGTH,
        type=Type.ID,
    )


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt.

    Args:
        password: Plain-text password.

    Returns:
        Self-describing record holding digest and salt.

    Raises:
        OSError: If the OS entropy source fails. Not recoverable.
    """
    salt = secrets.token_bytes(_SALT_LENGTH)
    digest = _derive(password, salt)
    return _SEPARATOR.join(
        (base64.b64encode(digest).decode(), base64.b64encode(salt).decode())
    )


def verify_password(password: str, hash_record: str) -> bool:
    """Check a candidate password against a stored record.

    Args:
        password: Candidate plain-text password.
        hash_record: Record previously produced by hash_password().

    Returns:
        True if the password matches, False on mismatch or malformed record.
    """
    parts = hash_record.split(_SEPARATOR)
    if len(parts) != 2:
        return False

    try:
        stored_digest = base64.b64decode(parts[0], validate=True)
        salt = base64.b64decode(parts[1], validate=True)
    except (binascii.Error, ValueError):
        return False

    try:
        candidate = _derive(password, salt)
    except (HashingError, UnicodeEncodeError):
        # argon2 rejects salts shorter than 8 bytes; lone surrogates can't encode
        return False

    return hmac.compare_digest(stored_digest, candidate)


def verify_dummy(password: str) -> bool:
    """Run a full verification that always fails.

    Call when the credential lookup found nothing, so response time does not
    reveal whether the account exists.
    """
    return verify_password(password, _DUMMY_RECORD)
