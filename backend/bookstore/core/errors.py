"""Service-level failure kinds.

Every public service operation fails with exactly one of four errors:

- ValidationError (400): malformed or missing input, caught before storage
- ConflictError (409): uniqueness violation on write
- UnauthorizedError (401): credential mismatch or token rejection
- InternalError (500): storage/transaction failure not caused by the caller

Each kind fixes its HTTP status and default code as class attributes, so the
exception handler in bookstore.main needs no per-kind mapping.
"""


class APIError(Exception):
    """Base class for the four failure kinds.

    Attributes:
        code: Machine-readable error code (e.g., "UNAUTHORIZED").
        message: Human-readable message, safe to show to clients.
        status_code: HTTP status for the error envelope.
        details: Optional per-field details (validation only).
    """

    code: str = "INTERNAL_ERROR"
    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        details: list[dict] | None = None,
    ) -> None:
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        self.details = details
        super().__init__(self.message)


class ValidationError(APIError):
    """Input rejected before any storage access (400)."""

    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Request validation failed"


class UnauthorizedError(APIError):
    """Authentication failed (401).

    Raised for bad credentials and rejected tokens alike. The message never
    says which check failed: "no such user" vs "wrong password" would allow
    account enumeration.
    """

    code = "UNAUTHORIZED"
    status_code = 401
    default_message = "Authentication required"


class ConflictError(APIError):
    """Write collided with an existing row (409).

    Callers pass a specific code, e.g. EMAIL_ALREADY_EXISTS.
    """

    code = "CONFLICT"
    status_code = 409
    default_message = "Resource already exists"


class InternalError(APIError):
    """Storage or transaction failure (500).

    Never carries SQL text or driver messages.
    """
