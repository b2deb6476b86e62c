"""Authentication endpoints.

- POST /users: register email + password (JSON body)
- POST /login: exchange HTTP Basic credentials for a signed session token

Security considerations:
- register: argon2id hashing, email uniqueness via primary key
- login: unknown email and wrong password return the same 401
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from bookstore.api.deps import Auth
from bookstore.core.errors import UnauthorizedError
from bookstore.core.responses import DataResponse
from bookstore.schemas.auth import RegisterRequest, RegisterResponse, TokenResponse

# auto_error=False: a missing header must produce our own 401 envelope
_basic_scheme = HTTPBasic(auto_error=False)

router = APIRouter()


@router.post("/users", status_code=201)
async def register(
    body: RegisterRequest,
    auth: Auth,
) -> DataResponse[RegisterResponse]:
    """Register a new user with email + password.

    Unauthenticated. 400 on malformed email or empty password, 409 when the
    email is already registered.
    """
    await auth.register(body.email, body.password)
    return DataResponse(data=RegisterResponse(user=body.email))


@router.post("/login")
async def login(
    auth: Auth,
    credentials: Annotated[HTTPBasicCredentials | None, Depends(_basic_scheme)],
) -> DataResponse[TokenResponse]:
    """Verify Basic credentials and issue a bearer token.

    Unauthenticated. Any failure is a uniform 401.
    """
    if credentials is None:
        raise UnauthorizedError()

    token = await auth.login_token(credentials.username, credentials.password)
    return DataResponse(data=TokenResponse(token=token))
