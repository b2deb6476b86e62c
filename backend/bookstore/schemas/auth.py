"""Authentication request/response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Request body for POST /users.

    Email format and non-empty password are checked by AuthService so that
    every caller gets the same validation order.
    """

    model_config = ConfigDict(extra="forbid")

    email: str = Field(max_length=255)
    password: str = Field(max_length=128)


class RegisterResponse(BaseModel):
    """Registered email."""

    user: str


class TokenResponse(BaseModel):
    """Signed session token returned by POST /login."""

    token: str
