"""Authentication schemas."""

from pydantic import Field

from billgenie.schemas.base import CamelModel
from billgenie.schemas.user import UserResponse


class LoginRequest(CamelModel):
    """Login request body."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)


class AuthResult(CamelModel):
    """The authenticated user together with a bearer token."""

    user: UserResponse
    token: str
