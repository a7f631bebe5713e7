"""Staff roles and the route guards built on them.

Routes declare the guard they need as a parameter type::

    def delete_customer(..., current_user: RequireManager): ...

``CurrentUser`` accepts any active staff member; the ``Require*`` aliases
also check the role carried in the bearer token.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status

from billgenie.core.security import decode_access_token
from billgenie.db.session import DbSession


class UserRole(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    CASHIER = "cashier"
    WAITER = "waiter"
    CHEF = "chef"


@dataclass(frozen=True)
class Principal:
    """The staff member behind a request, as stated by their token."""

    id: int
    role: UserRole


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _bearer_token(request: Request) -> Optional[str]:
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def get_current_user(request: Request, db: DbSession) -> Principal:
    """Resolve the bearer token to an active staff account."""
    token = _bearer_token(request)
    if token is None:
        raise _unauthorized("Authentication required")

    claims = decode_access_token(token)
    if claims is None:
        raise _unauthorized("Invalid token")

    try:
        principal = Principal(id=int(claims["sub"]), role=UserRole(claims.get("role")))
    except (KeyError, ValueError):
        raise _unauthorized("Invalid token")

    from billgenie.models.user import User

    user = db.get(User, principal.id)
    if user is None or not user.active:
        raise _unauthorized("User account is disabled")
    return principal


def require_roles(*roles: UserRole):
    """Guard accepting the request only when the caller's role is in ``roles``."""
    allowed = frozenset(roles)

    def check_role(
        current_user: Annotated[Principal, Depends(get_current_user)]
    ) -> Principal:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return check_role


CurrentUser = Annotated[Principal, Depends(get_current_user)]
RequireAdmin = Annotated[Principal, Depends(require_roles(UserRole.ADMIN))]
RequireManager = Annotated[Principal, Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER))]
RequireCashier = Annotated[
    Principal,
    Depends(require_roles(UserRole.ADMIN, UserRole.MANAGER, UserRole.CASHIER)),
]
