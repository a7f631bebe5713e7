"""Authentication and staff user routes."""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Request, status

from billgenie.core.config import settings
from billgenie.core.exceptions import NotFoundError
from billgenie.core.rate_limit import limiter
from billgenie.core.rbac import CurrentUser, RequireAdmin, RequireManager, UserRole
from billgenie.core.responses import Envelope, success_response
from billgenie.core.security import create_user_token, get_password_hash, verify_password
from billgenie.db.session import DbSession
from billgenie.models.user import User
from billgenie.schemas.auth import AuthResult, LoginRequest
from billgenie.schemas.user import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger("auth")

router = APIRouter()


def _issue_token(user: User) -> str:
    return create_user_token(user.id, user.role)


def _get_user(db, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User")
    return user


@router.post("/login", response_model=Envelope[AuthResult])
@limiter.limit(settings.login_rate_limit)
def login(request: Request, login_request: LoginRequest, db: DbSession):
    """Authenticate an active user and return a bearer token."""
    client_ip = request.client.host if request.client else "unknown"
    user = db.query(User).filter(
        User.username == login_request.username,
        User.active.is_(True),
    ).first()

    if not user or not verify_password(login_request.password, user.password_hash):
        logger.warning(f"Failed login attempt for username: {login_request.username} from IP: {client_ip}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    logger.info(f"Successful login: {user.username} (ID: {user.id}, role: {user.role}) from IP: {client_ip}")
    return success_response(
        AuthResult(user=UserResponse.model_validate(user), token=_issue_token(user))
    )


@router.post("/register", response_model=Envelope[AuthResult], status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, db: DbSession, current_user: RequireManager):
    """Create a staff account."""
    user = User(
        username=user_in.username,
        email=user_in.email,
        password_hash=get_password_hash(user_in.password),
        first_name=user_in.first_name,
        last_name=user_in.last_name,
        phone=user_in.phone,
        role=user_in.role,
        active=user_in.active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"User {user.username} (ID: {user.id}, role: {user.role}) created by user {current_user.id}")
    return success_response(
        AuthResult(user=UserResponse.model_validate(user), token=_issue_token(user))
    )


@router.get("/me", response_model=Envelope[UserResponse])
def get_me(current_user: CurrentUser, db: DbSession):
    """Get the current user's profile."""
    return success_response(UserResponse.model_validate(_get_user(db, current_user.id)))


@router.get("/users", response_model=Envelope[List[UserResponse]])
def list_users(
    db: DbSession,
    current_user: RequireManager,
    role: Optional[UserRole] = None,
    active: Optional[bool] = None,
):
    """List staff users, newest first."""
    query = db.query(User)
    if role is not None:
        query = query.filter(User.role == role.value)
    if active is not None:
        query = query.filter(User.active.is_(active))
    users = query.order_by(User.created_at.desc(), User.id.desc()).all()
    return success_response([UserResponse.model_validate(u) for u in users])


@router.get("/users/{user_id}", response_model=Envelope[UserResponse])
def get_user(user_id: int, db: DbSession, current_user: CurrentUser):
    return success_response(UserResponse.model_validate(_get_user(db, user_id)))


@router.put("/users/{user_id}", response_model=Envelope[UserResponse])
def update_user(user_id: int, user_in: UserUpdate, db: DbSession, current_user: RequireManager):
    """Update a user. The password cannot be changed here."""
    user = _get_user(db, user_id)
    for field, value in user_in.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return success_response(UserResponse.model_validate(user))


@router.delete("/users/{user_id}", response_model=Envelope)
def delete_user(user_id: int, db: DbSession, current_user: RequireAdmin):
    user = _get_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info(f"User {user_id} deleted by user {current_user.id}")
    return success_response(message="User deleted successfully")
