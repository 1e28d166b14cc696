"""
Authentication API endpoints
- Register / login issue the session cookie
- Logout expires it
- /me returns the account behind the current session
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from storefront.core.auth import (
    TokenUser,
    clear_auth_cookie,
    create_access_token,
    get_current_user,
    hash_password,
    set_auth_cookie,
    verify_password,
)
from storefront.core.errors import ConflictError, NotFoundError, ValidationError
from storefront.core.rate_limit import auth_rate_limit
from storefront.domain.user import User, UserLogin, UserRegister
from storefront.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])

MIN_PASSWORD_LENGTH = 6


def _issue_session(response: Response, user: User) -> None:
    token = create_access_token(user.id, user.email, user.name, user.role.value)
    set_auth_cookie(response, token)


@router.post("/register", status_code=status.HTTP_201_CREATED, dependencies=[Depends(auth_rate_limit)])
def register(payload: UserRegister, response: Response):
    """Create a user account and start a session"""
    if not payload.name or not payload.email or not payload.password:
        raise ValidationError("Please provide name, email, and password")

    if len(payload.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    repo = UserRepository()
    if repo.find_by_email(payload.email) is not None:
        raise ConflictError("User with this email already exists")

    try:
        user = repo.create(
            name=payload.name.strip(),
            email=payload.email.lower(),
            password_hash=hash_password(payload.password),
        )
    except ConflictError:
        # Registered concurrently between the lookup and the insert
        raise ConflictError("User with this email already exists")

    _issue_session(response, user)
    logger.info(f"User {user.id} registered")

    return {
        "success": True,
        "message": "User registered successfully",
        "user": user.to_dict(),
    }


@router.post("/login", dependencies=[Depends(auth_rate_limit)])
def login(payload: UserLogin, response: Response):
    if not payload.email or not payload.password:
        raise ValidationError("Please provide email and password")

    user = UserRepository().find_by_email(payload.email, include_password=True)
    if user is None or not user.password_hash or not verify_password(payload.password, user.password_hash):
        logger.warning(f"Failed login for {payload.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    _issue_session(response, user)
    logger.info(f"User {user.id} logged in")

    return {
        "success": True,
        "message": "Login successful",
        "user": user.to_dict(),
    }


@router.post("/logout")
def logout(response: Response):
    clear_auth_cookie(response)
    return {"success": True, "message": "Logout successful"}


@router.get("/me")
def me(current_user: TokenUser = Depends(get_current_user)):
    """Current account, re-read from the store so role changes are visible"""
    user = UserRepository().find_by_id(current_user.id)
    if user is None:
        raise NotFoundError("User not found")

    return {"success": True, "user": user.to_dict()}
