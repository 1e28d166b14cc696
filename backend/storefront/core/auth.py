"""
Authentication for the Storefront backend
Issues and validates JWT session cookies and provides user context
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Response, status
from fastapi.security import APIKeyCookie
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from .config import settings


# Session token travels in an httpOnly cookie
cookie_scheme = APIKeyCookie(name=settings.AUTH_COOKIE_NAME, auto_error=False)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_MAX_AGE_SECONDS = settings.JWT_EXPIRE_DAYS * 24 * 60 * 60


class TokenUser(BaseModel):
    """User data extracted from JWT token"""
    id: int
    email: str
    name: Optional[str] = None
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_access_token(user_id: int, email: str, name: Optional[str], role: str) -> str:
    """
    Sign a session token for a user.

    Payload:
    {
        "id": 12,
        "email": "jane@example.com",
        "name": "Jane",
        "role": "user",
        "exp": 1234567890
    }
    """
    expires = datetime.now(timezone.utc) + timedelta(days=settings.JWT_EXPIRE_DAYS)
    payload = {
        "id": user_id,
        "email": email,
        "name": name,
        "role": role,
        "exp": expires,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Return the token payload, or None if the signature or expiry check fails"""
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def _user_from_payload(payload: dict) -> Optional[TokenUser]:
    user_id = payload.get("id")
    email = payload.get("email")
    if user_id is None or not email:
        return None
    return TokenUser(
        id=user_id,
        email=email,
        name=payload.get("name"),
        role=payload.get("role", "user"),
    )


def set_auth_cookie(response: Response, token: str) -> None:
    # Cross-site frontends need SameSite=None, which browsers only accept with Secure
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=TOKEN_MAX_AGE_SECONDS,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
    )


async def get_current_user(token: Optional[str] = Depends(cookie_scheme)) -> TokenUser:
    """
    Dependency that extracts and validates the current user from the session cookie.

    Usage:
        @router.get("/protected")
        async def protected_route(user: TokenUser = Depends(get_current_user)):
            return {"message": f"Hello {user.email}"}
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    payload = decode_access_token(token)
    user = _user_from_payload(payload) if payload else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return user


def require_role(required_role: str):
    """
    Dependency factory for role-based access control.

    Usage:
        @router.delete("/inventory")
        async def delete_product(user: TokenUser = Depends(require_role("admin"))):
            pass
    """
    async def role_checker(user: TokenUser = Depends(get_current_user)) -> TokenUser:
        role_hierarchy = {
            "admin": 2,
            "user": 1,
        }

        user_level = role_hierarchy.get(user.role, 0)
        required_level = role_hierarchy.get(required_role, 0)

        if user_level < required_level:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"{required_role.capitalize()} access required",
            )

        return user

    return role_checker


require_admin = require_role("admin")
