"""
API Dependencies
Common dependencies for API endpoints
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from garment_erp.core.database import get_db
from garment_erp.core.security import verify_token
from garment_erp.models.auth import User

# Security scheme; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)

__all__ = [
    "get_db",
    "get_current_user",
    "get_current_active_user",
    "get_current_super_admin",
    "authorize",
]


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from JWT token.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(credentials.credentials)
    if not payload:
        raise _credentials_exception()

    user_id = payload.get("sub")
    if not user_id or not str(user_id).isdigit():
        raise _credentials_exception()

    user = db.query(User).filter(User.id == int(user_id)).first()
    if not user:
        raise _credentials_exception()

    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Get current active user - checks if user is active.
    """
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user"
        )
    return current_user


async def get_current_super_admin(
    current_user: User = Depends(get_current_active_user)
) -> User:
    """
    Get current SuperAdmin user.
    """
    if not current_user.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="SuperAdmin privileges required"
        )
    return current_user


class AccessChecker:
    """
    Role-or-module access dependency.

    Passes for SuperAdmin, for a user whose role is listed, or for a user
    holding any listed module in their access list.
    """
    def __init__(self, *required: str):
        self.required = required

    def __call__(self, current_user: User = Depends(get_current_active_user)) -> User:
        if not current_user.can(*self.required):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required one of: {', '.join(self.required)}"
            )
        return current_user


def authorize(*required: str) -> AccessChecker:
    """
    Use in routes like: current_user: User = Depends(authorize("Admin", "store"))
    """
    return AccessChecker(*required)

