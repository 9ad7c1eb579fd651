"""
Authentication API endpoints
Login, current user and user registration
"""
from typing import Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from garment_erp.api import deps
from garment_erp.models.auth import User
from garment_erp.schemas.auth import LoginRequest, Token, UserCreate, UserResponse
from garment_erp.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=Token)
def login(
    credentials: LoginRequest,
    db: Session = Depends(deps.get_db)
) -> Any:
    """
    Exchange email and password for a bearer token
    """
    service = AuthService(db)
    user = service.authenticate(credentials.email, credentials.password)
    return {
        "access_token": service.issue_token(user),
        "token_type": "bearer",
        "user": user,
    }


@router.get("/me", response_model=UserResponse)
def read_users_me(
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """
    Get current user
    """
    return current_user


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_super_admin)
) -> Any:
    """
    Create a new user. SuperAdmin only.
    """
    return AuthService(db).create_user(user_in)
