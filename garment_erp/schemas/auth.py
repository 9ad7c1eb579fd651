"""
Authentication schemas for request/response validation
"""
from typing import Optional, List
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from datetime import datetime

from garment_erp.models.auth import UserRole, ACCESS_MODULES


class LoginRequest(BaseModel):
    """User login request"""
    email: EmailStr
    password: str = Field(..., min_length=4)


class UserResponse(BaseModel):
    """User response"""
    id: int
    name: str
    email: EmailStr
    role: str
    access: List[str] = []
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    """JWT token response"""
    access_token: str
    token_type: str = "bearer"
    user: Optional[UserResponse] = None


class UserCreate(BaseModel):
    """User creation request"""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: str = UserRole.EMPLOYEE
    access: List[str] = []

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Store Keeper",
                "email": "store@example.com",
                "password": "secret123",
                "role": "Employee",
                "access": ["store"]
            }
        }
    }

    @field_validator("role")
    @classmethod
    def check_role(cls, v):
        if v not in UserRole.ALL:
            raise ValueError(f"Role must be one of: {', '.join(UserRole.ALL)}")
        return v

    @field_validator("access")
    @classmethod
    def check_access(cls, v):
        unknown = [module for module in v if module not in ACCESS_MODULES]
        if unknown:
            raise ValueError(f"Unknown access modules: {', '.join(unknown)}")
        return v


class UserUpdate(BaseModel):
    """User update request"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[str] = None
    access: Optional[List[str]] = None
    is_active: Optional[bool] = None
    password: Optional[str] = Field(None, min_length=6)

    @field_validator("role")
    @classmethod
    def check_role(cls, v):
        if v is not None and v not in UserRole.ALL:
            raise ValueError(f"Role must be one of: {', '.join(UserRole.ALL)}")
        return v

    @field_validator("access")
    @classmethod
    def check_access(cls, v):
        if v is None:
            return v
        unknown = [module for module in v if module not in ACCESS_MODULES]
        if unknown:
            raise ValueError(f"Unknown access modules: {', '.join(unknown)}")
        return v
