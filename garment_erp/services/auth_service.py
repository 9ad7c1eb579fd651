"""
Authentication Service
User authentication and user management
"""

from typing import List, Optional
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import or_
import logging

from garment_erp.models.auth import User
from garment_erp.schemas.auth import UserCreate, UserUpdate
from garment_erp.core.security import get_password_hash, verify_password, create_access_token
from garment_erp.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from garment_erp.core.logging import get_logger

logger = logging.getLogger(__name__)
security_logger = get_logger("security")


class AuthService:
    """Service for authentication and user management operations"""

    def __init__(self, db: Session):
        self.db = db

    def authenticate(self, email: str, password: str) -> User:
        """
        Check credentials and record the login

        Raises:
            AuthenticationError: unknown email, wrong password or inactive user
        """
        user = self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            security_logger.warning(f"Failed login for {email}")
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            security_logger.warning(f"Login attempt by inactive user {email}")
            raise AuthenticationError("User account is inactive")

        user.last_login = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(user)

        security_logger.info(f"User logged in: {user.email}")
        return user

    def issue_token(self, user: User) -> str:
        return create_access_token(data={"sub": str(user.id), "role": user.role})

    def get_users(
        self,
        skip: int = 0,
        limit: int = 100,
        search: Optional[str] = None,
        role: Optional[str] = None,
        is_active: Optional[bool] = None
    ) -> List[User]:
        """Get users with filtering"""
        query = self.db.query(User)

        if search:
            search_filter = f"%{search}%"
            query = query.filter(
                or_(
                    User.name.ilike(search_filter),
                    User.email.ilike(search_filter)
                )
            )

        if role:
            query = query.filter(User.role == role)

        if is_active is not None:
            query = query.filter(User.is_active == is_active)

        return query.order_by(User.id).offset(skip).limit(limit).all()

    def get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        return self.db.query(User).filter(User.email == email.lower()).first()

    def create_user(self, user_data: UserCreate) -> User:
        """Create new user"""
        if self.get_user_by_email(user_data.email):
            raise ConflictError("User with this email already exists")

        db_user = User(
            name=user_data.name,
            email=user_data.email.lower(),
            password_hash=get_password_hash(user_data.password),
            role=user_data.role,
            access=list(user_data.access),
            is_active=True,
        )

        self.db.add(db_user)
        self.db.commit()
        self.db.refresh(db_user)

        security_logger.info(f"User created: {db_user.email} ({db_user.role})")
        return db_user

    def update_user(self, user_id: int, user_data: UserUpdate) -> User:
        """Update user role, access or status"""
        db_user = self.get_user(user_id)

        update_data = user_data.model_dump(exclude_unset=True)
        if "password" in update_data:
            password = update_data.pop("password")
            if password:
                db_user.password_hash = get_password_hash(password)

        for field, value in update_data.items():
            setattr(db_user, field, value)

        self.db.commit()
        self.db.refresh(db_user)

        security_logger.info(f"User updated: {db_user.email}")
        return db_user

    def deactivate_user(self, user_id: int) -> User:
        """Deactivate user (soft delete)"""
        db_user = self.get_user(user_id)
        db_user.is_active = False
        self.db.commit()
        self.db.refresh(db_user)

        security_logger.info(f"User deactivated: {db_user.email}")
        return db_user
