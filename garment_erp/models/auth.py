"""
Authentication and Authorization Models
Maps to the users table
"""
from sqlalchemy import Column, String, Boolean, Integer, JSON, TIMESTAMP
from datetime import datetime

from garment_erp.core.database import Base


class UserRole:
    """Role names stored on User.role"""
    SUPER_ADMIN = "SuperAdmin"
    ADMIN = "Admin"
    EMPLOYEE = "Employee"

    ALL = (SUPER_ADMIN, ADMIN, EMPLOYEE)


# Modules a non-admin user can be granted through User.access
ACCESS_MODULES = ("purchase", "product", "orders", "production", "invoices", "buyer", "store")


class User(Base):
    """System users"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    role = Column(String(20), nullable=False, default=UserRole.EMPLOYEE)
    access = Column(JSON, default=list)
    is_active = Column(Boolean, default=True)

    last_login = Column(TIMESTAMP(timezone=True))
    created_at = Column(TIMESTAMP(timezone=True), default=datetime.utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN

    @property
    def is_admin(self) -> bool:
        return self.role in (UserRole.SUPER_ADMIN, UserRole.ADMIN)

    def can(self, *required: str) -> bool:
        """
        True when the user holds one of the required roles or modules.

        SuperAdmin passes every check.
        """
        if self.is_super_admin:
            return True
        if self.role in required:
            return True
        return any(module in (self.access or []) for module in required)


class Counter(Base):
    """Named sequences backing PUR-/STR-/LOG- numbers"""
    __tablename__ = "counters"

    name = Column(String(50), primary_key=True)
    seq = Column(Integer, nullable=False, default=0)
