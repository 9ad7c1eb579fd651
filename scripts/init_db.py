#!/usr/bin/env python3
"""
Garment ERP Database Initialization Script
Creates database tables and the first SuperAdmin user
"""
import argparse
import getpass
import logging
import sys

from garment_erp.core.config import settings
from garment_erp.core.database import SessionLocal, init_db
from garment_erp.core.exceptions import ConflictError
from garment_erp.models.auth import UserRole, ACCESS_MODULES
from garment_erp.schemas.auth import UserCreate
from garment_erp.services.auth_service import AuthService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_super_admin(email: str, password: str, name: str = "Super Admin") -> None:
    """Create the SuperAdmin account unless the email is already registered"""
    db = SessionLocal()
    try:
        AuthService(db).create_user(UserCreate(
            name=name,
            email=email,
            password=password,
            role=UserRole.SUPER_ADMIN,
            access=list(ACCESS_MODULES),
        ))
        logger.info(f"✅ SuperAdmin created: {email}")
    except ConflictError:
        logger.info(f"User {email} already exists, skipping")
    finally:
        db.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Create tables and the first SuperAdmin")
    parser.add_argument("--email", default=settings.SEED_ADMIN_EMAIL)
    parser.add_argument("--name", default="Super Admin")
    parser.add_argument("--skip-user", action="store_true", help="only create tables")
    args = parser.parse_args()

    try:
        logger.info(f"Initializing database at {settings.DATABASE_URL}")
        init_db()

        if not args.skip_user:
            password = settings.SEED_ADMIN_PASSWORD or getpass.getpass("SuperAdmin password: ")
            seed_super_admin(args.email, password, args.name)

        logger.info("Database initialization completed")
        return 0
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
