"""
Test Configuration and Fixtures
Shared testing infrastructure for Garment ERP
"""

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_garment_erp.db")
os.environ["LOG_TO_FILE"] = "false"

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator, Dict, Any, Callable
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from garment_erp.main import app
from garment_erp.core.database import get_db, Base
from garment_erp.core.config import settings
from garment_erp.models.auth import User, UserRole
from garment_erp.schemas.auth import UserCreate
from garment_erp.schemas.order import OrderCreate
from garment_erp.schemas.purchase import PurchaseCreate
from garment_erp.schemas.store import StoreEntryCreate
from garment_erp.services.auth_service import AuthService
from garment_erp.services.order_service import OrderService
from garment_erp.services.purchase_service import PurchaseService
from garment_erp.services.store import StoreEntryService

TEST_PASSWORD = "testpassword123"

# Create test engine
engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test"""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database dependency override"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# Users

def _create_user(db_session: Session, email: str, role: str, access=None) -> User:
    return AuthService(db_session).create_user(UserCreate(
        name=email.split("@")[0].title(),
        email=email,
        password=TEST_PASSWORD,
        role=role,
        access=access or [],
    ))


@pytest.fixture
def super_admin_user(db_session: Session) -> User:
    return _create_user(db_session, "root@garmenterp.com", UserRole.SUPER_ADMIN)


@pytest.fixture
def admin_user(db_session: Session) -> User:
    return _create_user(db_session, "admin@garmenterp.com", UserRole.ADMIN)


@pytest.fixture
def employee_user(db_session: Session) -> User:
    """Employee with no module access"""
    return _create_user(db_session, "employee@garmenterp.com", UserRole.EMPLOYEE)


@pytest.fixture
def store_user(db_session: Session) -> User:
    """Employee granted the store module"""
    return _create_user(db_session, "store@garmenterp.com", UserRole.EMPLOYEE, ["store"])


def _login(client: TestClient, user: User) -> Dict[str, str]:
    response = client.post(
        "/api/v1/auth/login",
        json={"email": user.email, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200

    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def super_admin_headers(client: TestClient, super_admin_user: User) -> Dict[str, str]:
    return _login(client, super_admin_user)


@pytest.fixture
def admin_headers(client: TestClient, admin_user: User) -> Dict[str, str]:
    return _login(client, admin_user)


@pytest.fixture
def employee_headers(client: TestClient, employee_user: User) -> Dict[str, str]:
    return _login(client, employee_user)


@pytest.fixture
def store_headers(client: TestClient, store_user: User) -> Dict[str, str]:
    return _login(client, store_user)


# Sample data

@pytest.fixture
def sample_buyer_data() -> Dict[str, Any]:
    """Sample buyer data for testing"""
    return {
        "name": "ravi textiles",
        "company_name": "Ravi Textiles Pvt Ltd",
        "mobile": "9876543210",
        "email": "Orders@RaviTextiles.in",
        "gst": "33ABCDE1234F1Z5",
        "address": "12 Mill Road",
        "city": "Tiruppur",
        "state": "Tamil Nadu",
        "pincode": "641601",
    }


@pytest.fixture
def sample_supplier_data() -> Dict[str, Any]:
    """Sample supplier data for testing"""
    return {
        "name": "Sri Fabrics",
        "company_name": "Sri Fabrics & Co",
        "mobile": "9123456780",
        "vendor_category": "Fabrics",
        "vendor_goods": ["Cotton", "Lycra"],
    }


@pytest.fixture
def sample_order_data() -> Dict[str, Any]:
    """Sample FOB order with an inline new buyer"""
    return {
        "order_date": "2025-05-01",
        "order_type": "FOB",
        "buyer": {
            "name": "Kumar Exports",
            "mobile": "9000000001",
            "address": "Avinashi Road",
        },
        "products": [
            {
                "product_details": {
                    "name": "Polo T-Shirt",
                    "style": "Slim",
                    "color": "Navy",
                    "fabric_type": "Cotton",
                },
                "sizes": [
                    {"size": "M", "qty": 100},
                    {"size": "L", "qty": 50},
                ],
            }
        ],
    }


@pytest.fixture
def sample_purchase_items() -> list:
    """One line of each material type"""
    return [
        {
            "item_type": "fabric",
            "product_name": "Polo T-Shirt",
            "fabric_type": "Cotton",
            "vendor": "Sri Fabrics",
            "purchase_mode": "kg",
            "quantity": 100,
            "cost_per_unit": 250,
            "gst_percentage": 5,
            "colors": ["Navy"],
        },
        {
            "item_type": "buttons",
            "vendor": "Button House",
            "size": "12mm",
            "button_type": "Shell",
            "purchase_mode": "qty",
            "quantity": 1000,
            "cost_per_unit": 0.5,
            "gst_percentage": 12,
        },
        {
            "item_type": "packets",
            "vendor": "Pack Well",
            "size": "L",
            "packet_type": "Poly",
            "purchase_mode": "packet",
            "quantity": 10,
            "cost_per_unit": 40,
            "gst_percentage": 18,
        },
    ]


# Workflow builders

@pytest.fixture
def make_order(db_session: Session, sample_order_data) -> Callable[..., Any]:
    """Create an order through the service; keyword overrides replace top-level fields"""
    def _make(**overrides):
        data = {**sample_order_data, **overrides}
        return OrderService(db_session).create_order(OrderCreate(**data))
    return _make


@pytest.fixture
def completed_purchase(db_session: Session, make_order, sample_purchase_items):
    """Completed purchase for a fresh FOB order"""
    order = make_order()
    return PurchaseService(db_session).create_purchase(PurchaseCreate(
        order_id=order.id,
        purchase_date=date(2025, 5, 2),
        items=sample_purchase_items,
    ))


@pytest.fixture
def store_entry(db_session: Session, completed_purchase):
    """
    Store entry for the completed purchase

    Cotton Fabric: invoiced 100, received 98
    Buttons Shell 12mm: invoiced 1000, received 1000
    """
    return StoreEntryService(db_session).create_entry(StoreEntryCreate(
        purchase_id=completed_purchase.id,
        store_entry_date=date(2025, 5, 5),
        entries=[
            {
                "item_type": "fabric",
                "item_name": "Cotton Fabric",
                "supplier_name": "Sri Fabrics",
                "invoice_no": "INV-77",
                "unit": "kg",
                "purchase_qty": Decimal("100"),
                "invoice_qty": Decimal("100"),
                "store_in_qty": Decimal("98"),
            },
            {
                "item_type": "accessories",
                "item_name": "Buttons Shell 12mm",
                "supplier_name": "Button House",
                "unit": "qty",
                "purchase_qty": Decimal("1000"),
                "invoice_qty": Decimal("1000"),
                "store_in_qty": Decimal("1000"),
            },
        ],
    ))


# API test helpers
class APITestHelper:
    """Helper class for API testing"""

    @staticmethod
    def assert_error_response(response, expected_status: int, expected_type: str = None, expected_detail: str = None):
        """Assert error response format"""
        assert response.status_code == expected_status
        data = response.json()
        assert "detail" in data
        if expected_type:
            assert data["type"] == expected_type
        if expected_detail:
            assert expected_detail in data["detail"]

    @staticmethod
    def assert_success_response(response, expected_keys: list = None):
        """Assert successful response format"""
        assert response.status_code in [200, 201]
        data = response.json()
        if expected_keys:
            for key in expected_keys:
                assert key in data
