"""
API Integration Tests
End-to-end testing of API endpoints with real HTTP requests
"""

import pytest
from fastapi.testclient import TestClient
from typing import Dict

from garment_erp.models.auth import User
from tests.conftest import APITestHelper

API = "/api/v1"


class TestSystemAPI:
    """Health and info endpoints"""

    def test_health_check(self, client: TestClient):
        """Test health check endpoint"""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] in ["healthy", "degraded"]
        assert "version" in data

    def test_system_info(self, client: TestClient):
        """Test system info endpoint"""
        response = client.get("/info")

        assert response.status_code == 200
        data = response.json()
        assert "application" in data
        assert "store" in data["business_modules"]


class TestAuthenticationAPI:
    """Test authentication endpoints"""

    def test_login_success(self, client: TestClient, admin_user: User):
        """Test successful login"""
        response = client.post(f"{API}/auth/login", json={
            "email": admin_user.email,
            "password": "testpassword123",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["user"]["email"] == admin_user.email
        assert data["user"]["role"] == "Admin"

    def test_login_invalid_credentials(self, client: TestClient, admin_user: User):
        """Test login with invalid credentials"""
        response = client.post(f"{API}/auth/login", json={
            "email": admin_user.email,
            "password": "wrongpassword",
        })

        APITestHelper.assert_error_response(
            response, 401, "authentication_error", "Invalid email or password"
        )

    def test_me(self, client: TestClient, store_headers: Dict[str, str]):
        """Current user carries role and module access"""
        response = client.get(f"{API}/auth/me", headers=store_headers)

        assert response.status_code == 200
        assert response.json()["access"] == ["store"]

    def test_protected_endpoint_without_auth(self, client: TestClient):
        """Test accessing protected endpoint without authentication"""
        response = client.get(f"{API}/orders")

        assert response.status_code == 401
        assert response.json()["detail"] == "Not authorized, no token"

    def test_invalid_token(self, client: TestClient):
        """Garbage bearer tokens are rejected"""
        response = client.get(f"{API}/orders", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_register_requires_super_admin(
        self, client: TestClient, admin_headers: Dict[str, str], super_admin_headers: Dict[str, str]
    ):
        """Only SuperAdmin may create users"""
        new_user = {
            "name": "Store Keeper",
            "email": "keeper@garmenterp.com",
            "password": "secret123",
            "access": ["store"],
        }

        response = client.post(f"{API}/auth/register", json=new_user, headers=admin_headers)
        assert response.status_code == 403

        response = client.post(f"{API}/auth/register", json=new_user, headers=super_admin_headers)
        assert response.status_code == 201
        assert response.json()["role"] == "Employee"

    def test_register_unknown_module(self, client: TestClient, super_admin_headers: Dict[str, str]):
        """Access lists only name known modules"""
        response = client.post(f"{API}/auth/register", headers=super_admin_headers, json={
            "name": "Odd",
            "email": "odd@garmenterp.com",
            "password": "secret123",
            "access": ["payroll"],
        })
        assert response.status_code == 422


class TestAccessControl:
    """Role and module guards on write endpoints"""

    def test_employee_can_read(self, client: TestClient, employee_headers: Dict[str, str]):
        """Any active user can list records"""
        response = client.get(f"{API}/buyers", headers=employee_headers)
        assert response.status_code == 200

    def test_employee_cannot_write(
        self, client: TestClient, employee_headers: Dict[str, str], sample_buyer_data
    ):
        """Writes need Admin or the module"""
        response = client.post(f"{API}/buyers", json=sample_buyer_data, headers=employee_headers)
        assert response.status_code == 403

    def test_module_access_is_scoped(
        self, client: TestClient, store_headers: Dict[str, str], sample_buyer_data
    ):
        """Store access does not grant buyer writes"""
        response = client.post(f"{API}/buyers", json=sample_buyer_data, headers=store_headers)
        assert response.status_code == 403

    def test_users_list_is_super_admin_only(
        self, client: TestClient, admin_headers: Dict[str, str], super_admin_headers: Dict[str, str]
    ):
        """User administration is SuperAdmin only"""
        assert client.get(f"{API}/users", headers=admin_headers).status_code == 403

        response = client.get(f"{API}/users", headers=super_admin_headers)
        assert response.status_code == 200
        assert {u["email"] for u in response.json()} >= {"root@garmenterp.com", "admin@garmenterp.com"}


class TestMasterDataAPI:
    """Buyers, suppliers and products"""

    def test_create_and_search_buyer(
        self, client: TestClient, admin_headers: Dict[str, str], sample_buyer_data
    ):
        """Buyers get a code and show up in typeahead search"""
        response = client.post(f"{API}/buyers", json=sample_buyer_data, headers=admin_headers)

        assert response.status_code == 201
        buyer = response.json()
        assert buyer["code"] == "BUY001"
        assert buyer["name"] == "Ravi textiles"

        response = client.get(f"{API}/buyers/search", params={"q": "ravi"}, headers=admin_headers)
        assert [b["id"] for b in response.json()] == [buyer["id"]]

    def test_invalid_mobile(self, client: TestClient, admin_headers: Dict[str, str], sample_buyer_data):
        """Mobile numbers must have ten digits"""
        response = client.post(
            f"{API}/buyers", json={**sample_buyer_data, "mobile": "12345"}, headers=admin_headers
        )
        assert response.status_code == 422

    def test_missing_buyer(self, client: TestClient, admin_headers: Dict[str, str]):
        """Unknown ids render the typed error body"""
        response = client.get(f"{API}/buyers/999", headers=admin_headers)
        APITestHelper.assert_error_response(response, 404, "not_found", "Buyer not found")

    def test_supplier_crud(self, client: TestClient, admin_headers: Dict[str, str], sample_supplier_data):
        """Suppliers can be created, updated and deleted"""
        response = client.post(f"{API}/suppliers", json=sample_supplier_data, headers=admin_headers)
        assert response.status_code == 201
        supplier_id = response.json()["id"]
        assert response.json()["code"] == "SUP001"

        response = client.put(
            f"{API}/suppliers/{supplier_id}", json={"city": "Erode"}, headers=admin_headers
        )
        assert response.json()["city"] == "Erode"

        response = client.delete(f"{API}/suppliers/{supplier_id}", headers=admin_headers)
        assert response.status_code == 200
        assert "message" in response.json()


class TestOrderAPI:
    """Order endpoints"""

    def test_next_po_no(self, client: TestClient, admin_headers: Dict[str, str]):
        """PO numbers preview for a given date"""
        response = client.get(
            f"{API}/orders/next-po-no", params={"on": "2025-04-01"}, headers=admin_headers
        )
        assert response.json() == {"po_no": "PO/2526/0001", "financial_year": "2526"}

    def test_create_order(self, client: TestClient, admin_headers: Dict[str, str], sample_order_data):
        """Orders are created with a new buyer and summed sizes"""
        response = client.post(f"{API}/orders", json=sample_order_data, headers=admin_headers)

        assert response.status_code == 201
        order = response.json()
        assert order["po_no"].startswith("PO/")
        assert order["total_qty"] == 150
        assert order["status"] == "Pending Purchase"
        assert order["buyer_details"]["code"] == "BUY001"

        response = client.get(f"{API}/orders/buyer/{order['buyer_id']}", headers=admin_headers)
        assert response.json()["total"] == 1

    def test_order_needs_products(self, client: TestClient, admin_headers: Dict[str, str], sample_order_data):
        """At least one product line is required"""
        response = client.post(
            f"{API}/orders", json={**sample_order_data, "products": []}, headers=admin_headers
        )
        assert response.status_code == 422

    def test_list_by_status(self, client: TestClient, admin_headers: Dict[str, str], make_order):
        """Orders filter by status"""
        make_order()
        response = client.get(f"{API}/orders", params={"status": "Pending Purchase"}, headers=admin_headers)
        assert len(response.json()) == 1

        response = client.get(f"{API}/orders", params={"status": "Delivered"}, headers=admin_headers)
        assert response.json() == []

    def test_patch_status(self, client: TestClient, admin_headers: Dict[str, str], make_order):
        """Status can be patched"""
        order = make_order()
        response = client.patch(
            f"{API}/orders/{order.id}/status", json={"status": "Delivered"}, headers=admin_headers
        )
        assert response.json()["status"] == "Delivered"


class TestPurchaseAPI:
    """Purchase and machine endpoints"""

    def test_create_purchase(
        self, client: TestClient, admin_headers: Dict[str, str], make_order, sample_purchase_items
    ):
        """Purchase totals are returned as numbers"""
        order = make_order()
        response = client.post(f"{API}/purchases", headers=admin_headers, json={
            "order_id": order.id,
            "purchase_date": "2025-05-02",
            "items": sample_purchase_items,
        })

        assert response.status_code == 201
        purchase = response.json()
        assert purchase["status"] == "Completed"
        assert purchase["grand_total_cost"] == 25900
        assert purchase["grand_total_with_gst"] == 27282
        assert [i["item_type"] for i in purchase["items"]] == ["fabric", "buttons", "packets"]

        response = client.get(f"{API}/orders/{order.id}", headers=admin_headers)
        assert response.json()["status"] == "Pending Production"
        assert response.json()["production_id"] is not None

    def test_duplicate_purchase(self, client: TestClient, admin_headers: Dict[str, str], completed_purchase):
        """A second purchase for an order is a conflict"""
        response = client.post(
            f"{API}/purchases", json={"order_id": completed_purchase.order_id}, headers=admin_headers
        )
        APITestHelper.assert_error_response(
            response, 400, "conflict", "Purchase already exists for this order"
        )

    def test_unknown_item_type(self, client: TestClient, admin_headers: Dict[str, str], make_order):
        """Lines are discriminated by item_type"""
        order = make_order()
        response = client.post(f"{API}/purchases", headers=admin_headers, json={
            "order_id": order.id,
            "items": [{"item_type": "zippers", "vendor": "X", "quantity": 1, "cost_per_unit": 1}],
        })
        assert response.status_code == 422

    def test_machines(self, client: TestClient, admin_headers: Dict[str, str]):
        """Machine purchases list one row per machine"""
        response = client.post(f"{API}/machines", headers=admin_headers, json={
            "purchase_date": "2025-06-01",
            "items": [{"machine_name": "Overlock", "vendor": "Juki", "cost": 30000, "gst_percentage": 18}],
        })
        assert response.status_code == 201
        assert response.json()["order_id"] is None

        response = client.get(f"{API}/machines", headers=admin_headers)
        data = response.json()
        assert data["success"] is True
        assert data["count"] == 1
        assert data["data"][0]["total_with_gst"] == 35400

        response = client.get(f"{API}/purchases", headers=admin_headers)
        assert response.json() == []

    def test_production_cutting(self, client: TestClient, admin_headers: Dict[str, str], completed_purchase):
        """Cutting shortage is computed on save"""
        production_id = completed_purchase.production.id
        response = client.put(f"{API}/productions/{production_id}", headers=admin_headers, json={
            "status": "Cutting",
            "cutting_details": [{"fabric_type": "Cotton", "tag_mtr": 50, "cutting_mtr": 47.5}],
        })

        assert response.status_code == 200
        assert response.json()["cutting_details"][0]["shortage_mtr"] == 2.5


class TestStoreWorkflowAPI:
    """Purchase to store entry to store logs to inventory"""

    def test_full_store_workflow(
        self,
        client: TestClient,
        admin_headers: Dict[str, str],
        store_headers: Dict[str, str],
        completed_purchase,
    ):
        """Receive a purchase, issue material and reconcile the stock"""
        purchase_id = completed_purchase.id

        # Waiting for receipt
        response = client.get(f"{API}/store-entries/pending-purchases", headers=store_headers)
        assert [p["id"] for p in response.json()] == [purchase_id]

        response = client.get(f"{API}/store-entries", params={"include_pending": True}, headers=store_headers)
        assert response.json()[0]["is_pending"] is True

        # Draft from the purchase, record a short fabric delivery
        draft = client.get(f"{API}/store-entries/draft/{purchase_id}", headers=store_headers).json()
        entries = draft["entries"]
        assert len(entries) == 3
        entries[0]["store_in_qty"] = 98

        response = client.post(f"{API}/store-entries", headers=store_headers, json={
            "purchase_id": purchase_id,
            "store_entry_date": "2025-05-05",
            "entries": entries,
        })
        assert response.status_code == 201
        store_entry = response.json()
        assert store_entry["store_id"] == "STR-1"
        assert store_entry["total_shortage"] == 2
        assert store_entry["entries"][0]["shortage"] == 2

        check = client.get(f"{API}/store-entries/check/{purchase_id}", headers=store_headers).json()
        assert check["exists"] is True
        assert check["store_entry"]["store_id"] == "STR-1"

        # Initial log is opened automatically
        logs = client.get(f"{API}/store-logs/store-entry/{store_entry['id']}", headers=store_headers).json()
        assert [(log["log_id"], log["status"]) for log in logs] == [("LOG-1", "In Store")]

        # Issue fabric to cutting
        fabric = entries[0]["item_name"]
        response = client.post(f"{API}/store-logs", headers=store_headers, json={
            "store_entry_id": store_entry["id"],
            "log_date": "2025-05-06",
            "person_name": "Murugan",
            "department": "Cutting",
            "items": [{"item_name": fabric, "unit": "kg", "taken_qty": 90}],
        })
        assert response.status_code == 201
        log = response.json()
        assert log["status"] == "Out"
        assert log["total_in_hand"] == 90

        # Asking for more than is left
        response = client.post(f"{API}/store-logs", headers=store_headers, json={
            "store_entry_id": store_entry["id"],
            "log_date": "2025-05-07",
            "items": [{"item_name": fabric, "taken_qty": 10}],
        })
        APITestHelper.assert_error_response(
            response, 400, "business_rule", f"Insufficient stock for {fabric}"
        )

        # Return 5 kg
        response = client.put(f"{API}/store-logs/{log['id']}", headers=store_headers, json={
            "items": [{"item_name": fabric, "unit": "kg", "taken_qty": 90, "returned_qty": 5}],
        })
        assert response.status_code == 200
        assert response.json()["total_in_hand"] == 85

        stock = client.get(
            f"{API}/store-logs/available-stock/{store_entry['id']}", headers=store_headers
        ).json()
        assert stock["store_id"] == "STR-1"
        fabric_row = stock["stock_data"][0]
        assert fabric_row["initial_stock"] == 98
        assert fabric_row["available_stock"] == 13
        assert fabric_row["stock_status"] == "low"

        # Inventory across entries
        report = client.get(f"{API}/store-inventory", headers=admin_headers).json()
        assert report["stats"]["total_items"] == 3
        assert report["stats"]["low_stock_items"] == 1

        low = client.get(
            f"{API}/store-inventory", params={"status_filter": "low"}, headers=admin_headers
        ).json()
        assert [row["item_name"] for row in low["rows"]] == [fabric]

        # Received purchases are locked
        response = client.delete(f"{API}/purchases/{purchase_id}", headers=admin_headers)
        APITestHelper.assert_error_response(response, 400, "conflict")

    def test_duplicate_store_entry(self, client: TestClient, store_headers: Dict[str, str], store_entry):
        """Second entry for a purchase is refused"""
        response = client.post(f"{API}/store-entries", headers=store_headers, json={
            "purchase_id": store_entry.purchase_id,
            "store_entry_date": "2025-05-06",
            "entries": [{"item_name": "Cotton Fabric", "invoice_qty": 1, "store_in_qty": 1}],
        })
        APITestHelper.assert_error_response(
            response, 400, "conflict", "Store Entry already exists for this purchase"
        )

    def test_entry_without_stock(self, client: TestClient, store_headers: Dict[str, str], completed_purchase):
        """All-zero receipts are a validation error"""
        response = client.post(f"{API}/store-entries", headers=store_headers, json={
            "purchase_id": completed_purchase.id,
            "store_entry_date": "2025-05-06",
            "entries": [{"item_name": "Cotton Fabric", "invoice_qty": 10, "store_in_qty": 0}],
        })
        APITestHelper.assert_error_response(
            response, 400, "validation_error", "At least one item must have Store In Qty greater than 0"
        )

    def test_store_entry_by_purchase_missing(
        self, client: TestClient, store_headers: Dict[str, str], completed_purchase
    ):
        """No entry yet is a 404"""
        response = client.get(
            f"{API}/store-entries/purchase/{completed_purchase.id}", headers=store_headers
        )
        APITestHelper.assert_error_response(response, 404, "not_found")

    @pytest.mark.parametrize("file_format,media_type,magic", [
        ("csv", "text/csv", b"Store ID"),
        ("xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", b"PK"),
        ("pdf", "application/pdf", b"%PDF"),
    ])
    def test_inventory_export(
        self,
        client: TestClient,
        admin_headers: Dict[str, str],
        store_entry,
        file_format: str,
        media_type: str,
        magic: bytes,
    ):
        """Inventory downloads in every supported format"""
        response = client.get(
            f"{API}/store-inventory/export", params={"format": file_format}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith(media_type)
        assert f"store_inventory.{file_format}" in response.headers["content-disposition"]
        assert response.content.startswith(magic)

    def test_inventory_export_unknown_format(self, client: TestClient, admin_headers: Dict[str, str]):
        """Unsupported formats are rejected by the query schema"""
        response = client.get(
            f"{API}/store-inventory/export", params={"format": "docx"}, headers=admin_headers
        )
        assert response.status_code == 422
