"""
Tests for Order Service and the buyer, supplier and product masters
"""

import pytest
from datetime import date
from sqlalchemy.orm import Session

from garment_erp.core.exceptions import ConflictError, NotFoundError, ValidationError
from garment_erp.models.buyer import Buyer
from garment_erp.models.order import Order, OrderStatus
from garment_erp.models.product import Product
from garment_erp.models.production import Production
from garment_erp.models.purchase import Purchase
from garment_erp.models.store import StoreEntry, StoreLog
from garment_erp.schemas.buyer import BuyerCreate, BuyerUpdate
from garment_erp.schemas.order import OrderCreate, OrderUpdate
from garment_erp.schemas.supplier import SupplierCreate
from garment_erp.services.business_logic import financial_year_code
from garment_erp.services.buyer_service import BuyerService
from garment_erp.services.order_service import OrderService
from garment_erp.services.supplier_service import SupplierService


class TestPoNumbering:
    """PO/<fy>/<nnnn> numbering"""

    def test_first_po_of_year(self, db_session: Session):
        """An empty book starts at 0001"""
        po_no, fy = OrderService(db_session).next_po_no(date(2025, 4, 1))
        assert (po_no, fy) == ("PO/2526/0001", "2526")

    def test_numbering_continues(self, db_session: Session, make_order):
        """Orders in the same year count up"""
        first = make_order()
        second = make_order()
        fy = financial_year_code(date.today())

        assert first.po_no == f"PO/{fy}/0001"
        assert second.po_no == f"PO/{fy}/0002"

    def test_new_financial_year_restarts(self, db_session: Session, make_order):
        """A new financial year starts back at 0001"""
        make_order()
        service = OrderService(db_session)
        next_year = date(date.today().year + 2, 6, 1)

        po_no, fy = service.next_po_no(next_year)
        assert po_no == f"PO/{fy}/0001"


class TestOrderCreation:
    """Order intake"""

    def test_inline_buyer_is_created(self, db_session: Session, make_order):
        """A buyer without an id becomes a new Regular buyer"""
        order = make_order()

        buyer = db_session.query(Buyer).one()
        assert buyer.code == "BUY001"
        assert buyer.total_orders == 1
        assert order.buyer_id == buyer.id
        assert order.buyer_details["code"] == "BUY001"
        assert order.buyer_details["name"] == "Kumar Exports"

    def test_existing_buyer_by_id(self, db_session: Session, make_order, sample_buyer_data):
        """A buyer id reuses the buyer"""
        buyer = BuyerService(db_session).create_buyer(BuyerCreate(**sample_buyer_data))
        order = make_order(buyer={"id": buyer.id})

        assert order.buyer_id == buyer.id
        assert db_session.query(Buyer).count() == 1

    def test_inline_buyer_needs_mobile(self, db_session: Session, make_order):
        """New buyers need a name and a mobile"""
        with pytest.raises(ValidationError, match="name and mobile"):
            make_order(buyer={"name": "No Phone"})

    def test_totals_and_status(self, make_order):
        """Quantities are summed and the order waits for purchase"""
        order = make_order()

        assert order.total_qty == 150
        assert order.products[0]["product_total_qty"] == 150
        assert order.status == OrderStatus.PENDING_PURCHASE
        assert order.purchase_id is None

    def test_products_matched_by_name(self, db_session: Session, make_order, sample_order_data):
        """Product names match case-insensitively and usage is recorded"""
        make_order()
        products = [dict(sample_order_data["products"][0])]
        products[0]["product_details"] = {
            **products[0]["product_details"], "name": "  polo t-shirt ",
        }
        make_order(products=products)

        product = db_session.query(Product).one()
        assert product.name == "Polo T-Shirt"
        assert product.total_orders == 2
        assert product.total_quantity_ordered == 300

    def test_unknown_product_id(self, make_order, sample_order_data):
        """A product id must exist"""
        products = [{**sample_order_data["products"][0], "product_id": 404}]
        with pytest.raises(ValidationError, match="Product not found"):
            make_order(products=products)


class TestOrderChanges:
    """Update, status and delete"""

    def test_update_products(self, db_session: Session, make_order):
        """Replacing products recomputes the total"""
        order = make_order()
        updated = OrderService(db_session).update_order(order.id, OrderUpdate(products=[{
            "product_details": {"name": "Hoodie", "style": "Zip", "color": "Grey", "fabric_type": "Fleece"},
            "sizes": [{"size": "XL", "qty": 40}],
        }]))

        assert updated.total_qty == 40
        assert updated.products[0]["product_details"]["name"] == "Hoodie"

    def test_update_status(self, db_session: Session, make_order):
        """Status can be set directly"""
        order = make_order()
        updated = OrderService(db_session).update_status(order.id, OrderStatus.DELIVERED)
        assert updated.status == "Delivered"

    def test_orders_by_buyer(self, db_session: Session, make_order):
        """Orders of one buyer, newest first"""
        first = make_order()
        second = make_order(buyer={"id": first.buyer_id})

        orders, total = OrderService(db_session).orders_by_buyer(first.buyer_id)
        assert total == 2
        assert [o.id for o in orders] == [second.id, first.id]

    def test_delete_cascades(self, db_session: Session, store_entry: StoreEntry):
        """Deleting an order removes purchase, production and store records"""
        OrderService(db_session).delete_order(store_entry.order_id)

        assert db_session.query(Order).count() == 0
        assert db_session.query(Purchase).count() == 0
        assert db_session.query(Production).count() == 0
        assert db_session.query(StoreEntry).count() == 0
        assert db_session.query(StoreLog).count() == 0

    def test_missing_order(self, db_session: Session):
        """Unknown ids raise NotFoundError"""
        with pytest.raises(NotFoundError):
            OrderService(db_session).get_order(3)


class TestBuyerService:
    """Buyer master"""

    def test_codes_by_category(self, db_session: Session, sample_buyer_data):
        """Regular buyers get BUYnnn, YAS buyers YASnnn"""
        service = BuyerService(db_session)
        regular = service.create_buyer(BuyerCreate(**sample_buyer_data))
        yas = service.create_buyer(BuyerCreate(
            **{**sample_buyer_data, "buyer_category": "YAS", "yas_buyer_type": "Retail"}
        ))
        second = service.create_buyer(BuyerCreate(**sample_buyer_data))

        assert (regular.code, yas.code, second.code) == ("BUY001", "YAS001", "BUY002")

    def test_name_and_email_normalised(self, db_session: Session, sample_buyer_data):
        """First letter is capitalised, email lower-cased"""
        buyer = BuyerService(db_session).create_buyer(BuyerCreate(**sample_buyer_data))
        assert buyer.name == "Ravi textiles"
        assert buyer.email == "orders@ravitextiles.in"

    def test_yas_needs_type(self, sample_buyer_data):
        """YAS buyers need a YAS buyer type"""
        with pytest.raises(ValueError):
            BuyerCreate(**{**sample_buyer_data, "buyer_category": "YAS"})

    def test_switch_to_regular_clears_yas_type(self, db_session: Session, sample_buyer_data):
        """Leaving YAS drops the YAS buyer type"""
        service = BuyerService(db_session)
        buyer = service.create_buyer(BuyerCreate(
            **{**sample_buyer_data, "buyer_category": "YAS", "yas_buyer_type": "Retail"}
        ))
        buyer = service.update_buyer(buyer.id, BuyerUpdate(buyer_category="Regular"))

        assert buyer.buyer_category == "Regular"
        assert buyer.yas_buyer_type is None

    def test_buyer_with_orders_cannot_be_deleted(self, db_session: Session, make_order):
        """Buyers referenced by orders are kept"""
        order = make_order()
        with pytest.raises(ConflictError):
            BuyerService(db_session).delete_buyer(order.buyer_id)

    def test_search_needs_two_characters(self, db_session: Session, sample_buyer_data):
        """Typeahead ignores one-character queries"""
        service = BuyerService(db_session)
        service.create_buyer(BuyerCreate(**sample_buyer_data))

        assert service.search("r") == []
        assert [b.code for b in service.search("ravi")] == ["BUY001"]


class TestSupplierService:
    """Supplier master"""

    def test_codes(self, db_session: Session, sample_supplier_data):
        """Suppliers are numbered SUPnnn"""
        service = SupplierService(db_session)
        first = service.create_supplier(SupplierCreate(**sample_supplier_data))
        second = service.create_supplier(SupplierCreate(**sample_supplier_data))

        assert (first.code, second.code) == ("SUP001", "SUP002")
        assert first.vendor_goods == ["Cotton", "Lycra"]

    def test_search(self, db_session: Session, sample_supplier_data):
        """Search matches name and company"""
        service = SupplierService(db_session)
        service.create_supplier(SupplierCreate(**sample_supplier_data))

        assert len(service.search("fabrics")) == 1
        assert service.search("zz") == []
