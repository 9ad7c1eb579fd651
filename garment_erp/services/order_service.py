"""
Order Service
Order intake, PO numbering and order status tracking
"""
from typing import List, Optional, Tuple, Dict, Any
from datetime import date, datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func
import logging
import re

from garment_erp.core.config import settings
from garment_erp.core.exceptions import ConflictError, NotFoundError, ValidationError
from garment_erp.models.buyer import Buyer
from garment_erp.models.order import Order
from garment_erp.models.product import Product
from garment_erp.models.store import StoreEntry
from garment_erp.schemas.buyer import BuyerCreate
from garment_erp.schemas.order import OrderCreate, OrderUpdate, OrderBuyer, OrderProductLine
from garment_erp.schemas.product import ProductCreate
from garment_erp.services.business_logic import financial_year_code
from garment_erp.services.buyer_service import BuyerService
from garment_erp.services.product_service import ProductService

logger = logging.getLogger(__name__)

PO_NO_PATTERN = re.compile(r"^PO/(\d{4})/(\d+)$")


class OrderService:
    """Order operations"""

    def __init__(self, db: Session):
        self.db = db

    # PO numbering

    def next_po_no(self, on: Optional[date] = None) -> Tuple[str, str]:
        """
        Next PO number for the financial year containing `on`

        Numbering restarts at 0001 when the latest order belongs to an
        earlier financial year.

        Returns:
            (po_no, financial_year)
        """
        financial_year = financial_year_code(on, settings.FINANCIAL_YEAR_START_MONTH)
        last = self.db.query(Order.po_no).order_by(Order.id.desc()).first()

        next_number = 1
        if last and last[0]:
            match = PO_NO_PATTERN.match(last[0])
            if match and match.group(1) == financial_year:
                next_number = int(match.group(2)) + 1

        return f"PO/{financial_year}/{next_number:04d}", financial_year

    # Queries

    def list_orders(
        self,
        status: Optional[str] = None,
        order_type: Optional[str] = None,
        buyer_id: Optional[int] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Order]:
        query = self._filtered(status, order_type, buyer_id, search)
        return query.order_by(Order.id.desc()).offset(skip).limit(limit).all()

    def count_orders(
        self,
        status: Optional[str] = None,
        order_type: Optional[str] = None,
        buyer_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> int:
        return self._filtered(status, order_type, buyer_id, search).count()

    def _filtered(self, status, order_type, buyer_id, search):
        query = self.db.query(Order)
        if status:
            query = query.filter(Order.status == status)
        if order_type:
            query = query.filter(Order.order_type == order_type)
        if buyer_id:
            query = query.filter(Order.buyer_id == buyer_id)
        if search:
            pattern = f"%{search}%"
            query = query.join(Buyer).filter(
                (Order.po_no.ilike(pattern)) | (Buyer.name.ilike(pattern)) | (Buyer.code.ilike(pattern))
            )
        return query

    def get_order(self, order_id: int) -> Order:
        order = self.db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError("Order not found")
        return order

    def orders_by_buyer(self, buyer_id: int, skip: int = 0, limit: int = 20) -> Tuple[List[Order], int]:
        orders = self.list_orders(buyer_id=buyer_id, skip=skip, limit=limit)
        return orders, self.count_orders(buyer_id=buyer_id)

    # Commands

    def create_order(self, order_in: OrderCreate) -> Order:
        po_no, _ = self.next_po_no(date.today())
        buyer = self._resolve_buyer(order_in.buyer)
        products, total_qty = self._build_products(order_in.products)

        order = Order(
            po_no=po_no,
            order_date=order_in.order_date,
            order_type=order_in.order_type.value,
            buyer_id=buyer.id,
            buyer_details=self._buyer_snapshot(buyer),
            products=products,
            total_qty=total_qty,
        )
        self.db.add(order)

        now = datetime.now(timezone.utc)
        buyer.total_orders = (buyer.total_orders or 0) + 1
        buyer.last_order_date = now
        self._record_product_usage(products, now)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"Order {po_no} already exists, please retry")

        self.db.refresh(order)
        logger.info(f"Order created: {order.po_no} for buyer {buyer.code} ({total_qty} pcs)")
        return order

    def update_order(self, order_id: int, order_in: OrderUpdate) -> Order:
        order = self.get_order(order_id)
        data = order_in.model_dump(exclude_unset=True)

        if "order_date" in data and order_in.order_date:
            order.order_date = order_in.order_date
        if "order_type" in data and order_in.order_type:
            order.order_type = order_in.order_type.value
        if order_in.buyer is not None:
            buyer = self._resolve_buyer(order_in.buyer)
            order.buyer_id = buyer.id
            order.buyer_details = self._buyer_snapshot(buyer)
        if order_in.products is not None:
            order.products, order.total_qty = self._build_products(order_in.products)

        self.db.commit()
        self.db.refresh(order)
        logger.info(f"Order updated: {order.po_no}")
        return order

    def update_status(self, order_id: int, status: str) -> Order:
        order = self.get_order(order_id)
        previous = order.status
        order.status = status
        self.db.commit()
        self.db.refresh(order)
        logger.info(f"Order {order.po_no} status: {previous} -> {status}")
        return order

    def delete_order(self, order_id: int) -> None:
        """Delete an order with its purchase, production and store records"""
        order = self.get_order(order_id)

        for entry in self.db.query(StoreEntry).filter(StoreEntry.order_id == order.id).all():
            self.db.delete(entry)
        if order.purchase is not None:
            if order.purchase.store_entry is not None:
                self.db.delete(order.purchase.store_entry)
            self.db.delete(order.purchase)
        if order.production is not None:
            self.db.delete(order.production)

        self.db.delete(order)
        self.db.commit()
        logger.info(f"Order deleted with related records: {order.po_no}")

    # Helpers

    def _resolve_buyer(self, buyer_ref: OrderBuyer) -> Buyer:
        if buyer_ref.id:
            return BuyerService(self.db).get_buyer(buyer_ref.id)

        if not buyer_ref.name or not buyer_ref.mobile:
            raise ValidationError("Buyer name and mobile are required to create a new buyer")

        buyer = BuyerService(self.db).create_buyer(
            BuyerCreate(
                name=buyer_ref.name,
                company_name=buyer_ref.company_name or "",
                mobile=buyer_ref.mobile,
                gst=buyer_ref.gst,
                email=buyer_ref.email,
                address=buyer_ref.address,
            ),
            commit=False,
        )
        logger.info(f"Buyer {buyer.code} created from order form")
        return buyer

    @staticmethod
    def _buyer_snapshot(buyer: Buyer) -> Dict[str, Any]:
        return {
            "name": buyer.name,
            "code": buyer.code,
            "mobile": buyer.mobile,
            "gst": buyer.gst,
            "email": buyer.email,
            "address": buyer.address,
        }

    def _build_products(self, lines: List[OrderProductLine]) -> Tuple[List[Dict[str, Any]], int]:
        products = []
        total_qty = 0
        for line in lines:
            product = self._resolve_product(line)
            sizes = [{"size": size.size.strip(), "qty": size.qty} for size in line.sizes]
            product_total = sum(size["qty"] for size in sizes)
            products.append({
                "product_id": product.id,
                "product_details": line.product_details.model_dump(),
                "sizes": sizes,
                "product_total_qty": product_total,
            })
            total_qty += product_total
        return products, total_qty

    def _resolve_product(self, line: OrderProductLine) -> Product:
        if line.product_id:
            product = self.db.query(Product).filter(Product.id == line.product_id).first()
            if not product:
                raise ValidationError(f"Product not found: {line.product_details.name}")
            return product

        details = line.product_details
        product = (
            self.db.query(Product)
            .filter(func.lower(Product.name) == details.name.strip().lower())
            .first()
        )
        if product:
            return product

        return ProductService(self.db).create_product(
            ProductCreate(
                name=details.name.strip(),
                fabric=details.fabric_type,
                color=details.color,
                styles=[details.style],
            ),
            commit=False,
        )

    def _record_product_usage(self, products: List[Dict[str, Any]], when: datetime) -> None:
        for line in products:
            product = self.db.query(Product).filter(Product.id == line["product_id"]).first()
            if product is None:
                continue
            product.total_orders = (product.total_orders or 0) + 1
            product.total_quantity_ordered = (product.total_quantity_ordered or 0) + line["product_total_qty"]
            product.last_ordered_date = when
