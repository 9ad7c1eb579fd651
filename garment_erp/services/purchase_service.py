"""
Purchase Service
Material purchases against orders, purchase costing and the hand-off to
production
"""
from typing import List, Optional, Iterable, Any
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import or_
import logging

from garment_erp.core.exceptions import (
    BusinessLogicError, ConflictError, NotFoundError, ValidationError
)
from garment_erp.models.auth import User
from garment_erp.models.order import Order, OrderStatus, OrderType
from garment_erp.models.production import Production, ProductionStatus
from garment_erp.models.purchase import Purchase, PurchaseItem, PurchaseStatus, PurchaseItemType
from garment_erp.models.supplier import Supplier
from garment_erp.schemas.purchase import PurchaseCreate, PurchaseUpdate
from garment_erp.services.business_logic import PurchaseCostService
from garment_erp.services.sequence import next_sequence
from garment_erp.services.supplier_service import SupplierService

logger = logging.getLogger(__name__)

PURCHASE_EXISTS_MESSAGE = (
    "Purchase already exists for this order. Please update the existing purchase instead."
)

# item_type -> prefix of the purchase total columns
TOTAL_COLUMNS = {
    PurchaseItemType.FABRIC: "fabric",
    PurchaseItemType.BUTTONS: "buttons",
    PurchaseItemType.PACKETS: "packets",
    PurchaseItemType.MACHINE: "machines",
}


def build_purchase_item(db: Session, line_no: int, item: Any) -> PurchaseItem:
    """
    Turn one validated purchase line into a priced PurchaseItem

    Args:
        item: one of the PurchaseItemIn variants
    """
    data = item.model_dump()
    item_type = data.pop("item_type")

    vendor_id = data.get("vendor_id")
    if vendor_id is not None:
        supplier = db.query(Supplier).filter(Supplier.id == vendor_id).first()
        if supplier is None:
            raise ValidationError(f"Supplier {vendor_id} not found for {item_type} line {line_no}")
        if item_type != PurchaseItemType.MACHINE and not data.get("vendor_code"):
            data["vendor_code"] = supplier.code

    if item_type == PurchaseItemType.MACHINE:
        costing = PurchaseCostService.calculate_machine(data["cost"], data["gst_percentage"])
    else:
        costing = PurchaseCostService.calculate_line(
            data["quantity"], data["cost_per_unit"], data["gst_percentage"]
        )

    return PurchaseItem(
        line_no=line_no,
        item_type=item_type,
        total_cost=costing.total_cost,
        total_with_gst=costing.total_with_gst,
        **data,
    )


def replace_items(db: Session, purchase: Purchase, items: Iterable[Any]) -> None:
    """Swap the purchase lines for a new set and reprice the header"""
    purchase.items.clear()
    db.flush()
    for line_no, item in enumerate(items, start=1):
        purchase.items.append(build_purchase_item(db, line_no, item))
    apply_totals(purchase)


def apply_totals(purchase: Purchase) -> None:
    """Recalculate category and grand totals from the lines"""
    totals = PurchaseCostService.summarize(
        (
            {
                "item_type": item.item_type,
                "total_cost": item.total_cost,
                "total_with_gst": item.total_with_gst,
            }
            for item in purchase.items
        ),
        PurchaseItemType.ALL,
    )

    for item_type, prefix in TOTAL_COLUMNS.items():
        bucket = totals.categories[item_type]
        setattr(purchase, f"{prefix}_total_cost", bucket.total_cost)
        setattr(purchase, f"{prefix}_total_with_gst", bucket.total_with_gst)

    purchase.grand_total_cost = totals.grand_total_cost
    purchase.grand_total_with_gst = totals.grand_total_with_gst


class PurchaseService:
    """
    Purchase lifecycle

    A purchase is Completed once it has lines (unless a status is given
    explicitly). Completing a purchase opens a production run for its order.
    """

    def __init__(self, db: Session, current_user: Optional[User] = None):
        self.db = db
        self.current_user = current_user

    # Queries

    def list_purchases(
        self,
        status: Optional[str] = None,
        order_id: Optional[int] = None,
        order_type: Optional[str] = None,
        search: Optional[str] = None,
        include_machines: bool = False,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Purchase]:
        query = self.db.query(Purchase)
        if not include_machines:
            query = query.filter(Purchase.order_id.isnot(None))
        if status:
            query = query.filter(Purchase.status == status)
        if order_id:
            query = query.filter(Purchase.order_id == order_id)
        if order_type:
            query = query.filter(Purchase.order_type == order_type)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Purchase.pur_no.ilike(pattern),
                Purchase.po_no.ilike(pattern),
                Purchase.buyer_code.ilike(pattern),
            ))
        return query.order_by(Purchase.id.desc()).offset(skip).limit(limit).all()

    def get_purchase(self, purchase_id: int) -> Purchase:
        purchase = self.db.query(Purchase).filter(Purchase.id == purchase_id).first()
        if not purchase:
            raise NotFoundError("Purchase not found")
        return purchase

    def get_by_order(self, order_id: int) -> Optional[Purchase]:
        return self.db.query(Purchase).filter(Purchase.order_id == order_id).first()

    def search_suppliers(self, q: Optional[str]) -> List[Supplier]:
        return SupplierService(self.db).search(q)

    # Commands

    def create_purchase(self, purchase_in: PurchaseCreate) -> Purchase:
        if not purchase_in.order_id:
            raise ValidationError("Order ID is required")

        order = self.db.query(Order).filter(Order.id == purchase_in.order_id).first()
        if not order:
            raise NotFoundError("Order not found")

        if order.order_type not in OrderType.PURCHASABLE:
            raise BusinessLogicError(
                f"Purchases can only be created for FOB or JOB-Works orders, not {order.order_type}"
            )

        if self.get_by_order(order.id):
            raise ConflictError(PURCHASE_EXISTS_MESSAGE)

        if any(item.item_type == PurchaseItemType.MACHINE for item in purchase_in.items):
            raise ValidationError("Machine purchases are recorded under /machines")

        purchase = Purchase(
            pur_no=f"PUR-{next_sequence(self.db, 'purchase')}",
            order_id=order.id,
            order_date=order.order_date,
            po_no=order.po_no,
            order_type=order.order_type,
            buyer_code=(order.buyer_details or {}).get("code"),
            products=order.products,
            purchase_date=purchase_in.purchase_date,
            remarks=purchase_in.remarks or "",
        )
        self.db.add(purchase)
        replace_items(self.db, purchase, purchase_in.items)
        self._resolve_status(purchase, purchase_in.status)
        self._sync_order(purchase, order)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(PURCHASE_EXISTS_MESSAGE)

        self.db.refresh(purchase)
        logger.info(
            f"Purchase created: {purchase.pur_no} for order {order.po_no}, "
            f"status={purchase.status}, total={purchase.grand_total_with_gst}"
        )
        return purchase

    def update_purchase(self, purchase_id: int, purchase_in: PurchaseUpdate) -> Purchase:
        purchase = self.get_purchase(purchase_id)
        self._ensure_not_stocked(purchase)

        data = purchase_in.model_dump(exclude_unset=True)
        if "purchase_date" in data:
            purchase.purchase_date = purchase_in.purchase_date
        if "remarks" in data:
            purchase.remarks = purchase_in.remarks or ""
        if purchase_in.items is not None:
            if any(item.item_type == PurchaseItemType.MACHINE for item in purchase_in.items):
                raise ValidationError("Machine purchases are recorded under /machines")
            replace_items(self.db, purchase, purchase_in.items)

        previous_status = purchase.status
        self._resolve_status(purchase, purchase_in.status)
        if purchase.order is not None:
            if purchase.status != previous_status:
                self._sync_order(purchase, purchase.order)
            elif purchase.status == PurchaseStatus.COMPLETED:
                self._ensure_production(purchase, purchase.order)

        self.db.commit()
        self.db.refresh(purchase)
        logger.info(f"Purchase updated: {purchase.pur_no}, status={purchase.status}")
        return purchase

    def complete_purchase(self, purchase_id: int) -> Purchase:
        purchase = self.get_purchase(purchase_id)
        purchase.status = PurchaseStatus.COMPLETED
        if purchase.order is not None:
            purchase.order.status = OrderStatus.PURCHASE_COMPLETED

        self.db.commit()
        self.db.refresh(purchase)
        logger.info(f"Purchase marked completed: {purchase.pur_no}")
        return purchase

    def delete_purchase(self, purchase_id: int) -> None:
        purchase = self.get_purchase(purchase_id)
        self._ensure_not_stocked(purchase)

        order = purchase.order
        if purchase.production is not None:
            self.db.delete(purchase.production)
        if order is not None:
            order.status = OrderStatus.PENDING_PURCHASE

        self.db.delete(purchase)
        self.db.commit()
        logger.info(f"Purchase deleted: {purchase.pur_no}")

    # Helpers

    @staticmethod
    def _resolve_status(purchase: Purchase, requested: Any = None) -> None:
        if requested is not None:
            purchase.status = requested.value if hasattr(requested, "value") else requested
        else:
            purchase.status = PurchaseStatus.COMPLETED if purchase.items else PurchaseStatus.PENDING

    def _sync_order(self, purchase: Purchase, order: Order) -> None:
        """Move the order along with its purchase and open production when done"""
        if purchase.status != PurchaseStatus.COMPLETED:
            order.status = OrderStatus.PENDING_PURCHASE
            return

        order.status = OrderStatus.PURCHASE_COMPLETED
        production = self._ensure_production(purchase, order)
        if production.status == ProductionStatus.PENDING_PRODUCTION:
            order.status = OrderStatus.PENDING_PRODUCTION

    def _ensure_production(self, purchase: Purchase, order: Order) -> Production:
        production = order.production
        if production is None:
            production = Production(
                order=order,
                status=ProductionStatus.PENDING_PRODUCTION,
                production_details={},
                cutting_details=[],
            )
            self.db.add(production)
            logger.info(f"Production opened for order {order.po_no}")

        production.purchase = purchase
        production.order_type = order.order_type
        production.po_no = order.po_no
        production.buyer_code = (order.buyer_details or {}).get("code")
        production.buyer_name = (order.buyer_details or {}).get("name")
        production.products = order.products
        production.total_qty = order.total_qty
        production.grand_total_cost = purchase.grand_total_cost
        production.grand_total_with_gst = purchase.grand_total_with_gst
        return production

    @staticmethod
    def _ensure_not_stocked(purchase: Purchase) -> None:
        if purchase.store_entry is not None:
            raise ConflictError(
                f"Purchase {purchase.pur_no} has store entry {purchase.store_entry.store_id} "
                f"and can no longer be changed"
            )
