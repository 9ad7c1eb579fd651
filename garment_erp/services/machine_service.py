"""
Machine Purchase Service
Machine purchases are purchases with no order whose lines are all machines
"""
from typing import List, Dict, Any
from sqlalchemy.orm import Session
import logging

from garment_erp.core.exceptions import NotFoundError
from garment_erp.models.purchase import Purchase, PurchaseItem, PurchaseStatus, PurchaseItemType
from garment_erp.schemas.purchase import MachinePurchaseCreate, MachinePurchaseUpdate
from garment_erp.services.purchase_service import replace_items
from garment_erp.services.sequence import next_sequence

logger = logging.getLogger(__name__)


class MachineService:
    """Machine purchases"""

    def __init__(self, db: Session):
        self.db = db

    def list_machines(self) -> List[Dict[str, Any]]:
        """Flattened machine rows across every machine purchase"""
        items = (
            self.db.query(PurchaseItem)
            .join(Purchase, PurchaseItem.purchase_id == Purchase.id)
            .filter(PurchaseItem.item_type == PurchaseItemType.MACHINE)
            .order_by(Purchase.id.desc(), PurchaseItem.line_no)
            .all()
        )
        return [
            {
                "purchase_id": item.purchase_id,
                "pur_no": item.purchase.pur_no,
                "item_id": item.id,
                "machine_name": item.machine_name,
                "vendor": item.vendor,
                "cost": item.cost,
                "gst_percentage": item.gst_percentage,
                "total_with_gst": item.total_with_gst,
                "purchase_date": item.purchase_date or item.purchase.purchase_date,
                "remarks": item.remarks,
            }
            for item in items
        ]

    def get_machine_purchase(self, purchase_id: int) -> Purchase:
        purchase = self.db.query(Purchase).filter(Purchase.id == purchase_id).first()
        if not purchase or not purchase.has_machine_items:
            raise NotFoundError("Machine purchase not found")
        return purchase

    def create_machine_purchase(self, purchase_in: MachinePurchaseCreate) -> Purchase:
        purchase = Purchase(
            pur_no=f"PUR-{next_sequence(self.db, 'purchase')}",
            order_id=None,
            products=[],
            purchase_date=purchase_in.purchase_date,
            remarks=purchase_in.remarks or "",
            status=PurchaseStatus.COMPLETED,
        )
        self.db.add(purchase)
        replace_items(self.db, purchase, purchase_in.items)

        self.db.commit()
        self.db.refresh(purchase)
        logger.info(
            f"Machine purchase created: {purchase.pur_no}, "
            f"{len(purchase.items)} machines, total={purchase.grand_total_with_gst}"
        )
        return purchase

    def update_machine_purchase(self, purchase_id: int, purchase_in: MachinePurchaseUpdate) -> Purchase:
        purchase = self.get_machine_purchase(purchase_id)

        data = purchase_in.model_dump(exclude_unset=True)
        if "purchase_date" in data:
            purchase.purchase_date = purchase_in.purchase_date
        if "remarks" in data:
            purchase.remarks = purchase_in.remarks or ""
        if purchase_in.items is not None:
            replace_items(self.db, purchase, purchase_in.items)

        self.db.commit()
        self.db.refresh(purchase)
        logger.info(f"Machine purchase updated: {purchase.pur_no}")
        return purchase

    def delete_machine_purchase(self, purchase_id: int) -> None:
        purchase = self.get_machine_purchase(purchase_id)
        self.db.delete(purchase)
        self.db.commit()
        logger.info(f"Machine purchase deleted: {purchase.pur_no}")
