"""
Store Entry Service
Recording materials physically received in the warehouse for a purchase
"""
from typing import List, Optional, Dict, Any, Iterable
from decimal import Decimal
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from garment_erp.core.exceptions import (
    BusinessLogicError, ConflictError, NotFoundError, ValidationError
)
from garment_erp.models.auth import User
from garment_erp.models.purchase import Purchase, PurchaseStatus, PurchaseItemType
from garment_erp.models.store import (
    StoreEntry, StoreEntryItem, StoreEntryStatus, StoreLog, StoreLogStatus
)
from garment_erp.schemas.store import StoreEntryCreate, StoreEntryUpdate, StoreEntryItemIn
from garment_erp.services.business_logic import ShortageSurplusCalculator, ZERO
from garment_erp.services.sequence import next_sequence

logger = logging.getLogger(__name__)

ENTRY_EXISTS_MESSAGE = "Store Entry already exists for this purchase"
NO_STOCK_MESSAGE = "At least one item must have Store In Qty greater than 0"
INITIAL_LOG_REMARKS = "Initial entry - Materials received in warehouse"

# purchase_mode -> store unit
PURCHASE_MODE_UNITS = {
    "kg": "kg",
    "meters": "mtr",
    "piece": "piece",
    "qty": "qty",
    "pieces": "pieces",
    "packet": "packet",
}


def build_entry_items(lines: Iterable[StoreEntryItemIn]) -> List[StoreEntryItem]:
    """Create entry lines with shortage and surplus worked out server side"""
    items = []
    for line_no, line in enumerate(lines, start=1):
        result = ShortageSurplusCalculator.calculate(line.invoice_qty, line.store_in_qty)
        items.append(StoreEntryItem(
            line_no=line_no,
            shortage=result.shortage,
            surplus=result.surplus,
            **line.model_dump(),
        ))
    return items


def apply_entry_totals(store_entry: StoreEntry) -> None:
    store_entry.total_invoice_qty = sum((Decimal(str(i.invoice_qty or 0)) for i in store_entry.entries), ZERO)
    store_entry.total_store_in_qty = sum((Decimal(str(i.store_in_qty or 0)) for i in store_entry.entries), ZERO)
    store_entry.total_shortage = sum((Decimal(str(i.shortage or 0)) for i in store_entry.entries), ZERO)
    store_entry.total_surplus = sum((Decimal(str(i.surplus or 0)) for i in store_entry.entries), ZERO)


def _has_stock(lines: Iterable[StoreEntryItemIn]) -> bool:
    return any(line.store_in_qty > 0 for line in lines)


class StoreEntryService:
    """
    Store entries

    One entry per completed purchase. Creating an entry also opens the
    first "In Store" log for it.
    """

    def __init__(self, db: Session, current_user: Optional[User] = None):
        self.db = db
        self.current_user = current_user

    # Queries

    def list_entries(
        self,
        status: Optional[str] = None,
        order_id: Optional[int] = None,
        purchase_id: Optional[int] = None,
        include_pending: bool = False,
    ) -> List[Any]:
        """
        List store entries, newest first

        With include_pending, completed purchases that have no entry yet are
        appended as pending placeholder rows.
        """
        query = self.db.query(StoreEntry)
        if status:
            query = query.filter(StoreEntry.status == status)
        if order_id:
            query = query.filter(StoreEntry.order_id == order_id)
        if purchase_id:
            query = query.filter(StoreEntry.purchase_id == purchase_id)
        entries: List[Any] = query.order_by(StoreEntry.id.desc()).all()

        if include_pending and status in (None, StoreEntryStatus.PENDING):
            pending = self.pending_purchases()
            if order_id:
                pending = [p for p in pending if p.order_id == order_id]
            if purchase_id:
                pending = [p for p in pending if p.id == purchase_id]
            entries.extend(self._pending_row(p) for p in pending)

        return entries

    def pending_purchases(self) -> List[Purchase]:
        """Completed material purchases with no store entry yet"""
        purchases = (
            self.db.query(Purchase)
            .outerjoin(StoreEntry, StoreEntry.purchase_id == Purchase.id)
            .filter(Purchase.status == PurchaseStatus.COMPLETED)
            .filter(Purchase.order_id.isnot(None))
            .filter(StoreEntry.id.is_(None))
            .order_by(Purchase.id.desc())
            .all()
        )
        return [p for p in purchases if not p.is_machine_only]

    def get_entry(self, entry_id: int) -> StoreEntry:
        store_entry = self.db.query(StoreEntry).filter(StoreEntry.id == entry_id).first()
        if not store_entry:
            raise NotFoundError("Store Entry not found")
        return store_entry

    def find_by_purchase(self, purchase_id: int) -> Optional[StoreEntry]:
        return self.db.query(StoreEntry).filter(StoreEntry.purchase_id == purchase_id).first()

    def get_by_purchase(self, purchase_id: int) -> StoreEntry:
        store_entry = self.find_by_purchase(purchase_id)
        if not store_entry:
            raise NotFoundError("Store Entry not found for this purchase")
        return store_entry

    def check(self, purchase_id: int) -> Dict[str, Any]:
        store_entry = self.find_by_purchase(purchase_id)
        return {"exists": store_entry is not None, "store_entry": store_entry}

    def draft(self, purchase_id: int) -> Dict[str, Any]:
        """Unsaved entry pre-filled from the purchase's material lines"""
        purchase = self._get_purchase(purchase_id)

        lines = []
        for item in purchase.items:
            if item.item_type not in PurchaseItemType.MATERIALS:
                continue
            if item.item_type == PurchaseItemType.FABRIC:
                item_type = "fabric"
                item_name = " ".join(filter(None, [item.fabric_type, item.product_name])) or "Fabric"
            else:
                item_type = "accessories"
                detail = item.button_type if item.item_type == PurchaseItemType.BUTTONS else item.packet_type
                item_name = " ".join(filter(None, [item.item_type.capitalize(), detail, item.size]))

            quantity = item.quantity or ZERO
            lines.append(StoreEntryItemIn(
                item_type=item_type,
                item_name=item_name,
                supplier_id=item.vendor_id,
                supplier_name=item.vendor,
                supplier_code=item.vendor_code,
                unit=PURCHASE_MODE_UNITS.get(item.purchase_mode, "kg"),
                purchase_qty=quantity,
                invoice_qty=quantity,
                store_in_qty=quantity,
                remarks=item.remarks or "",
            ))

        return {
            "purchase_id": purchase.id,
            "pur_no": purchase.pur_no,
            "order_id": purchase.order_id,
            "order_ref": purchase.po_no,
            "order_type": purchase.order_type,
            "buyer_code": purchase.buyer_code,
            "purchase_date": purchase.purchase_date,
            "entries": lines,
        }

    # Commands

    def create_entry(self, entry_in: StoreEntryCreate) -> StoreEntry:
        if not entry_in.purchase_id or not entry_in.store_entry_date or not entry_in.entries:
            raise ValidationError("Purchase ID, store entry date and at least one item are required")

        purchase = self._get_purchase(entry_in.purchase_id)

        if purchase.status != PurchaseStatus.COMPLETED:
            raise BusinessLogicError("Cannot create Store Entry. Purchase is not completed yet.")

        if self.find_by_purchase(purchase.id):
            raise ConflictError(ENTRY_EXISTS_MESSAGE)

        if not _has_stock(entry_in.entries):
            raise ValidationError(NO_STOCK_MESSAGE)

        if purchase.is_machine_only:
            raise BusinessLogicError("Machine purchases are not received into the store")

        serial_no = next_sequence(self.db, "store_entry")
        store_entry = StoreEntry(
            store_id=f"STR-{serial_no}",
            serial_no=serial_no,
            purchase_id=purchase.id,
            order_id=purchase.order_id,
            order_ref=purchase.po_no,
            order_date=purchase.order_date,
            order_type=purchase.order_type,
            buyer_code=purchase.buyer_code,
            pur_no=purchase.pur_no,
            purchase_date=purchase.purchase_date,
            pes_no="N/A",
            store_entry_date=entry_in.store_entry_date,
            remarks=entry_in.remarks or "",
            status=StoreEntryStatus.COMPLETED,
            created_by=self.current_user.id if self.current_user else None,
        )
        store_entry.entries = build_entry_items(entry_in.entries)
        apply_entry_totals(store_entry)
        self.db.add(store_entry)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(ENTRY_EXISTS_MESSAGE)

        self.db.refresh(store_entry)
        logger.info(
            f"Store entry created: {store_entry.store_id} for {purchase.pur_no}, "
            f"store_in={store_entry.total_store_in_qty}, shortage={store_entry.total_shortage}"
        )

        self._open_initial_log(store_entry)
        return store_entry

    def update_entry(self, entry_id: int, entry_in: StoreEntryUpdate) -> StoreEntry:
        store_entry = self.get_entry(entry_id)

        if entry_in.store_entry_date is not None:
            store_entry.store_entry_date = entry_in.store_entry_date
        if entry_in.remarks is not None:
            store_entry.remarks = entry_in.remarks
        if entry_in.entries is not None:
            if not _has_stock(entry_in.entries):
                raise ValidationError(NO_STOCK_MESSAGE)
            store_entry.entries.clear()
            self.db.flush()
            store_entry.entries.extend(build_entry_items(entry_in.entries))
            apply_entry_totals(store_entry)

        self.db.commit()
        self.db.refresh(store_entry)
        logger.info(f"Store entry updated: {store_entry.store_id}")
        return store_entry

    def delete_entry(self, entry_id: int) -> None:
        store_entry = self.get_entry(entry_id)
        log_count = len(store_entry.logs)
        self.db.delete(store_entry)
        self.db.commit()
        logger.info(f"Store entry deleted: {store_entry.store_id} with {log_count} logs")

    # Helpers

    def _get_purchase(self, purchase_id: int) -> Purchase:
        purchase = self.db.query(Purchase).filter(Purchase.id == purchase_id).first()
        if not purchase:
            raise NotFoundError("Purchase not found")
        return purchase

    def _open_initial_log(self, store_entry: StoreEntry) -> None:
        """First log of every entry; a failure here leaves the entry in place"""
        try:
            serial_no = next_sequence(self.db, "store_log")
            self.db.add(StoreLog(
                log_id=f"LOG-{serial_no}",
                serial_no=serial_no,
                store_entry_id=store_entry.id,
                order_id=store_entry.order_id,
                purchase_id=store_entry.purchase_id,
                store_id=store_entry.store_id,
                order_ref=store_entry.order_ref,
                pur_no=store_entry.pur_no,
                order_type=store_entry.order_type,
                buyer_code=store_entry.buyer_code,
                log_date=store_entry.store_entry_date,
                status=StoreLogStatus.IN_STORE,
                remarks=INITIAL_LOG_REMARKS,
                created_by=store_entry.created_by,
            ))
            self.db.commit()
            self.db.refresh(store_entry)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Initial store log for {store_entry.store_id} failed: {str(e)}")

    @staticmethod
    def _pending_row(purchase: Purchase) -> Dict[str, Any]:
        return {
            "id": None,
            "store_id": None,
            "serial_no": None,
            "purchase_id": purchase.id,
            "order_id": purchase.order_id,
            "order_ref": purchase.po_no,
            "order_date": purchase.order_date,
            "order_type": purchase.order_type,
            "buyer_code": purchase.buyer_code,
            "pur_no": purchase.pur_no,
            "purchase_date": purchase.purchase_date,
            "pes_no": None,
            "store_entry_date": None,
            "remarks": purchase.remarks,
            "status": StoreEntryStatus.PENDING,
            "is_pending": True,
            "entries": [],
            "created_at": purchase.created_at,
        }
