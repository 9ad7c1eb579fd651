"""
Store Log Service
Material taken out of and returned to the store against a store entry
"""
from typing import List, Optional, Dict, Any, Iterable
from decimal import Decimal
from sqlalchemy.orm import Session
import logging

from garment_erp.core.exceptions import BusinessLogicError, NotFoundError, ValidationError
from garment_erp.core.logging import get_logger
from garment_erp.models.auth import User
from garment_erp.models.store import StoreEntry, StoreLog, StoreLogItem, StoreLogStatus
from garment_erp.schemas.store import StoreLogCreate, StoreLogUpdate, StoreLogItemIn
from garment_erp.services.business_logic import suggest_store_log_status, to_decimal, ZERO
from garment_erp.services.sequence import next_sequence
from garment_erp.services.store.inventory import available_by_item, compute_inventory

logger = logging.getLogger(__name__)
business_logger = get_logger("business")


def build_log_items(lines: Iterable[StoreLogItemIn]) -> List[StoreLogItem]:
    items = []
    for line_no, line in enumerate(lines, start=1):
        items.append(StoreLogItem(
            line_no=line_no,
            in_hand_qty=line.taken_qty - line.returned_qty,
            **line.model_dump(),
        ))
    return items


def apply_log_totals(store_log: StoreLog) -> None:
    store_log.total_taken = sum((to_decimal(i.taken_qty) for i in store_log.items), ZERO)
    store_log.total_returned = sum((to_decimal(i.returned_qty) for i in store_log.items), ZERO)
    store_log.total_in_hand = store_log.total_taken - store_log.total_returned


def _taken_by_item(items: Iterable[Any]) -> Dict[str, Decimal]:
    taken: Dict[str, Decimal] = {}
    for item in items:
        taken[item.item_name] = taken.get(item.item_name, ZERO) + to_decimal(item.taken_qty)
    return taken


def _insufficient(
    item_name: str, available: Decimal, requested: Decimal, label: str = "Requested"
) -> BusinessLogicError:
    business_logger.warning(f"Stock check failed for {item_name}: available {available}, {label.lower()} {requested}")
    return BusinessLogicError(
        f"Insufficient stock for {item_name}. Available: {available}, {label}: {requested}"
    )


class StoreLogService:
    """
    Store logs

    Every take is checked against what the store entry still holds, as
    worked out by the inventory reconciliation.
    """

    def __init__(self, db: Session, current_user: Optional[User] = None):
        self.db = db
        self.current_user = current_user

    # Queries

    def list_logs(
        self,
        status: Optional[str] = None,
        order_id: Optional[int] = None,
        store_id: Optional[str] = None,
        pur_no: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[StoreLog]:
        query = self.db.query(StoreLog)
        if status:
            query = query.filter(StoreLog.status == status)
        if order_id:
            query = query.filter(StoreLog.order_id == order_id)
        if store_id:
            query = query.filter(StoreLog.store_id == store_id)
        if pur_no:
            query = query.filter(StoreLog.pur_no == pur_no)
        return query.order_by(StoreLog.id.desc()).offset(skip).limit(limit).all()

    def logs_for_entry(self, store_entry_id: int) -> List[StoreLog]:
        self._get_entry(store_entry_id)
        return (
            self.db.query(StoreLog)
            .filter(StoreLog.store_entry_id == store_entry_id)
            .order_by(StoreLog.id.desc())
            .all()
        )

    def get_log(self, log_id: int) -> StoreLog:
        store_log = self.db.query(StoreLog).filter(StoreLog.id == log_id).first()
        if not store_log:
            raise NotFoundError("Store Log not found")
        return store_log

    def available_stock(self, store_entry_id: int) -> Dict[str, Any]:
        """Reconciled stock of every line of one store entry"""
        store_entry = self._get_entry(store_entry_id)
        rows = compute_inventory([store_entry], self._logs_of(store_entry))
        return {
            "store_entry_id": store_entry.id,
            "store_id": store_entry.store_id,
            "order_id": store_entry.order_id,
            "order_ref": store_entry.order_ref,
            "stock_data": [row.to_dict() for row in rows],
        }

    # Commands

    def create_log(self, log_in: StoreLogCreate) -> StoreLog:
        if not log_in.store_entry_id or not log_in.log_date or not log_in.items:
            raise ValidationError("Store entry ID, log date and at least one item are required")

        store_entry = self._get_entry(log_in.store_entry_id)

        available = available_by_item(store_entry, self._logs_of(store_entry))
        for item_name, requested in _taken_by_item(log_in.items).items():
            if requested <= ZERO:
                continue
            in_stock = available.get(item_name, ZERO)
            if requested > in_stock:
                raise _insufficient(item_name, in_stock, requested)

        serial_no = next_sequence(self.db, "store_log")
        data = log_in.model_dump(exclude={"items", "status", "store_entry_id"})
        store_log = StoreLog(
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
            status=log_in.status.value if log_in.status else StoreLogStatus.OUT,
            created_by=self.current_user.id if self.current_user else None,
            **data,
        )
        store_log.items = build_log_items(log_in.items)
        apply_log_totals(store_log)
        store_log.status = suggest_store_log_status(
            store_log.status, store_log.total_taken, store_log.total_returned, store_log.total_in_hand
        )

        self.db.add(store_log)
        self.db.commit()
        self.db.refresh(store_log)
        logger.info(
            f"Store log created: {store_log.log_id} on {store_entry.store_id}, "
            f"taken={store_log.total_taken}, returned={store_log.total_returned}"
        )
        return store_log

    def update_log(self, log_id: int, log_in: StoreLogUpdate) -> StoreLog:
        store_log = self.get_log(log_id)
        data = log_in.model_dump(exclude_unset=True, exclude={"items", "status"})

        if log_in.items:
            store_entry = self._get_entry(store_log.store_entry_id)
            previous = _taken_by_item(store_log.items)
            available = None
            for item_name, requested in _taken_by_item(log_in.items).items():
                additional = requested - previous.get(item_name, ZERO)
                if additional <= ZERO:
                    continue
                if available is None:
                    available = available_by_item(
                        store_entry, self._logs_of(store_entry), exclude_log_id=store_log.id
                    )
                in_stock = available.get(item_name, ZERO)
                if additional > in_stock:
                    raise _insufficient(item_name, in_stock, additional, "Additional requested")

            store_log.items.clear()
            self.db.flush()
            store_log.items.extend(build_log_items(log_in.items))
            apply_log_totals(store_log)

        for field, value in data.items():
            setattr(store_log, field, value)

        if log_in.status is not None:
            store_log.status = log_in.status.value
        else:
            store_log.status = suggest_store_log_status(
                store_log.status,
                store_log.total_taken,
                store_log.total_returned,
                store_log.total_in_hand,
            )

        self.db.commit()
        self.db.refresh(store_log)
        logger.info(f"Store log updated: {store_log.log_id}, status={store_log.status}")
        return store_log

    def delete_log(self, log_id: int) -> None:
        store_log = self.get_log(log_id)
        self.db.delete(store_log)
        self.db.commit()
        logger.info(f"Store log deleted: {store_log.log_id}")

    # Helpers

    def _get_entry(self, store_entry_id: int) -> StoreEntry:
        store_entry = self.db.query(StoreEntry).filter(StoreEntry.id == store_entry_id).first()
        if not store_entry:
            raise NotFoundError("Store Entry not found")
        return store_entry

    def _logs_of(self, store_entry: StoreEntry) -> List[StoreLog]:
        """Logs joined on store_id, the same key the inventory report uses"""
        return self.db.query(StoreLog).filter(StoreLog.store_id == store_entry.store_id).all()
