"""
Store Inventory Report
Reconciled stock across every completed store entry, with file export
"""
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
import logging

from garment_erp.core.config import settings
from garment_erp.models.store import StoreEntry, StoreEntryStatus, StoreLog
from garment_erp.services.reporting import ExportService
from garment_erp.services.store.inventory import (
    InventoryRow, compute_inventory, filter_inventory, inventory_stats
)

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = (
    ("store_id", "Store ID"),
    ("store_entry_date", "Entry Date"),
    ("order_ref", "PO No"),
    ("pur_no", "Purchase No"),
    ("buyer_code", "Buyer"),
    ("item_name", "Item"),
    ("item_type", "Type"),
    ("unit", "Unit"),
    ("supplier_name", "Supplier"),
    ("invoice_no", "Invoice No"),
    ("initial_stock", "Initial"),
    ("total_taken", "Taken"),
    ("total_returned", "Returned"),
    ("available_stock", "Available"),
    ("stock_status", "Status"),
    ("shortage", "Shortage"),
    ("surplus", "Surplus"),
)


class InventoryReportService:
    """Store inventory across completed store entries"""

    def __init__(self, db: Session):
        self.db = db

    def rows(self, status_filter: Optional[str] = None, search: Optional[str] = None) -> List[InventoryRow]:
        store_entries = (
            self.db.query(StoreEntry)
            .filter(StoreEntry.status == StoreEntryStatus.COMPLETED)
            .order_by(StoreEntry.id.desc())
            .all()
        )
        store_logs = self.db.query(StoreLog).all()

        rows = compute_inventory(store_entries, store_logs, settings.LOW_STOCK_RATIO)
        return filter_inventory(rows, status_filter, search)

    def report(self, status_filter: Optional[str] = None, search: Optional[str] = None) -> Dict[str, Any]:
        rows = self.rows(status_filter, search)
        return {
            "rows": [row.to_dict() for row in rows],
            "stats": inventory_stats(rows),
        }

    def export(
        self,
        format: str,
        status_filter: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[bytes, str]:
        """
        Render the filtered inventory as a file

        Returns:
            (content, filename)
        """
        rows = self.rows(status_filter, search)
        stats = inventory_stats(rows)
        summary = {
            "Items": stats["total_items"],
            "Low stock": stats["low_stock_items"],
            "Out of stock": stats["out_of_stock_items"],
            "Total available": stats["total_available_stock"],
        }
        content = ExportService().export(
            "Store Inventory",
            EXPORT_COLUMNS,
            [row.to_dict() for row in rows],
            format,
            summary,
        )
        return content, f"store_inventory.{format}"
