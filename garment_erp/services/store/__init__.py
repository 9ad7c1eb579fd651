"""
Store Services
Store entries, store logs and inventory reconciliation
"""

from .inventory import compute_inventory, available_by_item, InventoryRow
from .store_entries import StoreEntryService
from .store_logs import StoreLogService
from .inventory_report import InventoryReportService

__all__ = [
    "compute_inventory",
    "available_by_item",
    "InventoryRow",
    "StoreEntryService",
    "StoreLogService",
    "InventoryReportService",
]
