"""
Store Inventory Reconciliation

Derives per-item available stock from store entries and the store logs
recorded against them:

    available = store_in_qty - sum(taken_qty) + sum(returned_qty)

The engine is a pure function over either ORM objects or plain mappings,
so the available-stock endpoint, the stock check on new store logs and the
inventory report all share one formula.
"""
from collections.abc import Mapping
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging

from garment_erp.core.config import settings
from garment_erp.services.business_logic import StockStatus, classify_stock, to_decimal, ZERO

logger = logging.getLogger(__name__)

STATUS_FILTER_ALL = "all"


@dataclass
class InventoryRow:
    """One (store entry, item) line of the reconciled inventory"""
    store_entry_id: Optional[int]
    store_id: Optional[str]
    store_entry_date: Any
    order_ref: Optional[str]
    pur_no: Optional[str]
    order_type: Optional[str]
    buyer_code: Optional[str]
    item_name: str
    item_type: Optional[str]
    unit: Optional[str]
    supplier_name: Optional[str]
    supplier_code: Optional[str]
    invoice_no: Optional[str]
    invoice_date: Any
    hsn: Optional[str]
    initial_stock: Decimal
    total_taken: Decimal
    total_returned: Decimal
    available_stock: Decimal
    stock_status: StockStatus
    shortage: Decimal
    surplus: Decimal

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["stock_status"] = self.stock_status.value
        return data


def _field(record: Any, name: str, default: Any = None) -> Any:
    """Read a field from a mapping or an object, None counts as missing"""
    if record is None:
        return default
    if isinstance(record, Mapping):
        value = record.get(name, default)
    else:
        value = getattr(record, name, default)
    return default if value is None else value


def _list_field(record: Any, name: str) -> list:
    """Read a list field; anything that is not a list reads as empty"""
    value = _field(record, name)
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _log_totals(logs: Iterable[Any]) -> Dict[str, Tuple[Decimal, Decimal]]:
    """Sum taken and returned quantities per exact item name"""
    totals: Dict[str, Tuple[Decimal, Decimal]] = {}
    for log in logs:
        for item in _list_field(log, "items"):
            name = _field(item, "item_name")
            if name is None:
                continue
            taken, returned = totals.get(name, (ZERO, ZERO))
            totals[name] = (
                taken + to_decimal(_field(item, "taken_qty")),
                returned + to_decimal(_field(item, "returned_qty")),
            )
    return totals


def compute_inventory(
    store_entries: Optional[Iterable[Any]],
    store_logs: Optional[Iterable[Any]],
    low_ratio: Any = None,
) -> List[InventoryRow]:
    """
    Reconcile store entries against store logs

    Logs join to entries on store_id. Items match on exact item_name (no case
    or whitespace folding). One row is produced per entry line, in
    entry-then-line order, including lines no log has touched. Entries or logs
    with missing item lists contribute nothing. Inputs are not modified.

    Args:
        store_entries: StoreEntry objects or mappings with an `entries` list
        store_logs: StoreLog objects or mappings with an `items` list
        low_ratio: fraction of initial stock below which a row is "low"

    Returns:
        List of InventoryRow
    """
    ratio = to_decimal(settings.LOW_STOCK_RATIO if low_ratio is None else low_ratio)

    logs_by_store: Dict[Any, list] = {}
    for log in store_logs or []:
        store_id = _field(log, "store_id")
        if store_id is None:
            continue
        logs_by_store.setdefault(store_id, []).append(log)

    rows: List[InventoryRow] = []
    for entry in store_entries or []:
        store_id = _field(entry, "store_id")
        totals = _log_totals(logs_by_store.get(store_id, [])) if store_id is not None else {}

        for line in _list_field(entry, "entries"):
            item_name = _field(line, "item_name", "")
            initial = to_decimal(_field(line, "store_in_qty"))
            taken, returned = totals.get(item_name, (ZERO, ZERO))
            available = initial - taken + returned

            rows.append(InventoryRow(
                store_entry_id=_field(entry, "id"),
                store_id=store_id,
                store_entry_date=_field(entry, "store_entry_date"),
                order_ref=_field(entry, "order_ref"),
                pur_no=_field(entry, "pur_no"),
                order_type=_field(entry, "order_type"),
                buyer_code=_field(entry, "buyer_code"),
                item_name=item_name,
                item_type=_field(line, "item_type"),
                unit=_field(line, "unit"),
                supplier_name=_field(line, "supplier_name"),
                supplier_code=_field(line, "supplier_code"),
                invoice_no=_field(line, "invoice_no"),
                invoice_date=_field(line, "invoice_date"),
                hsn=_field(line, "hsn"),
                initial_stock=initial,
                total_taken=taken,
                total_returned=returned,
                available_stock=available,
                stock_status=classify_stock(available, initial, ratio),
                shortage=to_decimal(_field(line, "shortage")),
                surplus=to_decimal(_field(line, "surplus")),
            ))

    logger.debug(f"Reconciled {len(rows)} inventory rows")
    return rows


def available_by_item(
    store_entry: Any,
    store_logs: Iterable[Any],
    exclude_log_id: Optional[int] = None,
) -> Dict[str, Decimal]:
    """
    Available stock per item name for a single store entry

    Negative balances are clamped to zero. When an entry repeats an item name
    the first line wins. `exclude_log_id` leaves one log out, used when
    re-validating an edited log against everyone else's activity.
    """
    logs = [
        log for log in store_logs
        if exclude_log_id is None or _field(log, "id") != exclude_log_id
    ]
    available: Dict[str, Decimal] = {}
    for row in compute_inventory([store_entry], logs):
        if row.item_name not in available:
            available[row.item_name] = max(row.available_stock, ZERO)
    return available


def filter_inventory(
    rows: Iterable[InventoryRow],
    status_filter: Optional[str] = None,
    search: Optional[str] = None,
) -> List[InventoryRow]:
    """Filter rows by stock status and a case-insensitive search term"""
    result = list(rows)

    if status_filter and status_filter != STATUS_FILTER_ALL:
        result = [row for row in result if row.stock_status.value == status_filter]

    if search:
        needle = search.strip().lower()
        if needle:
            result = [
                row for row in result
                if any(
                    needle in (value or "").lower()
                    for value in (row.store_id, row.order_ref, row.item_name, row.supplier_name)
                )
            ]

    return result


def inventory_stats(rows: Iterable[InventoryRow]) -> Dict[str, Any]:
    """Counts per status and the total available quantity"""
    rows = list(rows)
    return {
        "total_items": len(rows),
        "low_stock_items": sum(1 for row in rows if row.stock_status == StockStatus.LOW),
        "out_of_stock_items": sum(1 for row in rows if row.stock_status == StockStatus.OUT_OF_STOCK),
        "available_items": sum(1 for row in rows if row.stock_status == StockStatus.AVAILABLE),
        "total_available_stock": sum((row.available_stock for row in rows), ZERO),
    }
