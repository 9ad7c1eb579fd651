"""
Store schemas
Store entries, store logs and the reconciled inventory
"""
from typing import Optional, List, Literal
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, ConfigDict

from .common import Quantity

StoreItemType = Literal["fabric", "accessories", "others"]
StoreUnit = Literal["kg", "mtr", "qty", "piece", "pieces", "packet"]


class StoreLogStatusEnum(str, Enum):
    IN_STORE = "In Store"
    OUT = "Out"
    COMPLETED = "Completed"


class InventoryStatusFilter(str, Enum):
    ALL = "all"
    LOW = "low"
    AVAILABLE = "available"
    OUT_OF_STOCK = "outOfStock"


class ExportFormat(str, Enum):
    CSV = "csv"
    EXCEL = "xlsx"
    PDF = "pdf"


# Store entries

class StoreEntryItemIn(BaseModel):
    item_type: StoreItemType = "fabric"
    item_name: str = Field(..., min_length=1, max_length=120)
    supplier_id: Optional[int] = None
    supplier_name: Optional[str] = None
    supplier_code: Optional[str] = None
    invoice_no: Optional[str] = None
    invoice_date: Optional[date] = None
    hsn: Optional[str] = None
    unit: StoreUnit = "kg"
    purchase_qty: Decimal = Field(Decimal("0"), ge=0)
    invoice_qty: Decimal = Field(Decimal("0"), ge=0)
    store_in_qty: Decimal = Field(Decimal("0"), ge=0)
    remarks: Optional[str] = ""


class StoreEntryCreate(BaseModel):
    # Required fields are checked by the service so the client gets the
    # business message instead of a schema error
    purchase_id: Optional[int] = None
    store_entry_date: Optional[date] = None
    remarks: Optional[str] = ""
    entries: List[StoreEntryItemIn] = []


class StoreEntryUpdate(BaseModel):
    store_entry_date: Optional[date] = None
    remarks: Optional[str] = None
    entries: Optional[List[StoreEntryItemIn]] = None


class StoreEntryItemResponse(BaseModel):
    id: int
    line_no: int
    item_type: str
    item_name: str
    supplier_id: Optional[int] = None
    supplier_name: Optional[str] = None
    supplier_code: Optional[str] = None
    invoice_no: Optional[str] = None
    invoice_date: Optional[date] = None
    hsn: Optional[str] = None
    unit: str
    purchase_qty: Quantity
    invoice_qty: Quantity
    store_in_qty: Quantity
    shortage: Quantity
    surplus: Quantity
    remarks: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class StoreEntryResponse(BaseModel):
    """
    Store entry, or a pending placeholder for a completed purchase

    Placeholders have is_pending set, no id/store_id and no entries.
    """
    id: Optional[int] = None
    store_id: Optional[str] = None
    serial_no: Optional[int] = None
    purchase_id: int
    order_id: Optional[int] = None
    order_ref: Optional[str] = None
    order_date: Optional[date] = None
    order_type: Optional[str] = None
    buyer_code: Optional[str] = None
    pur_no: Optional[str] = None
    purchase_date: Optional[date] = None
    pes_no: Optional[str] = None
    store_entry_date: Optional[date] = None
    remarks: Optional[str] = None
    status: str
    is_pending: bool = False
    total_invoice_qty: Quantity = Decimal("0")
    total_store_in_qty: Quantity = Decimal("0")
    total_shortage: Quantity = Decimal("0")
    total_surplus: Quantity = Decimal("0")
    entries: List[StoreEntryItemResponse] = []
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class StoreEntrySummary(BaseModel):
    id: int
    store_id: str
    serial_no: int
    store_entry_date: date

    model_config = ConfigDict(from_attributes=True)


class StoreEntryCheckResponse(BaseModel):
    exists: bool
    store_entry: Optional[StoreEntrySummary] = None


class StoreEntryDraft(BaseModel):
    """Unsaved store entry pre-filled from a purchase"""
    purchase_id: int
    pur_no: str
    order_id: Optional[int] = None
    order_ref: Optional[str] = None
    order_type: Optional[str] = None
    buyer_code: Optional[str] = None
    purchase_date: Optional[date] = None
    entries: List[StoreEntryItemIn]


# Store logs

class StoreLogItemIn(BaseModel):
    item_name: str = Field(..., min_length=1, max_length=120)
    item_type: Optional[str] = "fabric"
    unit: Optional[str] = "kg"
    taken_qty: Decimal = Field(Decimal("0"), ge=0)
    returned_qty: Decimal = Field(Decimal("0"), ge=0)
    return_date: Optional[date] = None
    remarks: Optional[str] = ""


class StoreLogCreate(BaseModel):
    store_entry_id: Optional[int] = None
    log_date: Optional[date] = None
    person_name: Optional[str] = ""
    person_role: Optional[str] = ""
    department: Optional[str] = ""
    login_time: Optional[str] = ""
    logout_time: Optional[str] = ""
    product_count: int = Field(0, ge=0)
    status: Optional[StoreLogStatusEnum] = None
    remarks: Optional[str] = ""
    items: List[StoreLogItemIn] = []


class StoreLogUpdate(BaseModel):
    log_date: Optional[date] = None
    person_name: Optional[str] = None
    person_role: Optional[str] = None
    department: Optional[str] = None
    login_time: Optional[str] = None
    logout_time: Optional[str] = None
    product_count: Optional[int] = Field(None, ge=0)
    status: Optional[StoreLogStatusEnum] = None
    remarks: Optional[str] = None
    items: Optional[List[StoreLogItemIn]] = None


class StoreLogItemResponse(BaseModel):
    id: int
    line_no: int
    item_name: str
    item_type: Optional[str] = None
    unit: Optional[str] = None
    taken_qty: Quantity
    returned_qty: Quantity
    in_hand_qty: Quantity
    return_date: Optional[date] = None
    remarks: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class StoreLogResponse(BaseModel):
    id: int
    log_id: str
    serial_no: int
    store_entry_id: int
    order_id: Optional[int] = None
    purchase_id: Optional[int] = None
    store_id: Optional[str] = None
    order_ref: Optional[str] = None
    pur_no: Optional[str] = None
    order_type: Optional[str] = None
    buyer_code: Optional[str] = None
    log_date: date
    person_name: Optional[str] = None
    person_role: Optional[str] = None
    department: Optional[str] = None
    login_time: Optional[str] = None
    logout_time: Optional[str] = None
    product_count: int = 0
    status: str
    remarks: Optional[str] = None
    total_taken: Quantity
    total_returned: Quantity
    total_in_hand: Quantity
    items: List[StoreLogItemResponse] = []
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# Inventory

class InventoryRowResponse(BaseModel):
    store_entry_id: Optional[int] = None
    store_id: Optional[str] = None
    store_entry_date: Optional[date] = None
    order_ref: Optional[str] = None
    pur_no: Optional[str] = None
    order_type: Optional[str] = None
    buyer_code: Optional[str] = None
    item_name: str
    item_type: Optional[str] = None
    unit: Optional[str] = None
    supplier_name: Optional[str] = None
    supplier_code: Optional[str] = None
    invoice_no: Optional[str] = None
    invoice_date: Optional[date] = None
    hsn: Optional[str] = None
    initial_stock: Quantity
    total_taken: Quantity
    total_returned: Quantity
    available_stock: Quantity
    stock_status: str
    shortage: Quantity
    surplus: Quantity


class AvailableStockResponse(BaseModel):
    store_entry_id: int
    store_id: str
    order_id: Optional[int] = None
    order_ref: Optional[str] = None
    stock_data: List[InventoryRowResponse]


class InventoryStats(BaseModel):
    total_items: int
    low_stock_items: int
    out_of_stock_items: int
    available_items: int
    total_available_stock: Quantity


class InventoryReport(BaseModel):
    rows: List[InventoryRowResponse]
    stats: InventoryStats
