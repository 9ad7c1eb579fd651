"""
Purchase schemas

Purchase lines are a discriminated union on item_type; each variant only
carries the fields that apply to it.
"""
from typing import Optional, List, Dict, Any, Union, Literal
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, ConfigDict
from typing_extensions import Annotated

from .common import Quantity


class PurchaseStatusEnum(str, Enum):
    PENDING = "Pending"
    PARTIAL = "Partial"
    COMPLETED = "Completed"


class _MaterialLine(BaseModel):
    product_name: Optional[str] = None
    vendor: str = Field(..., min_length=1)
    vendor_code: Optional[str] = None
    vendor_id: Optional[int] = None
    cost_per_unit: Decimal = Field(..., ge=0)
    gst_percentage: Decimal = Field(Decimal("0"), ge=0, le=100)
    remarks: Optional[str] = ""


class FabricPurchaseItem(_MaterialLine):
    item_type: Literal["fabric"]
    fabric_type: str = Field(..., min_length=1)
    purchase_mode: Literal["kg", "meters", "piece"] = "kg"
    quantity: Decimal = Field(..., gt=0)
    colors: List[str] = []
    gsm: Optional[str] = None


class ButtonsPurchaseItem(_MaterialLine):
    item_type: Literal["buttons"]
    size: Optional[str] = None
    purchase_mode: Literal["qty", "pieces"] = "qty"
    quantity: Decimal = Field(..., gt=0)
    button_type: Optional[str] = None
    color: Optional[str] = None


class PacketsPurchaseItem(_MaterialLine):
    item_type: Literal["packets"]
    size: Optional[str] = None
    purchase_mode: Literal["piece", "packet"] = "piece"
    quantity: Decimal = Field(..., gt=0)
    packet_type: Optional[str] = None


class MachinePurchaseItem(BaseModel):
    item_type: Literal["machine"] = "machine"
    machine_name: str = Field(..., min_length=1)
    vendor: str = Field(..., min_length=1)
    vendor_id: Optional[int] = None
    cost: Decimal = Field(..., ge=0)
    gst_percentage: Decimal = Field(Decimal("0"), ge=0, le=100)
    purchase_date: Optional[date] = None
    remarks: Optional[str] = ""


PurchaseItemIn = Annotated[
    Union[FabricPurchaseItem, ButtonsPurchaseItem, PacketsPurchaseItem, MachinePurchaseItem],
    Field(discriminator="item_type"),
]


class PurchaseCreate(BaseModel):
    order_id: Optional[int] = None
    purchase_date: Optional[date] = None
    remarks: Optional[str] = ""
    status: Optional[PurchaseStatusEnum] = None
    items: List[PurchaseItemIn] = []

    model_config = {
        "json_schema_extra": {
            "example": {
                "order_id": 1,
                "purchase_date": "2025-05-02",
                "items": [
                    {
                        "item_type": "fabric",
                        "product_name": "Polo T-Shirt",
                        "fabric_type": "Cotton",
                        "vendor": "Sri Textiles",
                        "purchase_mode": "kg",
                        "quantity": 100,
                        "cost_per_unit": 250,
                        "gst_percentage": 5
                    }
                ]
            }
        }
    }


class PurchaseUpdate(BaseModel):
    purchase_date: Optional[date] = None
    remarks: Optional[str] = None
    status: Optional[PurchaseStatusEnum] = None
    items: Optional[List[PurchaseItemIn]] = None


class MachinePurchaseCreate(BaseModel):
    purchase_date: Optional[date] = None
    remarks: Optional[str] = ""
    items: List[MachinePurchaseItem] = Field(..., min_length=1)


class MachinePurchaseUpdate(BaseModel):
    purchase_date: Optional[date] = None
    remarks: Optional[str] = None
    items: Optional[List[MachinePurchaseItem]] = Field(None, min_length=1)


class PurchaseItemResponse(BaseModel):
    """Purchase line as stored; fields outside the line's variant are null"""
    id: int
    line_no: int
    item_type: str
    product_name: Optional[str] = None
    vendor: Optional[str] = None
    vendor_code: Optional[str] = None
    vendor_id: Optional[int] = None
    purchase_mode: Optional[str] = None
    quantity: Optional[Quantity] = None
    cost_per_unit: Optional[Quantity] = None
    gst_percentage: Optional[Quantity] = None
    fabric_type: Optional[str] = None
    colors: Optional[List[str]] = None
    gsm: Optional[str] = None
    size: Optional[str] = None
    button_type: Optional[str] = None
    color: Optional[str] = None
    packet_type: Optional[str] = None
    machine_name: Optional[str] = None
    cost: Optional[Quantity] = None
    purchase_date: Optional[date] = None
    remarks: Optional[str] = None
    total_cost: Quantity
    total_with_gst: Quantity

    model_config = ConfigDict(from_attributes=True)


class PurchaseSummary(BaseModel):
    id: int
    pur_no: str
    order_id: Optional[int] = None
    order_date: Optional[date] = None
    po_no: Optional[str] = None
    order_type: Optional[str] = None
    buyer_code: Optional[str] = None
    purchase_date: Optional[date] = None
    status: str
    grand_total_cost: Quantity
    grand_total_with_gst: Quantity
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PurchaseResponse(PurchaseSummary):
    products: List[Dict[str, Any]] = []
    remarks: Optional[str] = None
    fabric_total_cost: Quantity
    fabric_total_with_gst: Quantity
    buttons_total_cost: Quantity
    buttons_total_with_gst: Quantity
    packets_total_cost: Quantity
    packets_total_with_gst: Quantity
    machines_total_cost: Quantity
    machines_total_with_gst: Quantity
    store_entry_id: Optional[int] = None
    items: List[PurchaseItemResponse] = []


class MachineRow(BaseModel):
    purchase_id: int
    pur_no: str
    item_id: int
    machine_name: str
    vendor: Optional[str] = None
    cost: Quantity
    gst_percentage: Quantity
    total_with_gst: Quantity
    purchase_date: Optional[date] = None
    remarks: Optional[str] = None


class MachineListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[MachineRow]
