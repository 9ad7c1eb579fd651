"""
Production schemas
"""
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, ConfigDict

from .common import Quantity


class ProductionStatusEnum(str, Enum):
    PENDING_PRODUCTION = "Pending Production"
    CUTTING = "Cutting"
    STITCHING = "Stitching"
    TRIMMING = "Trimming"
    QC = "QC"
    IRONING = "Ironing"
    PACKING = "Packing"
    PRODUCTION_COMPLETED = "Production Completed"


class CuttingDetail(BaseModel):
    """Cutting line; shortage_mtr is always recomputed on save"""
    fabric_type: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    tag_mtr: float = Field(0, ge=0)
    cutting_mtr: float = Field(0, ge=0)
    pieces: int = Field(0, ge=0)
    remarks: Optional[str] = ""


class ProductionUpdate(BaseModel):
    status: Optional[ProductionStatusEnum] = None
    production_details: Optional[Dict[str, Any]] = None
    cutting_details: Optional[List[CuttingDetail]] = None
    remarks: Optional[str] = None


class ProductionResponse(BaseModel):
    id: int
    order_id: int
    purchase_id: Optional[int] = None
    order_type: Optional[str] = None
    po_no: Optional[str] = None
    buyer_code: Optional[str] = None
    buyer_name: Optional[str] = None
    products: List[Dict[str, Any]] = []
    total_qty: int = 0
    grand_total_cost: Quantity
    grand_total_with_gst: Quantity
    production_details: Dict[str, Any] = {}
    cutting_details: List[Dict[str, Any]] = []
    status: str
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
