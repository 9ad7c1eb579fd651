"""
Order schemas
"""
from typing import Optional, List, Dict, Any
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, ConfigDict

from .common import OptionalMobileNumber, ContactEmail


class OrderTypeEnum(str, Enum):
    FOB = "FOB"
    JOB_WORKS = "JOB-Works"
    OWN_ORDERS = "Own-Orders"


class OrderStatusEnum(str, Enum):
    PENDING_PURCHASE = "Pending Purchase"
    PURCHASE_COMPLETED = "Purchase Completed"
    PENDING_PRODUCTION = "Pending Production"
    FACTORY_RECEIVED = "Factory Received"
    IN_PRODUCTION = "In Production"
    PRODUCTION_COMPLETED = "Production Completed"
    READY_FOR_DELIVERY = "Ready for Delivery"
    DELIVERED = "Delivered"
    COMPLETED = "Completed"


class OrderSize(BaseModel):
    size: str = Field(..., min_length=1, max_length=20)
    qty: int = Field(..., ge=1)


class OrderProductDetails(BaseModel):
    name: str = Field(..., min_length=1)
    style: str = Field(..., min_length=1)
    color: str = Field(..., min_length=1)
    fabric_type: str = Field(..., min_length=1)


class OrderProductLine(BaseModel):
    product_id: Optional[int] = None
    product_details: OrderProductDetails
    sizes: List[OrderSize] = Field(..., min_length=1)


class OrderBuyer(BaseModel):
    """
    Buyer reference on an order

    With an id the existing buyer is used; without one a Regular buyer is
    created from the remaining fields.
    """
    id: Optional[int] = None
    name: Optional[str] = None
    company_name: Optional[str] = None
    mobile: OptionalMobileNumber = None
    gst: Optional[str] = None
    email: ContactEmail = None
    address: Optional[str] = None


class OrderCreate(BaseModel):
    order_date: date
    order_type: OrderTypeEnum
    buyer: OrderBuyer
    products: List[OrderProductLine] = Field(..., min_length=1)


class OrderUpdate(BaseModel):
    order_date: Optional[date] = None
    order_type: Optional[OrderTypeEnum] = None
    buyer: Optional[OrderBuyer] = None
    products: Optional[List[OrderProductLine]] = Field(None, min_length=1)


class OrderStatusUpdate(BaseModel):
    status: OrderStatusEnum


class OrderResponse(BaseModel):
    id: int
    po_no: str
    order_date: date
    order_type: str
    buyer_id: int
    buyer_details: Dict[str, Any]
    products: List[Dict[str, Any]]
    total_qty: int
    status: str
    purchase_id: Optional[int] = None
    production_id: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class NextPoNoResponse(BaseModel):
    po_no: str
    financial_year: str


class BuyerOrdersResponse(BaseModel):
    """Orders of one buyer, newest first"""
    buyer_id: int
    orders: List[OrderResponse]
    total: int
