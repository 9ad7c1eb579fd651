"""
Supplier schemas
"""
from typing import Optional, List
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, ConfigDict

from .common import MobileNumber, OptionalMobileNumber, Pincode, ContactEmail


class VendorCategory(str, Enum):
    FABRICS = "Fabrics"
    ACCESSORIES = "Accessories"


class SupplierCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    company_name: Optional[str] = Field("", max_length=150)
    mobile: MobileNumber
    email: ContactEmail = None
    gst: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Pincode = None
    vendor_category: VendorCategory = VendorCategory.FABRICS
    vendor_goods: List[str] = []


class SupplierUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    company_name: Optional[str] = None
    mobile: OptionalMobileNumber = None
    email: ContactEmail = None
    gst: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Pincode = None
    vendor_category: Optional[VendorCategory] = None
    vendor_goods: Optional[List[str]] = None
    is_active: Optional[bool] = None


class SupplierResponse(BaseModel):
    id: int
    code: str
    name: str
    company_name: Optional[str] = None
    mobile: str
    email: Optional[str] = None
    gst: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    vendor_category: str
    vendor_goods: List[str] = []
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
