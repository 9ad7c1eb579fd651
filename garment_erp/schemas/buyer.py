"""
Buyer schemas
"""
from typing import Optional
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, ConfigDict, model_validator

from .common import MobileNumber, OptionalMobileNumber, Pincode, ContactEmail


class BuyerCategory(str, Enum):
    REGULAR = "Regular"
    YAS = "YAS"


class BuyerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    company_name: Optional[str] = Field("", max_length=150)
    mobile: MobileNumber
    email: ContactEmail = None
    gst: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Pincode = None


class BuyerCreate(BuyerBase):
    buyer_category: BuyerCategory = BuyerCategory.REGULAR
    yas_buyer_type: Optional[str] = None

    @model_validator(mode="after")
    def check_yas_type(self):
        if self.buyer_category == BuyerCategory.YAS:
            if not self.yas_buyer_type:
                raise ValueError("YAS buyer type is required for YAS buyers")
        else:
            self.yas_buyer_type = None
        return self


class BuyerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    company_name: Optional[str] = None
    mobile: OptionalMobileNumber = None
    email: ContactEmail = None
    gst: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Pincode = None
    buyer_category: Optional[BuyerCategory] = None
    yas_buyer_type: Optional[str] = None
    is_active: Optional[bool] = None


class BuyerResponse(BaseModel):
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
    buyer_category: str
    yas_buyer_type: Optional[str] = None
    is_active: bool
    total_orders: int = 0
    last_order_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
