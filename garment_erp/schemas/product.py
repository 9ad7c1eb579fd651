"""
Product schemas
"""
from typing import Optional, List
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    hsn: Optional[str] = None
    category: Optional[str] = None
    types: List[str] = []
    styles: List[str] = []
    fabric: Optional[str] = None
    color: Optional[str] = None
    gsm: Optional[str] = None
    available_sizes: List[str] = []
    available_colors: List[str] = []


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    hsn: Optional[str] = None
    category: Optional[str] = None
    types: Optional[List[str]] = None
    styles: Optional[List[str]] = None
    fabric: Optional[str] = None
    color: Optional[str] = None
    gsm: Optional[str] = None
    available_sizes: Optional[List[str]] = None
    available_colors: Optional[List[str]] = None
    is_active: Optional[bool] = None


class ProductResponse(ProductCreate):
    id: int
    is_active: bool
    total_orders: int = 0
    total_quantity_ordered: int = 0
    last_ordered_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
