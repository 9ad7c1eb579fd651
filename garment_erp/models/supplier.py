"""
Supplier Model
Vendors that fabric and accessory purchases are placed with
"""
from sqlalchemy import Column, String, Integer, Boolean, Text, JSON, DateTime, Index
from sqlalchemy.sql import func

from garment_erp.core.database import Base


class Supplier(Base):
    """
    Supplier (vendor) master record

    Coded SUP001, SUP002...; category is Fabrics or Accessories.
    """
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(20), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    company_name = Column(String(150), default="")
    mobile = Column(String(10), nullable=False)
    email = Column(String(120))
    gst = Column(String(20))
    address = Column(Text)
    city = Column(String(60))
    state = Column(String(60))
    pincode = Column(String(6))

    vendor_category = Column(String(20), nullable=False, default="Fabrics")
    vendor_goods = Column(JSON, default=list)

    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_suppliers_name", "name"),
    )
