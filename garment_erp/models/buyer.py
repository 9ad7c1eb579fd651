"""
Buyer Model
Buyers place orders against products
"""
from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from garment_erp.core.database import Base


class Buyer(Base):
    """
    Buyer master record

    Regular buyers are coded BUY001, BUY002...; YAS buyers YAS001...
    """
    __tablename__ = "buyers"

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

    buyer_category = Column(String(10), nullable=False, default="Regular")
    yas_buyer_type = Column(String(30))

    is_active = Column(Boolean, default=True)
    total_orders = Column(Integer, default=0)
    last_order_date = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    orders = relationship("Order", back_populates="buyer")

    __table_args__ = (
        Index("ix_buyers_name", "name"),
    )


