"""
Product Model
Garment styles that orders are placed against
"""
from sqlalchemy import Column, String, Integer, Boolean, JSON, DateTime
from sqlalchemy.sql import func

from garment_erp.core.database import Base


class Product(Base):
    """Product catalogue entry"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False, index=True)
    hsn = Column(String(20))
    category = Column(String(60))
    types = Column(JSON, default=list)
    styles = Column(JSON, default=list)
    fabric = Column(String(60))
    color = Column(String(40))
    gsm = Column(String(20))
    available_sizes = Column(JSON, default=list)
    available_colors = Column(JSON, default=list)

    is_active = Column(Boolean, default=True)
    total_orders = Column(Integer, default=0)
    total_quantity_ordered = Column(Integer, default=0)
    last_ordered_date = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
