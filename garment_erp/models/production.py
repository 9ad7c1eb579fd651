"""
Production Model
Factory production run created from a completed purchase
"""
from sqlalchemy import Column, String, Integer, Numeric, Text, JSON, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from garment_erp.core.database import Base


class ProductionStatus:
    PENDING_PRODUCTION = "Pending Production"
    CUTTING = "Cutting"
    STITCHING = "Stitching"
    TRIMMING = "Trimming"
    QC = "QC"
    IRONING = "Ironing"
    PACKING = "Packing"
    PRODUCTION_COMPLETED = "Production Completed"

    ALL = (
        PENDING_PRODUCTION, CUTTING, STITCHING, TRIMMING,
        QC, IRONING, PACKING, PRODUCTION_COMPLETED,
    )


class Production(Base):
    """Production run"""
    __tablename__ = "productions"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), unique=True, nullable=False)
    purchase_id = Column(Integer, ForeignKey("purchases.id"), nullable=True)

    order_type = Column(String(20))
    po_no = Column(String(20))
    buyer_code = Column(String(20))
    buyer_name = Column(String(100))
    products = Column(JSON, default=list)
    total_qty = Column(Integer, default=0)
    grand_total_cost = Column(Numeric(14, 2), default=0)
    grand_total_with_gst = Column(Numeric(14, 2), default=0)

    production_details = Column(JSON, default=dict)
    # [{fabric_type, color, tag_mtr, cutting_mtr, shortage_mtr, ...}]
    cutting_details = Column(JSON, default=list)

    status = Column(String(30), nullable=False, default=ProductionStatus.PENDING_PRODUCTION)
    remarks = Column(Text, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    order = relationship("Order", back_populates="production")
    purchase = relationship("Purchase", back_populates="production")
