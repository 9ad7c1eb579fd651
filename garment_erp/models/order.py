"""
Order Model
Buyer orders with per-product size breakdowns
"""
from sqlalchemy import Column, String, Integer, Date, JSON, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from garment_erp.core.database import Base


class OrderType:
    FOB = "FOB"
    JOB_WORKS = "JOB-Works"
    OWN_ORDERS = "Own-Orders"

    ALL = (FOB, JOB_WORKS, OWN_ORDERS)
    PURCHASABLE = (FOB, JOB_WORKS)


class OrderStatus:
    PENDING_PURCHASE = "Pending Purchase"
    PURCHASE_COMPLETED = "Purchase Completed"
    PENDING_PRODUCTION = "Pending Production"
    FACTORY_RECEIVED = "Factory Received"
    IN_PRODUCTION = "In Production"
    PRODUCTION_COMPLETED = "Production Completed"
    READY_FOR_DELIVERY = "Ready for Delivery"
    DELIVERED = "Delivered"
    COMPLETED = "Completed"

    ALL = (
        PENDING_PURCHASE, PURCHASE_COMPLETED, PENDING_PRODUCTION,
        FACTORY_RECEIVED, IN_PRODUCTION, PRODUCTION_COMPLETED,
        READY_FOR_DELIVERY, DELIVERED, COMPLETED,
    )


class Order(Base):
    """
    Buyer order

    products is a JSON list of
    {product_id, product_details{name, style, color, fabric_type},
     sizes[{size, qty}], product_total_qty}
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    po_no = Column(String(20), unique=True, nullable=False, index=True)
    order_date = Column(Date, nullable=False)
    order_type = Column(String(20), nullable=False)

    buyer_id = Column(Integer, ForeignKey("buyers.id"), nullable=False)
    buyer_details = Column(JSON, nullable=False, default=dict)

    products = Column(JSON, nullable=False, default=list)
    total_qty = Column(Integer, default=0)

    status = Column(String(30), nullable=False, default=OrderStatus.PENDING_PURCHASE)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    buyer = relationship("Buyer", back_populates="orders")
    purchase = relationship("Purchase", back_populates="order", uselist=False)
    production = relationship("Production", back_populates="order", uselist=False)

    __table_args__ = (
        Index("ix_orders_order_date", "order_date"),
        Index("ix_orders_status", "status"),
    )

    @property
    def purchase_id(self):
        return self.purchase.id if self.purchase else None

    @property
    def production_id(self):
        return self.production.id if self.production else None
