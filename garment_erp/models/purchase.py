"""
Purchase Models
Material and machine purchases against orders
"""
from sqlalchemy import (
    Column, String, Integer, Numeric, Date, Text, JSON, DateTime, ForeignKey, Index
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from garment_erp.core.database import Base


class PurchaseStatus:
    PENDING = "Pending"
    PARTIAL = "Partial"
    COMPLETED = "Completed"

    ALL = (PENDING, PARTIAL, COMPLETED)


class PurchaseItemType:
    FABRIC = "fabric"
    BUTTONS = "buttons"
    PACKETS = "packets"
    MACHINE = "machine"

    MATERIALS = (FABRIC, BUTTONS, PACKETS)
    ALL = (FABRIC, BUTTONS, PACKETS, MACHINE)


class Purchase(Base):
    """
    Purchase header

    Totals are recalculated by the purchase service whenever items change.
    """
    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True, index=True)
    pur_no = Column(String(20), unique=True, nullable=False, index=True)

    # Machine purchases are not tied to an order
    order_id = Column(Integer, ForeignKey("orders.id"), unique=True, nullable=True)
    order_date = Column(Date)
    po_no = Column(String(20))
    order_type = Column(String(20))
    buyer_code = Column(String(20))
    products = Column(JSON, default=list)

    purchase_date = Column(Date)
    remarks = Column(Text, default="")
    status = Column(String(20), nullable=False, default=PurchaseStatus.PENDING)

    # Category totals
    fabric_total_cost = Column(Numeric(14, 2), default=0)
    fabric_total_with_gst = Column(Numeric(14, 2), default=0)
    buttons_total_cost = Column(Numeric(14, 2), default=0)
    buttons_total_with_gst = Column(Numeric(14, 2), default=0)
    packets_total_cost = Column(Numeric(14, 2), default=0)
    packets_total_with_gst = Column(Numeric(14, 2), default=0)
    machines_total_cost = Column(Numeric(14, 2), default=0)
    machines_total_with_gst = Column(Numeric(14, 2), default=0)
    grand_total_cost = Column(Numeric(14, 2), default=0)
    grand_total_with_gst = Column(Numeric(14, 2), default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    order = relationship("Order", back_populates="purchase")
    items = relationship(
        "PurchaseItem",
        back_populates="purchase",
        cascade="all, delete-orphan",
        order_by="PurchaseItem.line_no",
    )
    production = relationship("Production", back_populates="purchase", uselist=False)
    store_entry = relationship("StoreEntry", back_populates="purchase", uselist=False)

    __table_args__ = (
        Index("ix_purchases_status", "status"),
    )

    @property
    def store_entry_id(self):
        return self.store_entry.id if self.store_entry else None

    def items_of(self, item_type: str):
        return [item for item in self.items if item.item_type == item_type]

    @property
    def has_machine_items(self) -> bool:
        return any(item.item_type == PurchaseItemType.MACHINE for item in self.items)

    @property
    def is_machine_only(self) -> bool:
        return bool(self.items) and all(
            item.item_type == PurchaseItemType.MACHINE for item in self.items
        )


class PurchaseItem(Base):
    """
    Purchase line, one table for every item_type

    Only the columns relevant to the line's item_type are populated; the
    pydantic schemas enforce the per-variant shape.
    """
    __tablename__ = "purchase_items"

    id = Column(Integer, primary_key=True, index=True)
    purchase_id = Column(Integer, ForeignKey("purchases.id"), nullable=False, index=True)
    line_no = Column(Integer, nullable=False, default=1)
    item_type = Column(String(10), nullable=False)

    # Common material fields
    product_name = Column(String(120))
    vendor = Column(String(120))
    vendor_code = Column(String(20))
    vendor_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    purchase_mode = Column(String(10))
    quantity = Column(Numeric(14, 2), default=0)
    cost_per_unit = Column(Numeric(14, 2), default=0)
    gst_percentage = Column(Numeric(5, 2), default=0)
    remarks = Column(Text, default="")

    # fabric
    fabric_type = Column(String(60))
    colors = Column(JSON, default=list)
    gsm = Column(String(20))

    # buttons / packets
    size = Column(String(30))
    button_type = Column(String(60))
    color = Column(String(40))
    packet_type = Column(String(60))

    # machine
    machine_name = Column(String(120))
    cost = Column(Numeric(14, 2))
    purchase_date = Column(Date)

    # Derived
    total_cost = Column(Numeric(14, 2), default=0)
    total_with_gst = Column(Numeric(14, 2), default=0)

    purchase = relationship("Purchase", back_populates="items")
