"""
Store Models
Warehouse intake (store entries) and worker take/return events (store logs)
"""
from sqlalchemy import (
    Column, String, Integer, Numeric, Date, Text, DateTime, ForeignKey, Index
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from garment_erp.core.database import Base


class StoreEntryStatus:
    PENDING = "Pending"
    COMPLETED = "Completed"


class StoreLogStatus:
    IN_STORE = "In Store"
    OUT = "Out"
    COMPLETED = "Completed"

    ALL = (IN_STORE, OUT, COMPLETED)


STORE_ITEM_TYPES = ("fabric", "accessories", "others")
STORE_UNITS = ("kg", "mtr", "qty", "piece", "pieces", "packet")


class StoreEntry(Base):
    """
    Store entry: materials physically received for one completed purchase

    At most one per purchase (unique purchase_id).
    """
    __tablename__ = "store_entries"

    id = Column(Integer, primary_key=True, index=True)
    store_id = Column(String(20), unique=True, nullable=False, index=True)
    serial_no = Column(Integer, nullable=False)

    purchase_id = Column(Integer, ForeignKey("purchases.id"), unique=True, nullable=False)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=True)
    order_ref = Column(String(20))
    order_date = Column(Date)
    order_type = Column(String(20))
    buyer_code = Column(String(20))
    pur_no = Column(String(20))
    purchase_date = Column(Date)
    pes_no = Column(String(20), default="N/A")

    store_entry_date = Column(Date, nullable=False)
    remarks = Column(Text, default="")
    status = Column(String(20), nullable=False, default=StoreEntryStatus.COMPLETED)

    total_invoice_qty = Column(Numeric(14, 2), default=0)
    total_store_in_qty = Column(Numeric(14, 2), default=0)
    total_shortage = Column(Numeric(14, 2), default=0)
    total_surplus = Column(Numeric(14, 2), default=0)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    purchase = relationship("Purchase", back_populates="store_entry")
    entries = relationship(
        "StoreEntryItem",
        back_populates="store_entry",
        cascade="all, delete-orphan",
        order_by="StoreEntryItem.line_no",
    )
    logs = relationship(
        "StoreLog",
        back_populates="store_entry",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_store_entries_status", "status"),
    )


class StoreEntryItem(Base):
    """One received line of a store entry"""
    __tablename__ = "store_entry_items"

    id = Column(Integer, primary_key=True, index=True)
    store_entry_id = Column(Integer, ForeignKey("store_entries.id"), nullable=False, index=True)
    line_no = Column(Integer, nullable=False, default=1)

    item_type = Column(String(20), nullable=False, default="fabric")
    item_name = Column(String(120), nullable=False)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True)
    supplier_name = Column(String(120))
    supplier_code = Column(String(20))
    invoice_no = Column(String(40))
    invoice_date = Column(Date)
    hsn = Column(String(20))
    unit = Column(String(10), nullable=False, default="kg")

    purchase_qty = Column(Numeric(14, 2), default=0)
    invoice_qty = Column(Numeric(14, 2), default=0)
    store_in_qty = Column(Numeric(14, 2), default=0)
    shortage = Column(Numeric(14, 2), default=0)
    surplus = Column(Numeric(14, 2), default=0)
    remarks = Column(Text, default="")

    store_entry = relationship("StoreEntry", back_populates="entries")


class StoreLog(Base):
    """
    Store log: one worker's take/return event against a store entry

    Logs are append-only history; any number may reference the same entry.
    """
    __tablename__ = "store_logs"

    id = Column(Integer, primary_key=True, index=True)
    log_id = Column(String(20), unique=True, nullable=False, index=True)
    serial_no = Column(Integer, nullable=False)

    store_entry_id = Column(Integer, ForeignKey("store_entries.id"), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=True)
    purchase_id = Column(Integer, ForeignKey("purchases.id"), nullable=True)

    # Denormalized for filtering and the inventory join
    store_id = Column(String(20), index=True)
    order_ref = Column(String(20))
    pur_no = Column(String(20))
    order_type = Column(String(20))
    buyer_code = Column(String(20))

    log_date = Column(Date, nullable=False)
    person_name = Column(String(100), default="")
    person_role = Column(String(60), default="")
    department = Column(String(60), default="")
    login_time = Column(String(10), default="")
    logout_time = Column(String(10), default="")
    product_count = Column(Integer, default=0)

    status = Column(String(20), nullable=False, default=StoreLogStatus.OUT)
    remarks = Column(Text, default="")

    total_taken = Column(Numeric(14, 2), default=0)
    total_returned = Column(Numeric(14, 2), default=0)
    total_in_hand = Column(Numeric(14, 2), default=0)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    store_entry = relationship("StoreEntry", back_populates="logs")
    items = relationship(
        "StoreLogItem",
        back_populates="store_log",
        cascade="all, delete-orphan",
        order_by="StoreLogItem.line_no",
    )

    __table_args__ = (
        Index("ix_store_logs_status", "status"),
    )


class StoreLogItem(Base):
    """Quantity of one item taken and/or returned within a store log"""
    __tablename__ = "store_log_items"

    id = Column(Integer, primary_key=True, index=True)
    store_log_id = Column(Integer, ForeignKey("store_logs.id"), nullable=False, index=True)
    line_no = Column(Integer, nullable=False, default=1)

    item_name = Column(String(120), nullable=False)
    item_type = Column(String(20), default="fabric")
    unit = Column(String(10), default="kg")
    taken_qty = Column(Numeric(14, 2), default=0)
    returned_qty = Column(Numeric(14, 2), default=0)
    in_hand_qty = Column(Numeric(14, 2), default=0)
    return_date = Column(Date)
    remarks = Column(Text, default="")

    store_log = relationship("StoreLog", back_populates="items")
