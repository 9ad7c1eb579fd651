"""
Garment ERP SQLAlchemy Models
Database models for the garment back office
"""

# Import all models to ensure they are registered with SQLAlchemy
from .auth import User, Counter, UserRole, ACCESS_MODULES
from .buyer import Buyer
from .supplier import Supplier
from .product import Product
from .order import Order, OrderType, OrderStatus
from .purchase import Purchase, PurchaseItem, PurchaseStatus, PurchaseItemType
from .production import Production, ProductionStatus
from .store import (
    StoreEntry, StoreEntryItem, StoreLog, StoreLogItem,
    StoreEntryStatus, StoreLogStatus, STORE_ITEM_TYPES, STORE_UNITS
)

__all__ = [
    "User",
    "Counter",
    "UserRole",
    "ACCESS_MODULES",
    "Buyer",
    "Supplier",
    "Product",
    "Order",
    "OrderType",
    "OrderStatus",
    "Purchase",
    "PurchaseItem",
    "PurchaseStatus",
    "PurchaseItemType",
    "Production",
    "ProductionStatus",
    "StoreEntry",
    "StoreEntryItem",
    "StoreLog",
    "StoreLogItem",
    "StoreEntryStatus",
    "StoreLogStatus",
    "STORE_ITEM_TYPES",
    "STORE_UNITS",
]
