"""
Garment ERP Business Services
"""

from .auth_service import AuthService
from .buyer_service import BuyerService
from .supplier_service import SupplierService
from .product_service import ProductService
from .order_service import OrderService
from .purchase_service import PurchaseService
from .machine_service import MachineService
from .production_service import ProductionService

__all__ = [
    "AuthService",
    "BuyerService",
    "SupplierService",
    "ProductService",
    "OrderService",
    "PurchaseService",
    "MachineService",
    "ProductionService",
]
