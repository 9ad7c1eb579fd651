"""
Main API Router - Consolidates all module routes
"""

from fastapi import APIRouter
from garment_erp.api.v1 import (
    auth,
    users,
    buyers,
    suppliers,
    products,
    orders,
    purchases,
    machines,
    productions,
    store_entries,
    store_logs,
    store_inventory,
)

api_router = APIRouter()

# Authentication and user administration
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/users", tags=["users"])

# Masters
api_router.include_router(buyers.router, prefix="/buyers", tags=["buyers"])
api_router.include_router(suppliers.router, prefix="/suppliers", tags=["suppliers"])
api_router.include_router(products.router, prefix="/products", tags=["products"])

# Orders, purchasing and production
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(purchases.router, prefix="/purchases", tags=["purchases"])
api_router.include_router(machines.router, prefix="/machines", tags=["machines"])
api_router.include_router(productions.router, prefix="/productions", tags=["productions"])

# Store
api_router.include_router(store_entries.router, prefix="/store-entries", tags=["store-entries"])
api_router.include_router(store_logs.router, prefix="/store-logs", tags=["store-logs"])
api_router.include_router(store_inventory.router, prefix="/store-inventory", tags=["store-inventory"])
