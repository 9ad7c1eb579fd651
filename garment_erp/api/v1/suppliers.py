"""
Supplier API endpoints
"""
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from garment_erp.api import deps
from garment_erp.models.auth import User
from garment_erp.schemas.common import MessageResponse
from garment_erp.schemas.supplier import (
    VendorCategory, SupplierCreate, SupplierUpdate, SupplierResponse
)
from garment_erp.services.supplier_service import SupplierService

router = APIRouter()


@router.get("", response_model=List[SupplierResponse])
def list_suppliers(
    search: Optional[str] = None,
    vendor_category: Optional[VendorCategory] = None,
    is_active: Optional[bool] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """List suppliers, newest first"""
    return SupplierService(db).list_suppliers(
        search=search,
        vendor_category=vendor_category.value if vendor_category else None,
        is_active=is_active,
        skip=skip,
        limit=limit,
    )


@router.get("/search", response_model=List[SupplierResponse])
def search_suppliers(
    q: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Typeahead search over active suppliers"""
    return SupplierService(db).search(q)


@router.get("/{supplier_id}", response_model=SupplierResponse)
def get_supplier(
    supplier_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Get supplier by ID"""
    return SupplierService(db).get_supplier(supplier_id)


@router.post("", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
def create_supplier(
    supplier_in: SupplierCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "purchase"))
) -> Any:
    """Create supplier"""
    return SupplierService(db).create_supplier(supplier_in)


@router.put("/{supplier_id}", response_model=SupplierResponse)
def update_supplier(
    supplier_id: int,
    supplier_in: SupplierUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "purchase"))
) -> Any:
    """Update supplier"""
    return SupplierService(db).update_supplier(supplier_id, supplier_in)


@router.delete("/{supplier_id}", response_model=MessageResponse)
def delete_supplier(
    supplier_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "purchase"))
) -> Any:
    """Delete supplier not used by any purchase"""
    SupplierService(db).delete_supplier(supplier_id)
    return {"message": "Supplier deleted successfully"}
