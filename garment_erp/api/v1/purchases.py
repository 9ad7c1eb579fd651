"""
Purchase API endpoints
"""
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from garment_erp.api import deps
from garment_erp.models.auth import User
from garment_erp.schemas.common import MessageResponse
from garment_erp.schemas.purchase import (
    PurchaseCreate, PurchaseUpdate, PurchaseResponse, PurchaseSummary, PurchaseStatusEnum
)
from garment_erp.schemas.supplier import SupplierResponse
from garment_erp.services.purchase_service import PurchaseService

router = APIRouter()


@router.get("", response_model=List[PurchaseSummary])
def list_purchases(
    status_filter: Optional[PurchaseStatusEnum] = Query(None, alias="status"),
    order_id: Optional[int] = None,
    order_type: Optional[str] = None,
    search: Optional[str] = None,
    include_machines: bool = False,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """
    List purchases, newest first. Machine purchases are left out unless asked for.
    """
    return PurchaseService(db).list_purchases(
        status=status_filter.value if status_filter else None,
        order_id=order_id,
        order_type=order_type,
        search=search,
        include_machines=include_machines,
        skip=skip,
        limit=limit,
    )


@router.get("/search/suppliers", response_model=List[SupplierResponse])
def search_suppliers(
    q: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Supplier typeahead for purchase lines"""
    return PurchaseService(db).search_suppliers(q)


@router.get("/{purchase_id}", response_model=PurchaseResponse)
def get_purchase(
    purchase_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Get purchase with its lines"""
    return PurchaseService(db).get_purchase(purchase_id)


@router.post("", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
def create_purchase(
    purchase_in: PurchaseCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "purchase"))
) -> Any:
    """
    Create the purchase for an FOB or JOB-Works order

    A purchase with lines is Completed unless a status is given, and a
    completed purchase opens production for the order.
    """
    return PurchaseService(db, current_user).create_purchase(purchase_in)


@router.put("/{purchase_id}", response_model=PurchaseResponse)
def update_purchase(
    purchase_id: int,
    purchase_in: PurchaseUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "purchase"))
) -> Any:
    """Update purchase; refused once goods are in the store"""
    return PurchaseService(db, current_user).update_purchase(purchase_id, purchase_in)


@router.patch("/{purchase_id}/complete", response_model=PurchaseResponse)
def complete_purchase(
    purchase_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "purchase"))
) -> Any:
    """Mark purchase Completed"""
    return PurchaseService(db, current_user).complete_purchase(purchase_id)


@router.delete("/{purchase_id}", response_model=MessageResponse)
def delete_purchase(
    purchase_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "purchase"))
) -> Any:
    """Delete purchase and its production"""
    PurchaseService(db, current_user).delete_purchase(purchase_id)
    return {"message": "Purchase deleted successfully"}
