"""
Store Entry API endpoints
"""
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from garment_erp.api import deps
from garment_erp.models.auth import User
from garment_erp.schemas.common import MessageResponse
from garment_erp.schemas.purchase import PurchaseSummary
from garment_erp.schemas.store import (
    StoreEntryCreate, StoreEntryUpdate, StoreEntryResponse,
    StoreEntryCheckResponse, StoreEntryDraft
)
from garment_erp.services.store import StoreEntryService

router = APIRouter()


@router.get("", response_model=List[StoreEntryResponse])
def list_store_entries(
    status_filter: Optional[str] = Query(None, alias="status"),
    order_id: Optional[int] = None,
    purchase_id: Optional[int] = None,
    include_pending: bool = False,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """
    List store entries, newest first

    include_pending appends a placeholder row for every completed purchase
    that has not been received yet.
    """
    return StoreEntryService(db).list_entries(
        status=status_filter,
        order_id=order_id,
        purchase_id=purchase_id,
        include_pending=include_pending,
    )


@router.get("/pending-purchases", response_model=List[PurchaseSummary])
def pending_purchases(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Completed purchases still waiting for a store entry"""
    return StoreEntryService(db).pending_purchases()


@router.get("/check/{purchase_id}", response_model=StoreEntryCheckResponse)
def check_store_entry(
    purchase_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Whether a purchase already has a store entry"""
    return StoreEntryService(db).check(purchase_id)


@router.get("/purchase/{purchase_id}", response_model=StoreEntryResponse)
def get_store_entry_by_purchase(
    purchase_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Store entry of a purchase"""
    return StoreEntryService(db).get_by_purchase(purchase_id)


@router.get("/draft/{purchase_id}", response_model=StoreEntryDraft)
def draft_store_entry(
    purchase_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Store entry lines pre-filled from the purchase"""
    return StoreEntryService(db).draft(purchase_id)


@router.get("/{entry_id}", response_model=StoreEntryResponse)
def get_store_entry(
    entry_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Get store entry"""
    return StoreEntryService(db).get_entry(entry_id)


@router.post("", response_model=StoreEntryResponse, status_code=status.HTTP_201_CREATED)
def create_store_entry(
    entry_in: StoreEntryCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "store"))
) -> Any:
    """
    Receive a completed purchase into the store
    """
    return StoreEntryService(db, current_user).create_entry(entry_in)


@router.put("/{entry_id}", response_model=StoreEntryResponse)
def update_store_entry(
    entry_id: int,
    entry_in: StoreEntryUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "store"))
) -> Any:
    """Update store entry"""
    return StoreEntryService(db, current_user).update_entry(entry_id, entry_in)


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_store_entry(
    entry_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "store"))
) -> Any:
    """Delete store entry and its logs"""
    StoreEntryService(db, current_user).delete_entry(entry_id)
    return {"message": "Store Entry deleted successfully"}
