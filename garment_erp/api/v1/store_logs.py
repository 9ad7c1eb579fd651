"""
Store Log API endpoints
"""
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from garment_erp.api import deps
from garment_erp.models.auth import User
from garment_erp.schemas.common import MessageResponse
from garment_erp.schemas.store import (
    StoreLogCreate, StoreLogUpdate, StoreLogResponse, StoreLogStatusEnum, AvailableStockResponse
)
from garment_erp.services.store import StoreLogService

router = APIRouter()


@router.get("", response_model=List[StoreLogResponse])
def list_store_logs(
    status_filter: Optional[StoreLogStatusEnum] = Query(None, alias="status"),
    order_id: Optional[int] = None,
    store_id: Optional[str] = None,
    pur_no: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """List store logs, newest first"""
    return StoreLogService(db).list_logs(
        status=status_filter.value if status_filter else None,
        order_id=order_id,
        store_id=store_id,
        pur_no=pur_no,
        skip=skip,
        limit=limit,
    )


@router.get("/store-entry/{store_entry_id}", response_model=List[StoreLogResponse])
def logs_for_store_entry(
    store_entry_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Logs recorded against one store entry"""
    return StoreLogService(db).logs_for_entry(store_entry_id)


@router.get("/available-stock/{store_entry_id}", response_model=AvailableStockResponse)
def available_stock(
    store_entry_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Stock still available on each line of a store entry"""
    return StoreLogService(db).available_stock(store_entry_id)


@router.get("/{log_id}", response_model=StoreLogResponse)
def get_store_log(
    log_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Get store log"""
    return StoreLogService(db).get_log(log_id)


@router.post("", response_model=StoreLogResponse, status_code=status.HTTP_201_CREATED)
def create_store_log(
    log_in: StoreLogCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "store"))
) -> Any:
    """
    Record material taken from or returned to the store

    Each taken quantity must fit within the stock still available.
    """
    return StoreLogService(db, current_user).create_log(log_in)


@router.put("/{log_id}", response_model=StoreLogResponse)
def update_store_log(
    log_id: int,
    log_in: StoreLogUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "store"))
) -> Any:
    """Update store log"""
    return StoreLogService(db, current_user).update_log(log_id, log_in)


@router.delete("/{log_id}", response_model=MessageResponse)
def delete_store_log(
    log_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "store"))
) -> Any:
    """Delete store log"""
    StoreLogService(db, current_user).delete_log(log_id)
    return {"message": "Store Log deleted successfully"}
