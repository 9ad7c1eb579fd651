"""
Machine purchase API endpoints
"""
from typing import Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from garment_erp.api import deps
from garment_erp.models.auth import User
from garment_erp.schemas.common import MessageResponse
from garment_erp.schemas.purchase import (
    MachinePurchaseCreate, MachinePurchaseUpdate, MachineListResponse, PurchaseResponse
)
from garment_erp.services.machine_service import MachineService

router = APIRouter()


@router.get("", response_model=MachineListResponse)
def list_machines(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Every purchased machine, one row per machine"""
    rows = MachineService(db).list_machines()
    return {"success": True, "count": len(rows), "data": rows}


@router.get("/{purchase_id}", response_model=PurchaseResponse)
def get_machine_purchase(
    purchase_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Get machine purchase"""
    return MachineService(db).get_machine_purchase(purchase_id)


@router.post("", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
def create_machine_purchase(
    purchase_in: MachinePurchaseCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "purchase"))
) -> Any:
    """Record a machine purchase"""
    return MachineService(db).create_machine_purchase(purchase_in)


@router.put("/{purchase_id}", response_model=PurchaseResponse)
def update_machine_purchase(
    purchase_id: int,
    purchase_in: MachinePurchaseUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "purchase"))
) -> Any:
    """Update machine purchase"""
    return MachineService(db).update_machine_purchase(purchase_id, purchase_in)


@router.delete("/{purchase_id}", response_model=MessageResponse)
def delete_machine_purchase(
    purchase_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "purchase"))
) -> Any:
    """Delete machine purchase"""
    MachineService(db).delete_machine_purchase(purchase_id)
    return {"message": "Machine purchase deleted successfully"}
