"""
Production API endpoints
"""
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from garment_erp.api import deps
from garment_erp.models.auth import User
from garment_erp.schemas.common import MessageResponse
from garment_erp.schemas.production import ProductionUpdate, ProductionResponse, ProductionStatusEnum
from garment_erp.services.production_service import ProductionService

router = APIRouter()


@router.get("", response_model=List[ProductionResponse])
def list_productions(
    status_filter: Optional[ProductionStatusEnum] = Query(None, alias="status"),
    order_id: Optional[int] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """List production runs, newest first"""
    return ProductionService(db).list_productions(
        status=status_filter.value if status_filter else None,
        order_id=order_id,
        skip=skip,
        limit=limit,
    )


@router.get("/{production_id}", response_model=ProductionResponse)
def get_production(
    production_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Get production run"""
    return ProductionService(db).get_production(production_id)


@router.put("/{production_id}", response_model=ProductionResponse)
def update_production(
    production_id: int,
    production_in: ProductionUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "production"))
) -> Any:
    """
    Update stage, details and cutting lines

    shortage_mtr on each cutting line is recomputed as tag_mtr - cutting_mtr.
    """
    return ProductionService(db).update_production(production_id, production_in)


@router.patch("/{production_id}/complete", response_model=ProductionResponse)
def complete_production(
    production_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "production"))
) -> Any:
    """Finish production and complete the order"""
    return ProductionService(db).complete_production(production_id)


@router.delete("/{production_id}", response_model=MessageResponse)
def delete_production(
    production_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "production"))
) -> Any:
    """Delete production run"""
    ProductionService(db).delete_production(production_id)
    return {"message": "Production deleted successfully"}
