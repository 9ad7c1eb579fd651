"""
Buyer API endpoints
"""
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from garment_erp.api import deps
from garment_erp.models.auth import User
from garment_erp.schemas.buyer import BuyerCategory, BuyerCreate, BuyerUpdate, BuyerResponse
from garment_erp.schemas.common import MessageResponse
from garment_erp.services.buyer_service import BuyerService

router = APIRouter()


@router.get("", response_model=List[BuyerResponse])
def list_buyers(
    search: Optional[str] = None,
    category: Optional[BuyerCategory] = None,
    is_active: Optional[bool] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """
    List buyers, newest first
    """
    return BuyerService(db).list_buyers(
        search=search,
        category=category.value if category else None,
        is_active=is_active,
        skip=skip,
        limit=limit,
    )


@router.get("/search", response_model=List[BuyerResponse])
def search_buyers(
    q: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Typeahead search over name, company, code and mobile"""
    return BuyerService(db).search(q)


@router.get("/{buyer_id}", response_model=BuyerResponse)
def get_buyer(
    buyer_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Get buyer by ID"""
    return BuyerService(db).get_buyer(buyer_id)


@router.post("", response_model=BuyerResponse, status_code=status.HTTP_201_CREATED)
def create_buyer(
    buyer_in: BuyerCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "buyer"))
) -> Any:
    """
    Create buyer; the code is assigned from the buyer category
    """
    return BuyerService(db).create_buyer(buyer_in)


@router.put("/{buyer_id}", response_model=BuyerResponse)
def update_buyer(
    buyer_id: int,
    buyer_in: BuyerUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "buyer"))
) -> Any:
    """Update buyer"""
    return BuyerService(db).update_buyer(buyer_id, buyer_in)


@router.delete("/{buyer_id}", response_model=MessageResponse)
def delete_buyer(
    buyer_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "buyer"))
) -> Any:
    """Delete buyer with no orders"""
    BuyerService(db).delete_buyer(buyer_id)
    return {"message": "Buyer deleted successfully"}
