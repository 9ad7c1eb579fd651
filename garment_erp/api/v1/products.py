"""
Product API endpoints
"""
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from garment_erp.api import deps
from garment_erp.models.auth import User
from garment_erp.schemas.common import MessageResponse
from garment_erp.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from garment_erp.services.product_service import ProductService

router = APIRouter()


@router.get("", response_model=List[ProductResponse])
def list_products(
    search: Optional[str] = None,
    category: Optional[str] = None,
    is_active: Optional[bool] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """List products by name"""
    return ProductService(db).list_products(
        search=search, category=category, is_active=is_active, skip=skip, limit=limit
    )


@router.get("/search", response_model=List[ProductResponse])
def search_products(
    q: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Typeahead search over active products"""
    return ProductService(db).search(q)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Get product by ID"""
    return ProductService(db).get_product(product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    product_in: ProductCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "product"))
) -> Any:
    """Create product"""
    return ProductService(db).create_product(product_in)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_in: ProductUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "product"))
) -> Any:
    """Update product"""
    return ProductService(db).update_product(product_id, product_in)


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "product"))
) -> Any:
    """Delete product"""
    ProductService(db).delete_product(product_id)
    return {"message": "Product deleted successfully"}
