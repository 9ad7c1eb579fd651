"""
Order API endpoints
"""
from datetime import date
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from garment_erp.api import deps
from garment_erp.models.auth import User
from garment_erp.schemas.buyer import BuyerResponse
from garment_erp.schemas.common import MessageResponse
from garment_erp.schemas.order import (
    OrderCreate, OrderUpdate, OrderStatusUpdate, OrderResponse,
    OrderStatusEnum, OrderTypeEnum, NextPoNoResponse, BuyerOrdersResponse
)
from garment_erp.schemas.product import ProductResponse
from garment_erp.services.buyer_service import BuyerService
from garment_erp.services.order_service import OrderService
from garment_erp.services.product_service import ProductService

router = APIRouter()


@router.get("", response_model=List[OrderResponse])
def list_orders(
    status_filter: Optional[OrderStatusEnum] = Query(None, alias="status"),
    order_type: Optional[OrderTypeEnum] = None,
    buyer_id: Optional[int] = None,
    search: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """
    List orders, newest first
    """
    return OrderService(db).list_orders(
        status=status_filter.value if status_filter else None,
        order_type=order_type.value if order_type else None,
        buyer_id=buyer_id,
        search=search,
        skip=skip,
        limit=limit,
    )


@router.get("/next-po-no", response_model=NextPoNoResponse)
def next_po_no(
    on: Optional[date] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Preview the PO number the next order will get"""
    po_no, financial_year = OrderService(db).next_po_no(on)
    return {"po_no": po_no, "financial_year": financial_year}


@router.get("/search/buyers", response_model=List[BuyerResponse])
def search_buyers(
    q: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Buyer typeahead for the order form"""
    return BuyerService(db).search(q)


@router.get("/search/products", response_model=List[ProductResponse])
def search_products(
    q: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Product typeahead for the order form"""
    return ProductService(db).search(q)


@router.get("/buyer/{buyer_id}", response_model=BuyerOrdersResponse)
def orders_by_buyer(
    buyer_id: int,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=1000),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Orders of one buyer"""
    BuyerService(db).get_buyer(buyer_id)
    orders, total = OrderService(db).orders_by_buyer(buyer_id, skip=skip, limit=limit)
    return {"buyer_id": buyer_id, "orders": orders, "total": total}


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """Get order by ID"""
    return OrderService(db).get_order(order_id)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    order_in: OrderCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "orders"))
) -> Any:
    """
    Create order

    The buyer is either referenced by id or created inline; products are
    matched by id or name and created when unknown.
    """
    return OrderService(db).create_order(order_in)


@router.put("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: int,
    order_in: OrderUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "orders"))
) -> Any:
    """Update order"""
    return OrderService(db).update_order(order_id, order_in)


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    status_in: OrderStatusUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "orders"))
) -> Any:
    """Set order status"""
    return OrderService(db).update_status(order_id, status_in.status.value)


@router.delete("/{order_id}", response_model=MessageResponse)
def delete_order(
    order_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.authorize("Admin", "orders"))
) -> Any:
    """Delete order with its purchase, production and store records"""
    OrderService(db).delete_order(order_id)
    return {"message": "Order deleted successfully"}
