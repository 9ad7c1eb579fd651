"""
Store Inventory API endpoints
"""
from typing import Any, Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from garment_erp.api import deps
from garment_erp.models.auth import User
from garment_erp.schemas.store import InventoryReport, InventoryStatusFilter, ExportFormat
from garment_erp.services.reporting import MEDIA_TYPES
from garment_erp.services.store import InventoryReportService

router = APIRouter()


@router.get("", response_model=InventoryReport)
def store_inventory(
    status_filter: InventoryStatusFilter = InventoryStatusFilter.ALL,
    search: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
) -> Any:
    """
    Reconciled stock for every completed store entry
    """
    return InventoryReportService(db).report(status_filter.value, search)


@router.get("/export")
def export_store_inventory(
    format: ExportFormat = Query(ExportFormat.CSV),
    status_filter: InventoryStatusFilter = InventoryStatusFilter.ALL,
    search: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    """Download the inventory as CSV, Excel or PDF"""
    content, filename = InventoryReportService(db).export(format.value, status_filter.value, search)
    return Response(
        content=content,
        media_type=MEDIA_TYPES[format.value],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
