"""
Supplier Service
Vendor master maintenance and the purchase-form supplier lookup
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import or_
import logging

from garment_erp.core.config import settings
from garment_erp.core.exceptions import ConflictError, NotFoundError
from garment_erp.models.supplier import Supplier
from garment_erp.models.purchase import PurchaseItem
from garment_erp.schemas.supplier import SupplierCreate, SupplierUpdate
from garment_erp.services.business_logic import capitalize_first, next_prefixed_code, dedupe_by_key

logger = logging.getLogger(__name__)

CODE_PREFIX = "SUP"


class SupplierService:
    """Supplier master operations"""

    def __init__(self, db: Session):
        self.db = db

    def list_suppliers(
        self,
        search: Optional[str] = None,
        vendor_category: Optional[str] = None,
        is_active: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Supplier]:
        query = self.db.query(Supplier)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Supplier.name.ilike(pattern),
                Supplier.company_name.ilike(pattern),
                Supplier.code.ilike(pattern),
            ))
        if vendor_category:
            query = query.filter(Supplier.vendor_category == vendor_category)
        if is_active is not None:
            query = query.filter(Supplier.is_active == is_active)
        return query.order_by(Supplier.created_at.desc(), Supplier.id.desc()).offset(skip).limit(limit).all()

    def get_supplier(self, supplier_id: int) -> Supplier:
        supplier = self.db.query(Supplier).filter(Supplier.id == supplier_id).first()
        if not supplier:
            raise NotFoundError("Supplier not found")
        return supplier

    def next_code(self) -> str:
        last = (
            self.db.query(Supplier.code)
            .filter(Supplier.code.like(f"{CODE_PREFIX}%"))
            .order_by(Supplier.id.desc())
            .first()
        )
        return next_prefixed_code(last[0] if last else None, CODE_PREFIX)

    def create_supplier(self, supplier_in: SupplierCreate) -> Supplier:
        data = supplier_in.model_dump()
        data["vendor_category"] = supplier_in.vendor_category.value
        data["name"] = capitalize_first(data["name"])
        data["company_name"] = data.get("company_name") or ""

        supplier = Supplier(code=self.next_code(), is_active=True, **data)
        self.db.add(supplier)
        self.db.commit()
        self.db.refresh(supplier)

        logger.info(f"Supplier created: {supplier.code} {supplier.name}")
        return supplier

    def update_supplier(self, supplier_id: int, supplier_in: SupplierUpdate) -> Supplier:
        supplier = self.get_supplier(supplier_id)
        data = supplier_in.model_dump(exclude_unset=True)
        if data.get("vendor_category") is not None:
            data["vendor_category"] = supplier_in.vendor_category.value
        if "name" in data:
            data["name"] = capitalize_first(data["name"])

        for field, value in data.items():
            setattr(supplier, field, value)

        self.db.commit()
        self.db.refresh(supplier)
        logger.info(f"Supplier updated: {supplier.code}")
        return supplier

    def delete_supplier(self, supplier_id: int) -> None:
        supplier = self.get_supplier(supplier_id)
        in_use = self.db.query(PurchaseItem.id).filter(PurchaseItem.vendor_id == supplier.id).first()
        if in_use:
            raise ConflictError("Supplier is used on purchases and cannot be deleted; deactivate instead")
        self.db.delete(supplier)
        self.db.commit()
        logger.info(f"Supplier deleted: {supplier.code}")

    def search(self, q: Optional[str]) -> List[Supplier]:
        """Active suppliers whose name or company matches q"""
        if not q or len(q.strip()) < settings.SEARCH_MIN_CHARS:
            return []
        pattern = f"%{q.strip()}%"
        suppliers = (
            self.db.query(Supplier)
            .filter(Supplier.is_active.is_(True))
            .filter(or_(Supplier.name.ilike(pattern), Supplier.company_name.ilike(pattern)))
            .order_by(Supplier.name)
            .limit(settings.SEARCH_LIMIT)
            .all()
        )
        return dedupe_by_key(suppliers)
