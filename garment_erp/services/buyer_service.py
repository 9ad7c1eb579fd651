"""
Buyer Service
Buyer master maintenance, code generation and typeahead search
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import or_
import logging

from garment_erp.core.config import settings
from garment_erp.core.exceptions import ConflictError, NotFoundError, ValidationError
from garment_erp.models.buyer import Buyer
from garment_erp.models.order import Order
from garment_erp.schemas.buyer import BuyerCreate, BuyerUpdate, BuyerCategory
from garment_erp.services.business_logic import capitalize_first, next_prefixed_code, dedupe_by_key

logger = logging.getLogger(__name__)

CODE_PREFIXES = {
    BuyerCategory.REGULAR.value: "BUY",
    BuyerCategory.YAS.value: "YAS",
}


class BuyerService:
    """Buyer master operations"""

    def __init__(self, db: Session):
        self.db = db

    def list_buyers(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Buyer]:
        query = self.db.query(Buyer)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Buyer.name.ilike(pattern),
                Buyer.company_name.ilike(pattern),
                Buyer.code.ilike(pattern),
                Buyer.mobile.ilike(pattern),
            ))
        if category:
            query = query.filter(Buyer.buyer_category == category)
        if is_active is not None:
            query = query.filter(Buyer.is_active == is_active)
        return query.order_by(Buyer.created_at.desc(), Buyer.id.desc()).offset(skip).limit(limit).all()

    def get_buyer(self, buyer_id: int) -> Buyer:
        buyer = self.db.query(Buyer).filter(Buyer.id == buyer_id).first()
        if not buyer:
            raise NotFoundError("Buyer not found")
        return buyer

    def next_code(self, category: str) -> str:
        """Next BUYnnn / YASnnn code for the category"""
        prefix = CODE_PREFIXES[category]
        last = (
            self.db.query(Buyer.code)
            .filter(Buyer.code.like(f"{prefix}%"))
            .order_by(Buyer.id.desc())
            .first()
        )
        return next_prefixed_code(last[0] if last else None, prefix)

    def create_buyer(self, buyer_in: BuyerCreate, commit: bool = True) -> Buyer:
        category = buyer_in.buyer_category.value
        buyer = Buyer(
            code=self.next_code(category),
            name=capitalize_first(buyer_in.name),
            company_name=buyer_in.company_name or "",
            mobile=buyer_in.mobile,
            email=buyer_in.email,
            gst=buyer_in.gst,
            address=buyer_in.address,
            city=buyer_in.city,
            state=buyer_in.state,
            pincode=buyer_in.pincode,
            buyer_category=category,
            yas_buyer_type=buyer_in.yas_buyer_type,
            is_active=True,
        )
        self.db.add(buyer)
        if commit:
            self.db.commit()
            self.db.refresh(buyer)
        else:
            self.db.flush()

        logger.info(f"Buyer created: {buyer.code} {buyer.name}")
        return buyer

    def update_buyer(self, buyer_id: int, buyer_in: BuyerUpdate) -> Buyer:
        buyer = self.get_buyer(buyer_id)
        data = buyer_in.model_dump(exclude_unset=True)

        category = data.get("buyer_category")
        if category is not None:
            category = category.value if hasattr(category, "value") else category
            data["buyer_category"] = category
        effective_category = category or buyer.buyer_category

        if effective_category == BuyerCategory.YAS.value:
            if not (data.get("yas_buyer_type") or buyer.yas_buyer_type):
                raise ValidationError("YAS buyer type is required for YAS buyers")
        else:
            data["yas_buyer_type"] = None

        if "name" in data:
            data["name"] = capitalize_first(data["name"])

        for field, value in data.items():
            setattr(buyer, field, value)

        self.db.commit()
        self.db.refresh(buyer)
        logger.info(f"Buyer updated: {buyer.code}")
        return buyer

    def delete_buyer(self, buyer_id: int) -> None:
        buyer = self.get_buyer(buyer_id)
        has_orders = self.db.query(Order.id).filter(Order.buyer_id == buyer.id).first()
        if has_orders:
            raise ConflictError("Buyer has orders and cannot be deleted; deactivate instead")
        self.db.delete(buyer)
        self.db.commit()
        logger.info(f"Buyer deleted: {buyer.code}")

    def search(self, q: Optional[str]) -> List[Buyer]:
        """Active buyers whose name or company matches q"""
        if not q or len(q.strip()) < settings.SEARCH_MIN_CHARS:
            return []
        pattern = f"%{q.strip()}%"
        buyers = (
            self.db.query(Buyer)
            .filter(Buyer.is_active.is_(True))
            .filter(or_(Buyer.name.ilike(pattern), Buyer.company_name.ilike(pattern)))
            .order_by(Buyer.name)
            .limit(settings.SEARCH_LIMIT)
            .all()
        )
        return dedupe_by_key(buyers)
