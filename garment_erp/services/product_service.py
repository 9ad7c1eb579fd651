"""
Product Service
"""
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from garment_erp.core.config import settings
from garment_erp.core.exceptions import NotFoundError
from garment_erp.models.product import Product
from garment_erp.schemas.product import ProductCreate, ProductUpdate
from garment_erp.services.business_logic import dedupe_by_key

logger = logging.getLogger(__name__)


class ProductService:
    """Product catalogue operations"""

    def __init__(self, db: Session):
        self.db = db

    def list_products(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Product]:
        query = self.db.query(Product)
        if search:
            query = query.filter(Product.name.ilike(f"%{search}%"))
        if category:
            query = query.filter(Product.category == category)
        if is_active is not None:
            query = query.filter(Product.is_active == is_active)
        return query.order_by(Product.name).offset(skip).limit(limit).all()

    def get_product(self, product_id: int) -> Product:
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFoundError("Product not found")
        return product

    def create_product(self, product_in: ProductCreate, commit: bool = True) -> Product:
        product = Product(is_active=True, **product_in.model_dump())
        self.db.add(product)
        if commit:
            self.db.commit()
            self.db.refresh(product)
        else:
            self.db.flush()
        logger.info(f"Product created: {product.name}")
        return product

    def update_product(self, product_id: int, product_in: ProductUpdate) -> Product:
        product = self.get_product(product_id)
        for field, value in product_in.model_dump(exclude_unset=True).items():
            setattr(product, field, value)
        self.db.commit()
        self.db.refresh(product)
        logger.info(f"Product updated: {product.name}")
        return product

    def delete_product(self, product_id: int) -> None:
        product = self.get_product(product_id)
        self.db.delete(product)
        self.db.commit()
        logger.info(f"Product deleted: {product.name}")

    def search(self, q: Optional[str]) -> List[Product]:
        """Active products whose name matches q"""
        if not q or len(q.strip()) < settings.SEARCH_MIN_CHARS:
            return []
        products = (
            self.db.query(Product)
            .filter(Product.is_active.is_(True))
            .filter(Product.name.ilike(f"%{q.strip()}%"))
            .order_by(Product.name)
            .limit(settings.SEARCH_LIMIT)
            .all()
        )
        return dedupe_by_key(products)
