"""
Production Service
"""
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from garment_erp.core.exceptions import NotFoundError
from garment_erp.models.order import OrderStatus
from garment_erp.models.production import Production, ProductionStatus
from garment_erp.schemas.production import ProductionUpdate

logger = logging.getLogger(__name__)


class ProductionService:
    """Production runs opened by completed purchases"""

    def __init__(self, db: Session):
        self.db = db

    def list_productions(
        self,
        status: Optional[str] = None,
        order_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Production]:
        query = self.db.query(Production)
        if status:
            query = query.filter(Production.status == status)
        if order_id:
            query = query.filter(Production.order_id == order_id)
        return query.order_by(Production.id.desc()).offset(skip).limit(limit).all()

    def get_production(self, production_id: int) -> Production:
        production = self.db.query(Production).filter(Production.id == production_id).first()
        if not production:
            raise NotFoundError("Production not found")
        return production

    def update_production(self, production_id: int, production_in: ProductionUpdate) -> Production:
        production = self.get_production(production_id)

        if production_in.status is not None:
            production.status = production_in.status.value
        if production_in.production_details is not None:
            production.production_details = production_in.production_details
        if production_in.remarks is not None:
            production.remarks = production_in.remarks
        if production_in.cutting_details is not None:
            cutting = []
            for line in production_in.cutting_details:
                data = line.model_dump()
                data["shortage_mtr"] = round(data["tag_mtr"] - data["cutting_mtr"], 2)
                cutting.append(data)
            production.cutting_details = cutting

        self.db.commit()
        self.db.refresh(production)
        logger.info(f"Production {production.id} updated, status={production.status}")
        return production

    def complete_production(self, production_id: int) -> Production:
        production = self.get_production(production_id)
        production.status = ProductionStatus.PRODUCTION_COMPLETED
        if production.order is not None:
            production.order.status = OrderStatus.COMPLETED

        self.db.commit()
        self.db.refresh(production)
        logger.info(f"Production {production.id} completed for order {production.po_no}")
        return production

    def delete_production(self, production_id: int) -> None:
        production = self.get_production(production_id)
        self.db.delete(production)
        self.db.commit()
        logger.info(f"Production {production.id} deleted")
