"""
BOM Service - installation guides and stock sufficiency check
"""
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Dict, Any
import logging

from wms.models import BomGuide, InventoryItem
from wms.schemas.bom import BomGuideCreate

logger = logging.getLogger(__name__)


class BomService:

    @staticmethod
    def list_guides(db: Session) -> List[BomGuide]:
        return db.query(BomGuide).order_by(BomGuide.guide_name, BomGuide.id).all()

    @staticmethod
    def guide_names(db: Session) -> List[str]:
        rows = db.query(BomGuide.guide_name).distinct().order_by(BomGuide.guide_name).all()
        return [row[0] for row in rows]

    @staticmethod
    def get_guide(db: Session, guide_name: str) -> List[BomGuide]:
        return db.query(BomGuide).filter(BomGuide.guide_name == guide_name).order_by(BomGuide.id).all()

    @staticmethod
    def create(db: Session, data: BomGuideCreate, commit: bool = True) -> BomGuide:
        bom = BomGuide(
            guide_name=data.guide_name,
            item_code=data.item_code,
            required_quantity=data.required_quantity
        )
        db.add(bom)
        if commit:
            db.commit()
            db.refresh(bom)
        else:
            db.flush()
        return bom

    @staticmethod
    def delete_guide(db: Session, guide_name: str, commit: bool = True) -> bool:
        deleted = db.query(BomGuide).filter(BomGuide.guide_name == guide_name).delete(synchronize_session=False)
        if commit:
            db.commit()
        return deleted > 0

    @staticmethod
    def delete_all(db: Session, commit: bool = True) -> int:
        deleted = db.query(BomGuide).delete(synchronize_session=False)
        if commit:
            db.commit()
        return deleted

    @staticmethod
    def check_guide(db: Session, guide_name: str) -> List[Dict[str, Any]]:
        """Required quantity per part vs total stock across all locations"""
        needed: Dict[str, int] = {}
        for bom in BomService.get_guide(db, guide_name):
            needed[bom.item_code] = needed.get(bom.item_code, 0) + bom.required_quantity

        if not needed:
            return []

        stock_rows = db.query(
            InventoryItem.code,
            func.sum(InventoryItem.stock),
            func.min(InventoryItem.name)
        ).filter(InventoryItem.code.in_(list(needed.keys()))).group_by(InventoryItem.code).all()
        stock = {code: (int(total or 0), name) for code, total, name in stock_rows}

        results = []
        for code in sorted(needed):
            current, name = stock.get(code, (0, None))
            results.append({
                "code": code,
                "name": name or f"부품 {code}",
                "needed": needed[code],
                "current": current,
                "status": "ok" if current >= needed[code] else "shortage",
            })
        return results
