"""
Inventory Service - per-location stock rows
"""
from sqlalchemy.orm import Session
from sqlalchemy import func, or_
from typing import List, Optional, Dict, Any
import logging

from wms.core import item_locks, InvalidInput, NotFound
from wms.models import InventoryItem, Transaction

logger = logging.getLogger(__name__)

ROW_FIELDS = ("code", "name", "category", "manufacturer", "stock", "min_stock", "unit", "location", "box_size")


def _clean(data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only inventory row fields and reject negative stock values"""
    values = {key: value for key, value in data.items() if key in ROW_FIELDS}
    for key in ("stock", "min_stock"):
        if values.get(key) is not None and values[key] < 0:
            raise InvalidInput(f"{key} must not be negative")
    return values


class InventoryService:
    """Inventory store: rows are keyed by (code, location); code alone is not unique"""

    @staticmethod
    def create(db: Session, data: Dict[str, Any], commit: bool = True) -> InventoryItem:
        """Insert a new row (never merges)"""
        values = _clean(data)
        if not values.get("code"):
            raise InvalidInput("code is required")
        item = InventoryItem(**values)
        db.add(item)
        if commit:
            db.commit()
            db.refresh(item)
        else:
            db.flush()
        return item

    @staticmethod
    def get_by_id(db: Session, item_id: int) -> Optional[InventoryItem]:
        return db.query(InventoryItem).filter(InventoryItem.id == item_id).first()

    @staticmethod
    def get_by_code(db: Session, code: str) -> Optional[InventoryItem]:
        """First row of the code in insertion order"""
        return db.query(InventoryItem).filter(
            InventoryItem.code == code
        ).order_by(InventoryItem.id).first()

    @staticmethod
    def get_by_code_and_location(db: Session, code: str, location: Optional[str]) -> Optional[InventoryItem]:
        query = db.query(InventoryItem).filter(InventoryItem.code == code)
        if location is None:
            query = query.filter(InventoryItem.location.is_(None))
        else:
            query = query.filter(InventoryItem.location == location)
        return query.order_by(InventoryItem.id).first()

    @staticmethod
    def get_rows_for_code(
        db: Session,
        code: str,
        in_stock_only: bool = False,
        for_update: bool = False
    ) -> List[InventoryItem]:
        """All rows of a code in insertion order"""
        query = db.query(InventoryItem).filter(InventoryItem.code == code)
        if in_stock_only:
            query = query.filter(InventoryItem.stock > 0)
        query = query.order_by(InventoryItem.id)
        if for_update:
            query = query.with_for_update()
        return query.all()

    @staticmethod
    def list_items(
        db: Session,
        search: Optional[str] = None,
        category: Optional[str] = None,
        location: Optional[str] = None
    ) -> List[InventoryItem]:
        query = db.query(InventoryItem)
        if search:
            term = f"%{search}%"
            query = query.filter(or_(InventoryItem.code.ilike(term), InventoryItem.name.ilike(term)))
        if category:
            query = query.filter(InventoryItem.category == category)
        if location:
            query = query.filter(InventoryItem.location.ilike(f"{location}%"))
        return query.order_by(InventoryItem.id).all()

    @staticmethod
    def total_stock(db: Session, code: str) -> int:
        total = db.query(func.coalesce(func.sum(InventoryItem.stock), 0)).filter(
            InventoryItem.code == code
        ).scalar()
        return int(total or 0)

    @staticmethod
    def _apply(db: Session, item: Optional[InventoryItem], data: Dict[str, Any], commit: bool) -> Optional[InventoryItem]:
        if not item:
            return None
        for field, value in _clean(data).items():
            setattr(item, field, value)
        if commit:
            db.commit()
            db.refresh(item)
        else:
            db.flush()
        return item

    @staticmethod
    def update_by_id(db: Session, item_id: int, data: Dict[str, Any], commit: bool = True) -> Optional[InventoryItem]:
        item = InventoryService.get_by_id(db, item_id)
        return InventoryService._apply(db, item, data, commit)

    @staticmethod
    def update_by_code(db: Session, code: str, data: Dict[str, Any], commit: bool = True) -> Optional[InventoryItem]:
        """Update the first row of the code only"""
        item = InventoryService.get_by_code(db, code)
        return InventoryService._apply(db, item, data, commit)

    @staticmethod
    def update_by_location(
        db: Session,
        code: str,
        location: Optional[str],
        data: Dict[str, Any],
        commit: bool = True
    ) -> Optional[InventoryItem]:
        item = InventoryService.get_by_code_and_location(db, code, location)
        return InventoryService._apply(db, item, data, commit)

    @staticmethod
    def delete(db: Session, code: str, commit: bool = True) -> bool:
        """Delete every row of the code"""
        deleted = db.query(InventoryItem).filter(InventoryItem.code == code).delete(synchronize_session=False)
        if commit:
            db.commit()
        if deleted:
            logger.info(f"Deleted {deleted} inventory row(s) for {code}")
        return deleted > 0

    @staticmethod
    def delete_by_id(db: Session, item_id: int, commit: bool = True) -> bool:
        item = InventoryService.get_by_id(db, item_id)
        if not item:
            return False
        db.delete(item)
        if commit:
            db.commit()
        return True

    @staticmethod
    def merge_inbound(db: Session, data: Dict[str, Any]) -> tuple:
        """
        Register stock from the inventory form.
        Adds to the first row of the code when one exists (static fields and
        location are overwritten), otherwise creates a row.
        Returns (item, created).
        """
        values = _clean(data)
        code = values.get("code")
        if not code:
            raise InvalidInput("code is required")

        with item_locks.hold(code):
            existing = InventoryService.get_by_code(db, code)
            if not existing:
                return InventoryService.create(db, values), True

            updates = {key: value for key, value in values.items() if key not in ("code", "stock")}
            updates["stock"] = existing.stock + (values.get("stock") or 0)
            logger.info(f"Adding {values.get('stock') or 0} to existing row {existing.id} ({code})")
            return InventoryService._apply(db, existing, updates, commit=True), False

    @staticmethod
    def adjust_stock(
        db: Session,
        item_id: int,
        new_stock: int,
        reason: str,
        user_id: Optional[int] = None
    ) -> Dict[str, Any]:
        """Set a row's stock to an absolute value and record the adjustment"""
        if new_stock < 0:
            raise InvalidInput("Invalid stock amount")
        if not reason:
            raise InvalidInput("Reason is required")

        item = InventoryService.get_by_id(db, item_id)
        if not item:
            raise NotFound("Item not found")

        with item_locks.hold(item.code):
            try:
                db.refresh(item)
                old_stock = item.stock
                difference = new_stock - old_stock
                item.stock = new_stock

                if difference != 0:
                    db.add(Transaction(
                        type="adjustment",
                        item_code=item.code,
                        item_name=item.name,
                        quantity=abs(difference),
                        reason=f"재고 조정 ({reason}): {old_stock} → {new_stock}",
                        to_location=item.location,
                        user_id=user_id
                    ))
                db.commit()
            except Exception:
                db.rollback()
                raise

        logger.info(f"Stock adjusted: {item.name} ({old_stock} -> {new_stock}), reason: {reason}")
        return {
            "message": "Stock adjusted successfully",
            "old_stock": old_stock,
            "new_stock": new_stock,
            "difference": difference,
        }

    @staticmethod
    def low_stock_alerts(db: Session) -> List[Dict[str, Any]]:
        """Out-of-stock, low-stock and overstock alerts per row"""
        alerts = []
        for item in db.query(InventoryItem).order_by(InventoryItem.id).all():
            base = {
                "item_code": item.code,
                "item_name": item.name,
                "location": item.location,
                "current_stock": item.stock,
                "min_stock": item.min_stock,
            }
            if item.stock == 0:
                alerts.append({**base, "id": f"out-{item.id}", "type": "out_of_stock", "severity": "critical"})
            elif item.stock <= item.min_stock:
                severity = "high" if item.stock <= item.min_stock * 0.5 else "medium"
                alerts.append({**base, "id": f"low-{item.id}", "type": "low_stock", "severity": severity})
            elif item.min_stock > 0 and item.stock > item.min_stock * 10:
                alerts.append({
                    **base,
                    "id": f"over-{item.id}",
                    "type": "overstock",
                    "max_stock": item.min_stock * 10,
                    "severity": "low",
                })
        return alerts
