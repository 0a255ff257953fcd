"""
System Service - data reset, backup export and restore
"""
from sqlalchemy.orm import Session
from typing import Dict, Any, List
from datetime import datetime
import logging
import re

from wms.models import (
    InventoryItem, Transaction, BomGuide, ExchangeQueueItem,
    WorkDiary, WorkDiaryComment, WorkNotification,
)
from .inventory_service import ROW_FIELDS

logger = logging.getLogger(__name__)

TRANSACTION_FIELDS = ("type", "item_code", "item_name", "quantity", "from_location", "to_location", "reason", "memo", "user_id")
BOM_FIELDS = ("guide_name", "item_code", "required_quantity")


def _snake(key: str) -> str:
    """camelCase keys of older backups -> column names"""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _pick_fields(record: Dict[str, Any], fields: tuple, int_fields: tuple = ()) -> Dict[str, Any]:
    """
    Known, non-null fields of a backup record; null columns fall back to the model defaults.
    Raises ValueError/TypeError when an integer field is not a number.
    """
    normalized = {_snake(k): v for k, v in record.items()}
    values = {k: normalized[k] for k in fields if normalized.get(k) is not None}
    for key in int_fields:
        if key in values:
            values[key] = int(values[key])
    return values


def _row_dict(obj, fields: tuple) -> Dict[str, Any]:
    data = {"id": obj.id}
    data.update({field: getattr(obj, field) for field in fields})
    data["created_at"] = obj.created_at.isoformat() if obj.created_at else None
    return data


class SystemService:

    @staticmethod
    def reset_all_data(db: Session) -> Dict[str, int]:
        """Delete every business record; users and warehouse layout stay"""
        counts = {}
        try:
            for model in (WorkNotification, WorkDiaryComment, WorkDiary, ExchangeQueueItem,
                          Transaction, BomGuide, InventoryItem):
                counts[model.__tablename__] = db.query(model).delete(synchronize_session=False)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.warning(f"System data reset: {counts}")
        return counts

    @staticmethod
    def export_backup(db: Session) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "inventory": [_row_dict(i, ROW_FIELDS) for i in db.query(InventoryItem).order_by(InventoryItem.id)],
            "transactions": [_row_dict(t, TRANSACTION_FIELDS) for t in db.query(Transaction).order_by(Transaction.id)],
            "bom_guides": [_row_dict(b, BOM_FIELDS) for b in db.query(BomGuide).order_by(BomGuide.id)],
            "exported_at": datetime.now().isoformat(),
        }

    @staticmethod
    def restore_backup(
        db: Session,
        inventory: List[Dict[str, Any]],
        transactions: List[Dict[str, Any]],
        bom_guides: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Replace inventory and BOM with the backup and append its transactions.
        Records that fail validation are skipped; the rest is applied in one commit.
        """
        skipped = 0
        try:
            db.query(InventoryItem).delete(synchronize_session=False)
            db.query(BomGuide).delete(synchronize_session=False)

            inventory_count = 0
            for record in inventory:
                try:
                    values = _pick_fields(record, ROW_FIELDS, ("stock", "min_stock", "box_size"))
                except (TypeError, ValueError):
                    skipped += 1
                    continue
                if (not values.get("code") or not values.get("name")
                        or values.get("stock", 0) < 0 or values.get("min_stock", 0) < 0):
                    skipped += 1
                    continue
                db.add(InventoryItem(**values))
                inventory_count += 1

            transaction_count = 0
            for record in transactions:
                try:
                    values = _pick_fields(record, TRANSACTION_FIELDS, ("quantity", "user_id"))
                except (TypeError, ValueError):
                    skipped += 1
                    continue
                if not values.get("type") or not values.get("item_code") or not values.get("quantity"):
                    skipped += 1
                    continue
                created_at = record.get("created_at") or record.get("createdAt")
                if created_at:
                    try:
                        values["created_at"] = datetime.fromisoformat(str(created_at).replace("Z", "+00:00"))
                    except ValueError:
                        logger.warning(f"Unreadable created_at in backup, using restore time: {created_at}")
                values.setdefault("item_name", values["item_code"])
                db.add(Transaction(**values))
                transaction_count += 1

            bom_count = 0
            for record in bom_guides:
                try:
                    values = _pick_fields(record, BOM_FIELDS, ("required_quantity",))
                except (TypeError, ValueError):
                    skipped += 1
                    continue
                if not values.get("guide_name") or not values.get("item_code") or not values.get("required_quantity"):
                    skipped += 1
                    continue
                db.add(BomGuide(**values))
                bom_count += 1

            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.warning(
            f"Backup restored: {inventory_count} inventory, {transaction_count} transactions, "
            f"{bom_count} BOM lines ({skipped} skipped)"
        )
        return {
            "inventory_count": inventory_count,
            "transaction_count": transaction_count,
            "bom_count": bom_count,
            "skipped": skipped,
            "message": "백업 복원 완료",
        }
