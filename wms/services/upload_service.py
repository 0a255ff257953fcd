"""
Upload Service - spreadsheet rows (already parsed to dicts) into the store

Rows may use the Korean column headers of the Excel templates or English keys.
"""
from sqlalchemy.orm import Session
from typing import List, Dict, Any
import logging

from wms.core import item_locks
from wms.models import InventoryItem
from wms.schemas.bom import BomGuideCreate
from .inventory_service import InventoryService
from .bom_service import BomService
from .warehouse_service import WarehouseService, parse_location

logger = logging.getLogger(__name__)

COLUMN_ALIASES = {
    "code": ("제품코드", "code"),
    "name": ("품명", "name"),
    "category": ("카테고리", "category"),
    "manufacturer": ("제조사", "manufacturer"),
    "stock": ("현재고", "stock"),
    "min_stock": ("최소재고", "min_stock", "minStock"),
    "unit": ("단위", "unit"),
    "location": ("위치", "location"),
    "box_size": ("박스당수량", "box_size", "boxSize"),
    "quantity": ("수량", "quantity"),
    "zone": ("구역", "zone"),
    "sub_zone": ("세부구역", "sub_zone", "subZone"),
    "floor": ("층수", "floor"),
    "guide_name": ("설치가이드명", "guide_name", "guideName"),
    "item_code": ("필요부품코드", "item_code", "itemCode"),
    "required_quantity": ("필요수량", "required_quantity", "requiredQuantity"),
}


def pick(row: Dict[str, Any], field: str, default: Any = None) -> Any:
    """First non-empty value among the column aliases of a field"""
    for key in COLUMN_ALIASES[field]:
        value = row.get(key)
        if value is not None and value != "":
            return value
    return default


def to_int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(float(str(value).strip()))
    except ValueError:
        return default


def to_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value).strip()


def build_location(row: Dict[str, Any]) -> str:
    """Zone / sub-zone / floor columns -> "A-1-1" style location"""
    zone = to_text(pick(row, "zone", "A"))
    sub_zone = to_text(pick(row, "sub_zone", "A-1"))
    sub_number = sub_zone.split("-")[1] if "-" in sub_zone else sub_zone
    floor = to_text(pick(row, "floor", "1")).replace("층", "")
    return f"{zone}-{sub_number or '1'}-{floor or '1'}"


def row_to_item(row: Dict[str, Any], code: str) -> Dict[str, Any]:
    return {
        "code": code,
        "name": to_text(pick(row, "name", code)) or code,
        "category": to_text(pick(row, "category", "기타")) or "기타",
        "manufacturer": to_text(pick(row, "manufacturer", "")),
        "stock": max(to_int(pick(row, "stock"), 0), 0),
        "min_stock": max(to_int(pick(row, "min_stock"), 0), 0),
        "unit": to_text(pick(row, "unit", "ea")) or "ea",
        "location": to_text(pick(row, "location", "")) or None,
        "box_size": max(to_int(pick(row, "box_size"), 1), 1),
    }


class UploadService:

    @staticmethod
    def upload_master(db: Session, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Upsert product master data by code (first row of the code)"""
        created, updated, skipped = [], [], 0
        for row in rows:
            code = to_text(pick(row, "code", ""))
            if not code:
                skipped += 1
                continue
            data = row_to_item(row, code)

            with item_locks.hold(code):
                existing = InventoryService.get_by_code(db, code)
                if existing:
                    changes = {k: data[k] for k in ("name", "category", "manufacturer", "min_stock", "unit", "box_size")}
                    # Stock and location are kept unless the sheet carries them
                    if data["stock"]:
                        changes["stock"] = data["stock"]
                    if data["location"]:
                        changes["location"] = data["location"]
                    updated.append(InventoryService.update_by_id(db, existing.id, changes))
                else:
                    created.append(InventoryService.create(db, data))

        logger.info(f"Master upload: {len(created)} created, {len(updated)} updated, {skipped} skipped")
        return {
            "created": len(created),
            "updated": len(updated),
            "skipped": skipped,
            "items": (created + updated)[:10],
        }

    @staticmethod
    def upload_bom(db: Session, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Replace every BOM guide; a blank guide name continues the previous one"""
        try:
            BomService.delete_all(db, commit=False)
            created = []
            current_guide = ""
            for row in rows:
                guide_name = to_text(pick(row, "guide_name", ""))
                item_code = to_text(pick(row, "item_code", ""))
                required = to_int(pick(row, "required_quantity"), 0)
                if guide_name:
                    current_guide = guide_name
                if current_guide and item_code and required > 0:
                    created.append(BomService.create(db, BomGuideCreate(
                        guide_name=current_guide,
                        item_code=item_code,
                        required_quantity=required
                    ), commit=False))
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"BOM upload: {len(created)} line(s)")
        return {"created": len(created), "items": created[:10]}

    @staticmethod
    def upload_inventory_add(db: Session, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Add quantities to the first row of each code, or create it"""
        items = []
        for row in rows:
            code = to_text(pick(row, "code", ""))
            quantity = to_int(pick(row, "quantity"), 0)
            if not code or quantity <= 0:
                continue
            location = build_location(row)

            with item_locks.hold(code):
                existing = InventoryService.get_by_code(db, code)
                if existing:
                    items.append(InventoryService.update_by_id(db, existing.id, {
                        "stock": existing.stock + quantity,
                        "location": location,
                    }))
                else:
                    data = row_to_item(row, code)
                    data.update({"stock": quantity, "location": location})
                    items.append(InventoryService.create(db, data))

        logger.info(f"Inventory add upload: {len(items)} row(s) updated")
        return {"updated": len(items), "items": items}

    @staticmethod
    def upload_inventory_sync(db: Session, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Replace the whole inventory with the sheet.
        Rows with the same code and location are merged (stock summed) and
        layout zones referenced by valid locations are created when missing.
        """
        unique: Dict[tuple, Dict[str, Any]] = {}
        warnings: List[str] = []
        for index, row in enumerate(rows, start=1):
            code = to_text(pick(row, "code", ""))
            if not code:
                warnings.append(f"Row {index}: Missing product code - skipped")
                continue
            data = row_to_item(row, code)
            key = (code, data["location"])
            if key in unique:
                unique[key]["stock"] += data["stock"]
                warnings.append(
                    f"Row {index}: Duplicate {code} at {data['location'] or 'NO_LOCATION'} - stock merged ({data['stock']} added)"
                )
            else:
                unique[key] = data

        structures: Dict[tuple, int] = {}
        location_warnings: List[str] = []
        for data in unique.values():
            if not data["location"]:
                continue
            parsed = parse_location(data["location"])
            if not parsed:
                location_warnings.append(f"{data['code']}: 위치 형식을 인식할 수 없음 \"{data['location']}\"")
                continue
            key = (parsed["zone"], parsed["sub_zone"])
            structures[key] = max(structures.get(key, 0), parsed["floor"])

        try:
            deleted = db.query(InventoryItem).delete(synchronize_session=False)
            created_zones = []
            for (zone, sub_zone), max_floor in structures.items():
                new_zone = WarehouseService.ensure_zone(db, zone, sub_zone, max_floor, commit=False)
                if new_zone:
                    created_zones.append(new_zone)
            created = [InventoryService.create(db, data, commit=False) for data in unique.values()]
            db.commit()
        except Exception:
            db.rollback()
            logger.error("Inventory sync failed, previous inventory kept")
            raise

        logger.info(
            f"Inventory sync: {deleted} row(s) replaced by {len(created)}, "
            f"{len(created_zones)} zone(s) created, {len(warnings)} warning(s)"
        )
        return {
            "synced": len(created),
            "total": len(rows),
            "processed": len(unique),
            "created_structures": len(created_zones),
            "warnings": len(warnings),
            "location_warnings": len(location_warnings),
            "warning_details": warnings[:5],
            "location_warning_details": location_warnings[:5],
            "structure_details": [f"{z.zone_name} / {z.sub_zone_name}" for z in created_zones],
        }
