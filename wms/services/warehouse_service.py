"""
Warehouse Service - zone layout and location codes
"""
from sqlalchemy.orm import Session
from typing import List, Optional, Dict, Any
import logging
import re

from wms.models import WarehouseZone
from wms.schemas.warehouse import WarehouseZoneCreate

logger = logging.getLogger(__name__)

# "A-1-01" -> zone A, sub-zone 1, floor 1
LOCATION_PATTERN = re.compile(r"^([A-Z]+)-(\d+)-(\d+)$")

DEFAULT_ZONES = ["A", "B", "C", "D"]
DEFAULT_SUB_ZONES = 5
DEFAULT_FLOORS = [1, 2, 3, 4, 5]


def parse_location(location: Optional[str]) -> Optional[Dict[str, Any]]:
    if not location:
        return None
    match = LOCATION_PATTERN.match(location.strip())
    if not match:
        return None
    return {"zone": match.group(1), "sub_zone": match.group(2), "floor": int(match.group(3))}


def validate_location(location: Optional[str]) -> bool:
    return parse_location(location) is not None


def zone_names(zone: str, sub_zone: str) -> tuple:
    """Layout names for a parsed location: ("구역-A", "A-1")"""
    return f"구역-{zone}", f"{zone}-{sub_zone}"


def generate_default_layout() -> List[Dict[str, Any]]:
    layout = []
    for zone in DEFAULT_ZONES:
        for sub_zone in range(1, DEFAULT_SUB_ZONES + 1):
            zone_name, sub_zone_name = zone_names(zone, str(sub_zone))
            layout.append({"zone_name": zone_name, "sub_zone_name": sub_zone_name, "floors": list(DEFAULT_FLOORS)})
    return layout


class WarehouseService:

    @staticmethod
    def list_zones(db: Session) -> List[WarehouseZone]:
        return db.query(WarehouseZone).order_by(WarehouseZone.zone_name, WarehouseZone.sub_zone_name).all()

    @staticmethod
    def get_zone(db: Session, zone_id: int) -> Optional[WarehouseZone]:
        return db.query(WarehouseZone).filter(WarehouseZone.id == zone_id).first()

    @staticmethod
    def create_zone(db: Session, data: WarehouseZoneCreate, commit: bool = True) -> WarehouseZone:
        zone = WarehouseZone(
            zone_name=data.zone_name,
            sub_zone_name=data.sub_zone_name,
            floors=sorted(set(data.floors))
        )
        db.add(zone)
        if commit:
            db.commit()
            db.refresh(zone)
        else:
            db.flush()
        return zone

    @staticmethod
    def update_zone(db: Session, zone_id: int, data: WarehouseZoneCreate) -> Optional[WarehouseZone]:
        zone = WarehouseService.get_zone(db, zone_id)
        if not zone:
            return None
        zone.zone_name = data.zone_name
        zone.sub_zone_name = data.sub_zone_name
        zone.floors = sorted(set(data.floors))
        db.commit()
        db.refresh(zone)
        return zone

    @staticmethod
    def delete_zone(db: Session, zone_id: int) -> bool:
        zone = WarehouseService.get_zone(db, zone_id)
        if not zone:
            return False
        db.delete(zone)
        db.commit()
        return True

    @staticmethod
    def seed_default_layout(db: Session) -> int:
        """Create the default A-D layout when no zone exists yet"""
        if db.query(WarehouseZone).count() > 0:
            return 0
        layout = generate_default_layout()
        for entry in layout:
            db.add(WarehouseZone(**entry))
        db.commit()
        logger.info(f"Seeded default warehouse layout ({len(layout)} zones)")
        return len(layout)

    @staticmethod
    def ensure_zone(db: Session, zone: str, sub_zone: str, max_floor: int, commit: bool = True) -> Optional[WarehouseZone]:
        """Create the zone for a parsed location when missing; returns the new zone or None"""
        zone_name, sub_zone_name = zone_names(zone, sub_zone)
        exists = db.query(WarehouseZone).filter(
            WarehouseZone.zone_name == zone_name,
            WarehouseZone.sub_zone_name == sub_zone_name
        ).first()
        if exists:
            return None
        created = WarehouseZone(
            zone_name=zone_name,
            sub_zone_name=sub_zone_name,
            floors=list(range(1, max_floor + 1))
        )
        db.add(created)
        if commit:
            db.commit()
            db.refresh(created)
        else:
            db.flush()
        logger.info(f"Created warehouse zone {zone_name} / {sub_zone_name} (floors 1-{max_floor})")
        return created
