"""
Warehouse Layout Schemas
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

class WarehouseZoneCreate(BaseModel):
    zone_name: str = Field(min_length=1)
    sub_zone_name: str = Field(min_length=1)
    floors: List[int]

class WarehouseZoneResponse(BaseModel):
    id: int
    zone_name: str
    sub_zone_name: str
    floors: List[int]
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class LocationInfo(BaseModel):
    zone: str
    sub_zone: str
    floor: int
