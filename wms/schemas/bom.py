"""
BOM Guide Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

class BomGuideCreate(BaseModel):
    guide_name: str = Field(min_length=1)
    item_code: str = Field(min_length=1)
    required_quantity: int = Field(gt=0)

class BomGuideResponse(BaseModel):
    id: int
    guide_name: str
    item_code: str
    required_quantity: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class BomCheckResult(BaseModel):
    code: str
    name: str
    needed: int
    current: int
    status: Literal["ok", "shortage"]
