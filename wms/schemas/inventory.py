"""
Inventory Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class InventoryItemCreate(BaseModel):
    code: str = Field(min_length=1)
    name: str
    category: str = "기타"
    manufacturer: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    min_stock: int = Field(default=0, ge=0)
    unit: str = "ea"
    location: Optional[str] = None
    box_size: int = Field(default=1, ge=1)

class InventoryItemUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    manufacturer: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    min_stock: Optional[int] = Field(default=None, ge=0)
    unit: Optional[str] = None
    location: Optional[str] = None
    box_size: Optional[int] = Field(default=None, ge=1)

class InventoryItemResponse(BaseModel):
    id: int
    code: str
    name: str
    category: str
    manufacturer: Optional[str]
    stock: int
    min_stock: int
    unit: str
    location: Optional[str]
    box_size: Optional[int]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class StockAdjustRequest(BaseModel):
    new_stock: int = Field(ge=0)
    reason: str = Field(min_length=1)

class StockAdjustResult(BaseModel):
    message: str
    old_stock: int
    new_stock: int
    difference: int

class InventoryAlert(BaseModel):
    id: str
    type: str  # low_stock, out_of_stock, overstock
    item_code: str
    item_name: str
    location: Optional[str]
    current_stock: int
    min_stock: int
    max_stock: Optional[int] = None
    severity: str  # low, medium, high, critical
