"""
Transaction & Exchange Queue Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

TransactionType = Literal["inbound", "outbound", "move", "adjustment"]

class TransactionCreate(BaseModel):
    type: TransactionType
    item_code: str = Field(min_length=1)
    item_name: str
    quantity: int = Field(gt=0)
    from_location: Optional[str] = None
    to_location: Optional[str] = None
    reason: Optional[str] = None
    memo: Optional[str] = None
    user_id: Optional[int] = None

class TransactionResponse(BaseModel):
    id: int
    type: str
    item_code: str
    item_name: str
    quantity: int
    from_location: Optional[str]
    to_location: Optional[str]
    reason: Optional[str]
    memo: Optional[str]
    user_id: Optional[int]
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ExchangeQueueCreate(BaseModel):
    item_code: str
    item_name: str
    quantity: int = Field(gt=0)
    outbound_date: datetime

class ExchangeQueueResponse(BaseModel):
    id: int
    item_code: str
    item_name: str
    quantity: int
    outbound_date: datetime
    processed: bool
    source_locations: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
