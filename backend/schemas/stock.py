# backend/schemas/stock.py
from datetime import datetime, timedelta
from typing import List, Literal, Optional
from pydantic import Field, field_validator

from models.product import MAX_QUANTITY
from database import MAX_ID
from schemas.common import ORMBase

# Define allowed types for stock movements
StockMovementType = Literal["entry", "exit"]


def _local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Stored timestamps are naive local time."""
    if value is not None and value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def _check_movement_date(value: Optional[datetime]) -> Optional[datetime]:
    value = _local_naive(value)
    if value is None:
        return value
    now = datetime.now()
    if value > now:
        raise ValueError("Movement date cannot be in the future")
    if value < now - timedelta(days=365):
        raise ValueError("Movement date cannot be more than one year old")
    return value


# Schema for posting a new stock movement
class StockMovementCreate(ORMBase):
    type: StockMovementType
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)
    product_id: int = Field(..., ge=1, le=MAX_ID)
    created_at: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("created_at")
    @classmethod
    def created_at_in_range(cls, v):
        return _check_movement_date(v)


# Schema for PATCH requests; productId may only repeat the current product
class StockMovementUpdate(ORMBase):
    type: Optional[StockMovementType] = None
    quantity: Optional[int] = Field(None, gt=0, le=MAX_QUANTITY)
    product_id: Optional[int] = Field(None, ge=1, le=MAX_ID)
    created_at: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("created_at")
    @classmethod
    def created_at_in_range(cls, v):
        return _check_movement_date(v)


class MovementProductType(ORMBase):
    id: int
    name: str


class MovementProduct(ORMBase):
    id: int
    name: str
    cost_price: float
    sale_price: float
    product_type: Optional[MovementProductType] = None


class StockMovementResponse(ORMBase):
    id: int
    type: StockMovementType
    quantity: int
    product_id: int
    product: Optional[MovementProduct] = None
    created_at: datetime
    notes: Optional[str] = None


class MovementSummary(ORMBase):
    entries: int
    exits: int
    balance: int
    entries_quantity: int
    exits_quantity: int
    entries_value: float
    exits_value: float


# Response of the movement history listing
class StockMovementList(ORMBase):
    movements: List[StockMovementResponse]
    summary: MovementSummary
