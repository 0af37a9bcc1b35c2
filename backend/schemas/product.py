# backend/schemas/product.py
from datetime import date
from typing import List, Optional
from pydantic import Field, field_validator

from models.product import MAX_QUANTITY
from database import MAX_ID
from schemas.common import ORMBase, blank_to_error
from schemas.product_type import ProductTypeResponse


def _not_expired(value: Optional[date]) -> Optional[date]:
    if value is not None and value < date.today():
        raise ValueError("Expiration date cannot be earlier than today")
    return value


# Schema for creating a new product; quantity is the initial stock
class ProductCreate(ORMBase):
    name: str = Field(..., max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    cost_price: float = Field(..., gt=0)
    sale_price: float = Field(..., gt=0)
    quantity: int = Field(0, ge=0, le=MAX_QUANTITY)
    supplier: Optional[str] = Field(None, max_length=100)
    expiration_date: Optional[date] = None
    product_type_id: int = Field(..., ge=1, le=MAX_ID)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return blank_to_error(v, "Name")

    @field_validator("expiration_date")
    @classmethod
    def expiration_not_past(cls, v):
        return _not_expired(v)


class ProductUpdate(ORMBase):
    """Schema for PATCH requests - all fields optional, quantity is ledger-only."""
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    cost_price: Optional[float] = Field(None, gt=0)
    sale_price: Optional[float] = Field(None, gt=0)
    quantity: Optional[int] = None
    supplier: Optional[str] = Field(None, max_length=100)
    expiration_date: Optional[date] = None
    product_type_id: Optional[int] = Field(None, ge=1, le=MAX_ID)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return blank_to_error(v, "Name")

    @field_validator("expiration_date")
    @classmethod
    def expiration_not_past(cls, v):
        return _not_expired(v)

    @field_validator("quantity")
    @classmethod
    def quantity_read_only(cls, v):
        if v is not None:
            raise ValueError("Quantity can only be changed through stock movements")
        return v


# Full product representation, including derived profit figures and warnings
class ProductResponse(ORMBase):
    id: int
    name: str
    description: Optional[str] = None
    cost_price: float
    sale_price: float
    quantity: int
    supplier: Optional[str] = None
    expiration_date: Optional[date] = None
    product_type_id: int
    product_type: Optional[ProductTypeResponse] = None
    profit_value: float
    profit_margin: float
    warnings: List[str] = []
