# backend/schemas/product_type.py
from typing import Optional
from pydantic import Field, field_validator

from schemas.common import ORMBase, blank_to_error


class ProductTypeCreate(ORMBase):
    name: str = Field(..., max_length=100)
    description: Optional[str] = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return blank_to_error(v, "Name")


# Schema for PATCH requests - all fields optional
class ProductTypeUpdate(ORMBase):
    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return blank_to_error(v, "Name")


class ProductTypeResponse(ORMBase):
    id: int
    name: str
    description: Optional[str] = None
