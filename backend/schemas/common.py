# backend/schemas/common.py
from typing import Generic, List, TypeVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


# snake_case in Python, camelCase on the wire; both accepted on input
class ORMBase(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def blank_to_error(value, field_label: str):
    """Reject strings that are empty once stripped."""
    if value is not None and not value.strip():
        raise ValueError(f"{field_label} is required")
    return value.strip() if value is not None else value


class Pagination(ORMBase):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


# Envelope returned by list endpoints when page or limit is requested
class Page(ORMBase, Generic[T]):
    data: List[T]
    pagination: Pagination
