# backend/utils/store.py
"""Keyed collections over the ORM tables: insert, lookup, partial update, delete, scan."""
import math
from typing import Any, Dict, List, Optional, Tuple, Type

from sqlalchemy.orm import Query, Session

from database import Base, MAX_ID
from utils.errors import NotFoundError

# Human readable names used in NotFound messages
_RESOURCE_NAMES = {
    "products": "Product",
    "product_types": "Product type",
    "stock_movements": "Stock movement",
}


def _resource(model: Type[Base]) -> str:
    return _RESOURCE_NAMES.get(model.__tablename__, model.__name__)


def insert(db: Session, entity: Base) -> int:
    db.add(entity)
    db.flush()
    return entity.id


def find_by_id(db: Session, model: Type[Base], entity_id: int):
    # Out-of-range keys cannot be bound as INTEGER and match nothing anyway
    if not 0 < entity_id <= MAX_ID:
        raise NotFoundError(_resource(model), entity_id)
    entity = db.get(model, entity_id)
    if entity is None:
        raise NotFoundError(_resource(model), entity_id)
    return entity


def update(db: Session, model: Type[Base], entity_id: int, changes: Dict[str, Any]):
    entity = find_by_id(db, model, entity_id)
    for key, value in changes.items():
        setattr(entity, key, value)
    db.flush()
    return entity


def delete(db: Session, model: Type[Base], entity_id: int) -> None:
    entity = find_by_id(db, model, entity_id)
    db.delete(entity)
    db.flush()


def list_entities(db: Session, model: Type[Base], *criteria, order_by=None) -> List[Any]:
    query = db.query(model)
    if criteria:
        query = query.filter(*criteria)
    query = query.order_by(order_by if order_by is not None else model.id)
    return query.all()


def paginate(query: Query, page: int, limit: int) -> Tuple[List[Any], Dict[str, Any]]:
    """Slice a query and describe the slice with the pagination envelope fields."""
    total = query.count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    total_pages = math.ceil(total / limit) if limit else 0
    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }


def resolve_page(page: Optional[int], limit: Optional[int], default_limit: int) -> Optional[Tuple[int, int]]:
    """Plain list when neither page nor limit is requested, otherwise (page, limit)."""
    if page is None and limit is None:
        return None
    return page or 1, limit or default_limit


def like_pattern(term: str) -> str:
    """Substring pattern for ilike(); % and _ typed by the user match literally."""
    escaped = term.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
