# backend/routes/product_types.py
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy import or_
from sqlalchemy.orm import Session

from config import settings
from database import MAX_ID, get_db
from models.product import Product
from models.product_type import ProductType
from utils import store
from utils.audit import client_ip, write_log
from utils.errors import ValidationFailed
import schemas.product_type as type_schemas
from schemas.common import Page

router = APIRouter(prefix="/product-types", tags=["Product types"])


@router.get(
    "",
    response_model=Union[Page[type_schemas.ProductTypeResponse], List[type_schemas.ProductTypeResponse]],
)
def list_product_types(
    search: Optional[str] = Query(None, description="Name or description"),
    page: Optional[int] = Query(None, ge=1, le=MAX_ID // settings.MAX_PAGE_SIZE),
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    query = db.query(ProductType)
    if search:
        like = store.like_pattern(search)
        query = query.filter(or_(
            ProductType.name.ilike(like, escape="\\"),
            ProductType.description.ilike(like, escape="\\"),
        ))
    query = query.order_by(ProductType.id.asc())

    paging = store.resolve_page(page, limit, settings.DEFAULT_PAGE_SIZE)
    if paging is None:
        return [type_schemas.ProductTypeResponse.model_validate(t) for t in query.all()]

    items, pagination = store.paginate(query, *paging)
    return Page[type_schemas.ProductTypeResponse](
        data=[type_schemas.ProductTypeResponse.model_validate(t) for t in items],
        pagination=pagination,
    )


@router.get("/{type_id}", response_model=type_schemas.ProductTypeResponse)
def get_product_type(type_id: int, db: Session = Depends(get_db)):
    return store.find_by_id(db, ProductType, type_id)


@router.post("", response_model=type_schemas.ProductTypeResponse, status_code=201)
def create_product_type(
    payload: type_schemas.ProductTypeCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    product_type = ProductType(**payload.model_dump())
    store.insert(db, product_type)
    db.commit()
    db.refresh(product_type)

    write_log(
        db, action="PRODUCT_TYPE_CREATE", resource="product_types", entity_id=product_type.id,
        ip=client_ip(request), meta={"name": product_type.name},
    )
    return product_type


@router.patch("/{type_id}", response_model=type_schemas.ProductTypeResponse)
def update_product_type(
    type_id: int,
    payload: type_schemas.ProductTypeUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("name", "") is None:
        changes.pop("name")

    product_type = store.update(db, ProductType, type_id, changes)
    db.commit()
    db.refresh(product_type)

    write_log(
        db, action="PRODUCT_TYPE_UPDATE", resource="product_types", entity_id=product_type.id,
        ip=client_ip(request), meta={"fields": sorted(changes)},
    )
    return product_type


@router.delete("/{type_id}", status_code=204)
def delete_product_type(type_id: int, request: Request, db: Session = Depends(get_db)):
    product_type = store.find_by_id(db, ProductType, type_id)
    name = product_type.name

    in_use = store.list_entities(db, Product, Product.product_type_id == type_id)
    if in_use:
        raise ValidationFailed.single(
            "id", f"Product type '{name}' is used by {len(in_use)} product(s) and cannot be deleted"
        )

    store.delete(db, ProductType, type_id)
    db.commit()

    write_log(
        db, action="PRODUCT_TYPE_DELETE", resource="product_types", entity_id=type_id,
        ip=client_ip(request), meta={"name": name},
    )
    return Response(status_code=204)
