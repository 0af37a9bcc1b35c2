# backend/routes/products.py
import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from config import settings
from database import MAX_ID, get_db
from models.product import Product
from models.product_type import ProductType
from utils import store
from utils.audit import client_ip, write_log
import schemas.product as product_schemas
from schemas.common import Page

router = APIRouter(prefix="/products", tags=["Products"])
logger = logging.getLogger(__name__)


# ---- HELPERS ----
def _serialize(product: Product) -> product_schemas.ProductResponse:
    return product_schemas.ProductResponse.model_validate(product)

def _warn_if_loss(product: Product) -> None:
    if product.is_loss:
        logger.warning(
            "Product %s saved at a loss (cost %.2f, sale %.2f)",
            product.id, product.cost_price, product.sale_price,
        )


# =========================
# LISTA PRODUKTÓW
# =========================
@router.get(
    "",
    response_model=Union[Page[product_schemas.ProductResponse], List[product_schemas.ProductResponse]],
)
def list_products(
    search: Optional[str] = Query(None, description="Name, description or supplier"),
    product_type_id: Optional[int] = Query(None, alias="productTypeId", ge=1, le=MAX_ID),
    page: Optional[int] = Query(None, ge=1, le=MAX_ID // settings.MAX_PAGE_SIZE),
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    query = db.query(Product).options(joinedload(Product.product_type))

    if search:
        like = store.like_pattern(search)
        query = query.filter(or_(
            Product.name.ilike(like, escape="\\"),
            Product.description.ilike(like, escape="\\"),
            Product.supplier.ilike(like, escape="\\"),
        ))
    if product_type_id is not None:
        query = query.filter(Product.product_type_id == product_type_id)

    query = query.order_by(Product.id.asc())

    paging = store.resolve_page(page, limit, settings.DEFAULT_PAGE_SIZE)
    if paging is None:
        return [_serialize(p) for p in query.all()]

    items, pagination = store.paginate(query, *paging)
    return Page[product_schemas.ProductResponse](
        data=[_serialize(p) for p in items], pagination=pagination
    )


# =========================
# POJEDYNCZY PRODUKT
# =========================
@router.get("/{product_id}", response_model=product_schemas.ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return _serialize(store.find_by_id(db, Product, product_id))


# =========================
# DODAWANIE PRODUKTU
# =========================
@router.post("", response_model=product_schemas.ProductResponse, status_code=201)
def create_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    store.find_by_id(db, ProductType, payload.product_type_id)

    product = Product(**payload.model_dump())
    store.insert(db, product)
    db.commit()
    db.refresh(product)
    _warn_if_loss(product)

    write_log(
        db, action="PRODUCT_CREATE", resource="products", entity_id=product.id,
        ip=client_ip(request), meta={"name": product.name, "quantity": product.quantity},
    )
    return _serialize(product)


# =========================
# CZĘŚCIOWA EDYCJA PRODUKTU (PATCH)
# =========================
@router.patch("/{product_id}", response_model=product_schemas.ProductResponse)
def update_product(
    product_id: int,
    payload: product_schemas.ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    changes = payload.model_dump(exclude_unset=True, exclude={"quantity"})
    # Required columns cannot be cleared
    for key in ("name", "cost_price", "sale_price", "product_type_id"):
        if key in changes and changes[key] is None:
            changes.pop(key)

    if "product_type_id" in changes:
        store.find_by_id(db, ProductType, changes["product_type_id"])

    product = store.update(db, Product, product_id, changes)
    db.commit()
    db.refresh(product)
    _warn_if_loss(product)

    write_log(
        db, action="PRODUCT_UPDATE", resource="products", entity_id=product.id,
        ip=client_ip(request), meta={"fields": sorted(changes), "warnings": product.warnings},
    )
    return _serialize(product)


# =========================
# USUWANIE
# =========================
@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: int, request: Request, db: Session = Depends(get_db)):
    product = store.find_by_id(db, Product, product_id)
    pid, pname, ledger_size = product.id, product.name, len(product.movements)

    # Movements are removed together with the product
    store.delete(db, Product, product_id)
    db.commit()
    logger.info("Deleted product %s with %s stock movements", pid, ledger_size)

    write_log(
        db, action="PRODUCT_DELETE", resource="products", entity_id=pid,
        ip=client_ip(request), meta={"name": pname, "movements": ledger_size},
    )
    return Response(status_code=204)
