# backend/routes/stock.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from database import MAX_ID, get_db
from models.stock import StockMovement
from utils import ledger, store
from utils.audit import client_ip, write_log
from utils.pdf import build_movements_report
import schemas.stock as stock_schemas

router = APIRouter(prefix="/stock-movements", tags=["Stock"])


def _serialize(movement: StockMovement) -> stock_schemas.StockMovementResponse:
    return stock_schemas.StockMovementResponse.model_validate(movement)


@router.get("", response_model=stock_schemas.StockMovementList)
def list_movements(
    start_date: Optional[str] = Query(None, alias="startDate", description="YYYY-MM-DD, inclusive"),
    end_date: Optional[str] = Query(None, alias="endDate", description="YYYY-MM-DD, inclusive"),
    product_id: Optional[int] = Query(None, alias="productId", ge=1, le=MAX_ID),
    type: Optional[stock_schemas.StockMovementType] = Query(None),
    db: Session = Depends(get_db),
):
    start, end = ledger.parse_period(start_date, end_date)
    movements = ledger.filter_movements(db, start, end, product_id=product_id, movement_type=type)

    return stock_schemas.StockMovementList(
        movements=[_serialize(m) for m in movements],
        summary=ledger.summarize(movements),
    )


@router.get("/report")
def movements_report(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    """PDF listing of the movements in the period, with their summary."""
    start, end = ledger.parse_period(start_date, end_date)
    movements = ledger.filter_movements(db, start, end)
    content = build_movements_report(movements, ledger.summarize(movements), start, end)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="stock-movements.pdf"'},
    )


@router.get("/{movement_id}", response_model=stock_schemas.StockMovementResponse)
def get_movement(movement_id: int, db: Session = Depends(get_db)):
    return _serialize(store.find_by_id(db, StockMovement, movement_id))


@router.post("", response_model=stock_schemas.StockMovementResponse, status_code=201)
def create_movement(
    payload: stock_schemas.StockMovementCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    movement = ledger.post_movement(db, payload.model_dump())
    db.commit()
    db.refresh(movement)

    write_log(
        db, action="STOCK_MOVEMENT_CREATE", resource="stock_movements", entity_id=movement.id,
        ip=client_ip(request),
        meta={"product_id": movement.product_id, "type": movement.type, "quantity": movement.quantity},
    )
    return _serialize(movement)


@router.patch("/{movement_id}", response_model=stock_schemas.StockMovementResponse)
def update_movement(
    movement_id: int,
    payload: stock_schemas.StockMovementUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    movement = store.find_by_id(db, StockMovement, movement_id)
    changes = payload.model_dump(exclude_unset=True)

    ledger.update_movement(db, movement, changes)
    db.commit()
    db.refresh(movement)

    write_log(
        db, action="STOCK_MOVEMENT_UPDATE", resource="stock_movements", entity_id=movement.id,
        ip=client_ip(request), meta={"fields": sorted(changes)},
    )
    return _serialize(movement)


@router.delete("/{movement_id}", status_code=204)
def delete_movement(movement_id: int, request: Request, db: Session = Depends(get_db)):
    movement = store.find_by_id(db, StockMovement, movement_id)
    meta = {"product_id": movement.product_id, "type": movement.type, "quantity": movement.quantity}

    ledger.delete_movement(db, movement)
    db.commit()

    write_log(
        db, action="STOCK_MOVEMENT_DELETE", resource="stock_movements", entity_id=movement_id,
        ip=client_ip(request), meta=meta,
    )
    return Response(status_code=204)
