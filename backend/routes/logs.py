# backend/routes/logs.py
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config import settings
from database import MAX_ID, get_db
from models.log import Log
from schemas.common import Page
from schemas.log import LogResponse
from utils import ledger, store

router = APIRouter(prefix="/logs", tags=["Logs"])


@router.get("", response_model=Page[LogResponse])
def get_logs(
    action: Optional[str] = Query(None, description="Filter by action, e.g. PRODUCT_CREATE"),
    resource: Optional[str] = Query(None, description="Filter by resource"),
    entity_id: Optional[int] = Query(None, alias="entityId", ge=1, le=MAX_ID),
    status: Optional[str] = Query(None, description="SUCCESS or FAIL"),
    start_date: Optional[str] = Query(None, alias="startDate", description="YYYY-MM-DD, inclusive"),
    end_date: Optional[str] = Query(None, alias="endDate", description="YYYY-MM-DD, inclusive"),
    page: int = Query(1, ge=1, le=MAX_ID // settings.MAX_PAGE_SIZE),
    limit: int = Query(20, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    """Audit trail, newest first."""
    start, end = ledger.parse_period(start_date, end_date)
    query = db.query(Log)

    if action:
        query = query.filter(Log.action.ilike(store.like_pattern(action), escape="\\"))
    if resource:
        query = query.filter(Log.resource == resource)
    if entity_id is not None:
        query = query.filter(Log.entity_id == entity_id)
    if status:
        query = query.filter(Log.status == status.upper())
    if start:
        query = query.filter(Log.created_at >= ledger.day_start(start))
    if end:
        query = query.filter(Log.created_at < ledger.day_start(end + timedelta(days=1)))

    query = query.order_by(Log.created_at.desc(), Log.id.desc())
    items, pagination = store.paginate(query, page, limit)
    return Page[LogResponse](
        data=[LogResponse.model_validate(entry) for entry in items],
        pagination=pagination,
    )
