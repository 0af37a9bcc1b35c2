# backend/routes/dashboard.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.product import MAX_QUANTITY
from utils import dashboard
from schemas.dashboard import DashboardStats, StockTrendPoint, TypeDistribution
from schemas.stock import StockMovementResponse

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"]
)

# === Endpoint 1: Dashboard Summary ===

@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    threshold: Optional[int] = Query(None, ge=0, le=MAX_QUANTITY, description="Low stock threshold (<=)"),
    db: Session = Depends(get_db),
):
    return DashboardStats(**dashboard.dashboard_stats(db, threshold))

# === Endpoint 2: Chart Data ===

@router.get("/stock-trend", response_model=List[StockTrendPoint])
def get_stock_trend(
    days: int = Query(settings.STOCK_TREND_DAYS, ge=1, le=90),
    db: Session = Depends(get_db),
):
    return [StockTrendPoint(**point) for point in dashboard.StockTrend(db, days)]

# === Endpoint 3: Latest movements ===

@router.get("/recent-movements", response_model=List[StockMovementResponse])
def get_recent_movements(
    limit: int = Query(settings.RECENT_MOVEMENTS_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    return [StockMovementResponse.model_validate(m) for m in dashboard.recent_movements(db, limit)]

# === Endpoint 4: Products per type ===

@router.get("/product-type-distribution", response_model=List[TypeDistribution])
def get_product_type_distribution(db: Session = Depends(get_db)):
    return [TypeDistribution(**row) for row in dashboard.type_distribution(db)]
