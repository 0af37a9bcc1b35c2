# backend/utils/dashboard.py
"""Read-only views over products, product types and the stock ledger."""
from collections import defaultdict
from datetime import date, timedelta
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from config import settings
from models.product import Product
from models.product_type import ProductType
from models.stock import StockMovement, ENTRY
from utils.ledger import filter_movements, summarize


def total_products(db: Session) -> int:
    return db.query(func.count(Product.id)).scalar() or 0


def total_product_types(db: Session) -> int:
    return db.query(func.count(ProductType.id)).scalar() or 0


def low_stock_count(db: Session, threshold: Optional[int] = None) -> int:
    if threshold is None:
        threshold = settings.LOW_STOCK_THRESHOLD
    return db.query(func.count(Product.id)).filter(Product.quantity <= threshold).scalar() or 0


def today_summary(db: Session, today: Optional[date] = None) -> Dict[str, Any]:
    """Purchases (entries) and sales (exits) of the current local calendar day."""
    today = today or date.today()
    summary = summarize(filter_movements(db, start_date=today, end_date=today))

    purchases_value = summary["entries_value"]
    sales_value = summary["exits_value"]
    profit = round(sales_value - purchases_value, 2)
    margin = round(profit / purchases_value * 100, 2) if purchases_value else 0.0

    return {
        "purchases": summary["entries_quantity"],
        "sales": summary["exits_quantity"],
        "balance": summary["entries_quantity"] - summary["exits_quantity"],
        "purchases_value": purchases_value,
        "sales_value": sales_value,
        "profit": profit,
        "profit_margin": margin,
    }


def dashboard_stats(db: Session, threshold: Optional[int] = None, today: Optional[date] = None) -> Dict[str, Any]:
    day = today_summary(db, today)
    return {
        "total_products": total_products(db),
        "total_product_types": total_product_types(db),
        "low_stock_products": low_stock_count(db, threshold),
        "today_purchases": day["purchases"],
        "today_sales": day["sales"],
        "today_balance": day["balance"],
        "today_purchases_value": day["purchases_value"],
        "today_sales_value": day["sales_value"],
        "today_profit": day["profit"],
        "today_profit_margin": day["profit_margin"],
    }


class StockTrend:
    """
    Per-day entry/exit unit totals for the trailing ``days`` days, oldest first.

    Iterating queries the ledger again, so every pass reflects the current
    state and the object can be iterated any number of times.
    """

    def __init__(self, db: Session, days: int = 7, today: Optional[date] = None):
        self.db = db
        self.days = days
        self.today = today

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        today = self.today or date.today()
        start = today - timedelta(days=self.days - 1)

        totals = defaultdict(lambda: [0, 0])
        for m in filter_movements(self.db, start_date=start, end_date=today):
            slot = 0 if m.type == ENTRY else 1
            totals[m.created_at.date()][slot] += m.quantity

        for offset in range(self.days):
            day = start + timedelta(days=offset)
            entries, exits = totals.get(day, (0, 0))
            yield {
                "date": day.strftime("%d/%m"),
                "entries": entries,
                "exits": exits,
                "balance": entries - exits,
            }


def type_distribution(db: Session) -> List[Dict[str, Any]]:
    """Share of products per product type; empty when there are no products."""
    total = total_products(db)
    if total == 0:
        return []

    count = func.count(Product.id)
    rows = (
        db.query(ProductType.id, ProductType.name, count.label("count"))
        .join(Product, Product.product_type_id == ProductType.id)
        .group_by(ProductType.id, ProductType.name)
        .order_by(count.desc(), ProductType.name.asc())
        .all()
    )
    return [
        {
            "type_id": r.id,
            "name": r.name,
            "count": r.count,
            "percentage": round(r.count / total * 100, 2),
        }
        for r in rows
    ]


def recent_movements(db: Session, limit: Optional[int] = None) -> List[StockMovement]:
    return filter_movements(db, limit=limit or settings.RECENT_MOVEMENTS_LIMIT)
