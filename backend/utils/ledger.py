# backend/utils/ledger.py
"""
Stock ledger: posts, edits and removes stock movements while keeping
Product.quantity equal to its initial stock plus the signed sum of its movements.

Negative stock is rejected: any change that would leave a product below zero
raises InsufficientStock and leaves both the ledger and the quantity untouched.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload

from models.product import MAX_QUANTITY, Product
from models.stock import StockMovement, ENTRY, EXIT
from utils import store
from utils.errors import InsufficientStock, ValidationFailed

logger = logging.getLogger(__name__)

# Movement columns that may be cleared with an explicit null
_NULLABLE_FIELDS = {"notes"}


def signed_delta(movement_type: str, quantity: int) -> int:
    return quantity if movement_type == ENTRY else -quantity


def shift_quantity(db: Session, product_id: int, delta: int) -> Product:
    """
    Add ``delta`` to the product quantity as one guarded row update
    (quantity = quantity + delta), so concurrent postings cannot lose updates.
    """
    product = store.find_by_id(db, Product, product_id)
    if delta == 0:
        return product

    stmt = (
        update(Product)
        .where(
            Product.id == product_id,
            Product.quantity + delta >= 0,
            Product.quantity + delta <= MAX_QUANTITY,
        )
        .values(quantity=Product.quantity + delta)
        .execution_options(synchronize_session=False)
    )
    result = db.execute(stmt)
    db.expire(product, ["quantity"])

    if result.rowcount == 0:
        logger.warning(
            "Rejected stock change of %s for product %s (available %s)",
            delta, product_id, product.quantity,
        )
        if delta > 0:
            raise ValidationFailed.single(
                "quantity",
                f"Stock of product {product_id} cannot exceed {MAX_QUANTITY} units "
                f"(available {product.quantity}, adding {delta})",
            )
        raise InsufficientStock(product_id, available=product.quantity, requested=-delta)
    return product


def apply_movement(db: Session, movement: StockMovement) -> Product:
    return shift_quantity(db, movement.product_id, movement.delta)


def reverse_movement(db: Session, movement: StockMovement) -> Product:
    return shift_quantity(db, movement.product_id, -movement.delta)


def post_movement(db: Session, data: Dict[str, Any]) -> StockMovement:
    """Create a movement and apply it to its product."""
    fields = dict(data)
    if fields.get("created_at") is None:
        fields.pop("created_at", None)

    movement = StockMovement(**fields)
    product = apply_movement(db, movement)
    store.insert(db, movement)

    logger.info(
        "Posted %s of %s units for product %s (quantity now %s)",
        movement.type, movement.quantity, product.id, product.quantity,
    )
    return movement


def update_movement(db: Session, movement: StockMovement, changes: Dict[str, Any]) -> StockMovement:
    """
    Edit a posted movement. The product link is immutable; type and quantity
    changes reverse the old effect and apply the new one.
    """
    changes = {
        key: value for key, value in changes.items()
        if value is not None or key in _NULLABLE_FIELDS
    }

    new_product_id = changes.pop("product_id", None)
    if new_product_id is not None and new_product_id != movement.product_id:
        raise ValidationFailed.single(
            "productId", "The product of a stock movement cannot be changed"
        )

    old_delta = movement.delta
    new_delta = signed_delta(
        changes.get("type", movement.type),
        changes.get("quantity", movement.quantity),
    )
    # reverse(old) followed by apply(new), folded into one row update
    shift_quantity(db, movement.product_id, new_delta - old_delta)

    for key, value in changes.items():
        setattr(movement, key, value)
    db.flush()

    if new_delta != old_delta:
        logger.info(
            "Re-posted movement %s for product %s: %+d -> %+d",
            movement.id, movement.product_id, old_delta, new_delta,
        )
    return movement


def delete_movement(db: Session, movement: StockMovement) -> None:
    reverse_movement(db, movement)
    logger.info(
        "Reversed movement %s (%+d) for product %s",
        movement.id, movement.delta, movement.product_id,
    )
    db.delete(movement)
    db.flush()


# -----------------------------
# Queries and summaries
# -----------------------------
def day_start(day: date) -> datetime:
    return datetime.combine(day, time.min)


def _parse_day(value: Optional[str], field: str) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        raise ValidationFailed.single(field, f"Bad date format: {value}")


def parse_period(start: Optional[str], end: Optional[str]) -> Tuple[Optional[date], Optional[date]]:
    """Parse the startDate/endDate query pair; the end may not precede the start."""
    start_date = _parse_day(start, "startDate")
    end_date = _parse_day(end, "endDate")
    if start_date and end_date and start_date > end_date:
        raise ValidationFailed.single("endDate", "End date cannot be earlier than start date")
    return start_date, end_date


def filter_movements(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    product_id: Optional[int] = None,
    movement_type: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[StockMovement]:
    """Movements newest first; both date bounds are inclusive calendar days."""
    query = db.query(StockMovement).options(
        joinedload(StockMovement.product).joinedload(Product.product_type)
    )
    if start_date:
        query = query.filter(StockMovement.created_at >= day_start(start_date))
    if end_date:
        query = query.filter(StockMovement.created_at < day_start(end_date + timedelta(days=1)))
    if product_id is not None:
        query = query.filter(StockMovement.product_id == product_id)
    if movement_type:
        query = query.filter(StockMovement.type == movement_type)

    query = query.order_by(StockMovement.created_at.desc(), StockMovement.id.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def summarize(movements: Iterable[StockMovement]) -> Dict[str, Any]:
    """
    Count and value a set of movements. Entries are valued at the product's
    cost price and exits at its sale price, both read at summarization time.
    """
    entries = exits = 0
    entries_quantity = exits_quantity = 0
    entries_value = exits_value = 0.0

    for m in movements:
        if m.type == ENTRY:
            entries += 1
            entries_quantity += m.quantity
            entries_value += m.quantity * m.product.cost_price
        elif m.type == EXIT:
            exits += 1
            exits_quantity += m.quantity
            exits_value += m.quantity * m.product.sale_price

    return {
        "entries": entries,
        "exits": exits,
        "balance": entries - exits,
        "entries_quantity": entries_quantity,
        "exits_quantity": exits_quantity,
        "entries_value": round(entries_value, 2),
        "exits_value": round(exits_value, 2),
    }
