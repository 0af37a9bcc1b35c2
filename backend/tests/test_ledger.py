import random
from datetime import datetime, timedelta

import pytest

from models.product import MAX_QUANTITY, Product
from models.product_type import ProductType
from models.stock import StockMovement, ENTRY, EXIT
from utils import ledger, store
from utils.errors import InsufficientStock, NotFoundError, ValidationFailed


@pytest.fixture()
def product(db):
    product_type = ProductType(name="Periféricos")
    store.insert(db, product_type)
    item = Product(
        name="Keyboard", cost_price=40.0, sale_price=90.0, quantity=20,
        product_type_id=product_type.id,
    )
    store.insert(db, item)
    db.commit()
    return item


def test_signed_delta():
    assert ledger.signed_delta(ENTRY, 4) == 4
    assert ledger.signed_delta(EXIT, 4) == -4


def test_quantity_follows_the_ledger(db, product):
    rng = random.Random(7)
    initial = product.quantity
    entries = exits = 0

    for _ in range(40):
        kind = rng.choice([ENTRY, EXIT])
        qty = rng.randint(1, 15)
        try:
            ledger.post_movement(db, {"product_id": product.id, "type": kind, "quantity": qty})
        except InsufficientStock:
            continue
        if kind == ENTRY:
            entries += qty
        else:
            exits += qty
        db.commit()

    db.refresh(product)
    assert product.quantity == initial + entries - exits
    assert product.quantity >= 0
    assert db.query(StockMovement).count() == len(product.movements)


def test_rejected_exit_leaves_no_trace(db, product):
    with pytest.raises(InsufficientStock) as exc:
        ledger.post_movement(db, {"product_id": product.id, "type": EXIT, "quantity": 21})
    db.rollback()

    assert exc.value.available == 20
    assert exc.value.requested == 21
    db.refresh(product)
    assert product.quantity == 20
    assert db.query(StockMovement).count() == 0


def test_shift_quantity_unknown_product(db):
    with pytest.raises(NotFoundError):
        ledger.shift_quantity(db, 404, 1)


def test_update_then_delete_restores_initial_quantity(db, product):
    movement = ledger.post_movement(db, {"product_id": product.id, "type": EXIT, "quantity": 5})
    db.commit()

    ledger.update_movement(db, movement, {"type": ENTRY, "quantity": 3, "notes": None})
    db.commit()
    db.refresh(product)
    assert product.quantity == 23

    ledger.delete_movement(db, movement)
    db.commit()
    db.refresh(product)
    assert product.quantity == 20


def test_update_cannot_move_to_another_product(db, product):
    movement = ledger.post_movement(db, {"product_id": product.id, "type": ENTRY, "quantity": 1})
    db.commit()

    with pytest.raises(ValidationFailed):
        ledger.update_movement(db, movement, {"product_id": product.id + 1})


def test_filter_movements_date_bounds(db, product):
    now = datetime.now()
    ledger.post_movement(db, {"product_id": product.id, "type": ENTRY, "quantity": 1, "created_at": now - timedelta(days=2)})
    ledger.post_movement(db, {"product_id": product.id, "type": ENTRY, "quantity": 2, "created_at": now})
    db.commit()

    two_days_ago = (now - timedelta(days=2)).date()
    found = ledger.filter_movements(db, start_date=two_days_ago, end_date=two_days_ago)
    assert [m.quantity for m in found] == [1]

    assert [m.quantity for m in ledger.filter_movements(db)] == [2, 1]
    assert [m.quantity for m in ledger.filter_movements(db, limit=1)] == [2]


def test_summarize_values_at_current_prices(db, product):
    ledger.post_movement(db, {"product_id": product.id, "type": ENTRY, "quantity": 2})
    ledger.post_movement(db, {"product_id": product.id, "type": EXIT, "quantity": 3})
    db.commit()

    summary = ledger.summarize(ledger.filter_movements(db))
    assert summary["entries_value"] == 80.0
    assert summary["exits_value"] == 270.0

    product.sale_price = 100.0
    db.commit()
    summary = ledger.summarize(ledger.filter_movements(db))
    assert summary["exits_value"] == 300.0


def test_summarize_empty():
    assert ledger.summarize([]) == {
        "entries": 0,
        "exits": 0,
        "balance": 0,
        "entries_quantity": 0,
        "exits_quantity": 0,
        "entries_value": 0.0,
        "exits_value": 0.0,
    }


def test_shift_quantity_respects_the_ceiling(db, product):
    with pytest.raises(ValidationFailed) as exc:
        ledger.shift_quantity(db, product.id, MAX_QUANTITY)
    db.rollback()

    assert exc.value.errors[0]["field"] == "quantity"
    db.refresh(product)
    assert product.quantity == 20

    ledger.shift_quantity(db, product.id, MAX_QUANTITY - 20)
    db.commit()
    db.refresh(product)
    assert product.quantity == MAX_QUANTITY


def test_find_by_id_out_of_range(db):
    with pytest.raises(NotFoundError):
        store.find_by_id(db, Product, 2**63)
    with pytest.raises(NotFoundError):
        store.find_by_id(db, Product, 0)
