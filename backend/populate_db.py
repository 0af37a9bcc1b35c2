import os
import random
import sys
from datetime import datetime, timedelta

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from database import SessionLocal, reset_db
from models.product import Product
from models.product_type import ProductType
from models.stock import ENTRY, EXIT
from utils import ledger, store
from utils.errors import InsufficientStock

# Configuration
SEED = 42
MOVEMENTS_PER_PRODUCT = 12
HISTORY_DAYS = 30  # Movements are spread over the last month
# End Configuration

PRODUCT_TYPES = [
    ("Eletrônicos", "Dispositivos eletrônicos e gadgets"),
    ("Computadores", "Laptops, desktops e componentes"),
    ("Periféricos", "Acessórios para computadores e eletrônicos"),
    ("Smartphones", "Celulares e acessórios móveis"),
    ("Gaming", "Produtos para jogos e entretenimento"),
]

# (type, name, supplier, cost price, sale price, initial quantity)
PRODUCTS = [
    ("Eletrônicos", "Smart TV 50\"", "Samsung", 1800.00, 2499.90, 8),
    ("Eletrônicos", "Soundbar", "JBL", 650.00, 899.00, 15),
    ("Computadores", "Notebook Pro 14", "Dell", 4200.00, 5699.00, 6),
    ("Computadores", "Mini PC", "Lenovo", 1500.00, 1999.00, 4),
    ("Periféricos", "Teclado Mecânico", "Redragon", 180.00, 299.90, 40),
    ("Periféricos", "Mouse Sem Fio", "Logitech", 60.00, 129.90, 55),
    ("Smartphones", "Galaxy A55", "Samsung", 1600.00, 2199.00, 12),
    ("Smartphones", "Capa de Silicone", "Genérico", 8.00, 6.50, 100),
    ("Gaming", "Console Next", "Sony", 3200.00, 3999.00, 3),
    ("Gaming", "Controle Sem Fio", "Sony", 280.00, 449.00, 20),
]


def seed():
    """Recreates the schema and fills it with product types, products and a month of movements."""
    random.seed(SEED)
    reset_db()
    session = SessionLocal()

    try:
        types = {}
        for name, description in PRODUCT_TYPES:
            product_type = ProductType(name=name, description=description)
            store.insert(session, product_type)
            types[name] = product_type
        print(f"Wstawiono {len(types)} typów produktów.")

        products = []
        for type_name, name, supplier, cost, sale, qty in PRODUCTS:
            product = Product(
                name=name,
                description=f"{name} - {types[type_name].description}",
                supplier=supplier,
                cost_price=cost,
                sale_price=sale,
                quantity=qty,
                product_type_id=types[type_name].id,
            )
            store.insert(session, product)
            products.append(product)
        session.commit()
        print(f"Wstawiono {len(products)} produktów.")

        posted = skipped = 0
        now = datetime.now()
        for product in products:
            # Oldest first, so exits only consume stock that already arrived
            offsets = sorted(
                (random.randint(0, HISTORY_DAYS * 24 * 60) for _ in range(MOVEMENTS_PER_PRODUCT)),
                reverse=True,
            )
            for minutes_ago in offsets:
                kind = random.choice([ENTRY, EXIT, EXIT])
                data = {
                    "product_id": product.id,
                    "type": kind,
                    "quantity": random.randint(1, 10),
                    "created_at": now - timedelta(minutes=minutes_ago),
                    "notes": "Seed data",
                }
                try:
                    ledger.post_movement(session, data)
                except InsufficientStock:
                    skipped += 1
                    continue
                posted += 1
            session.commit()

        print(f"Zaksięgowano {posted} ruchów magazynowych (pominięto {skipped} z powodu braku stanu).")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    seed()
