from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base

LOSS_WARNING = "Sale price is below cost price; this product sells at a loss"
# Largest stock a product may hold (32-bit signed INTEGER)
MAX_QUANTITY = 2**31 - 1

# Model Product
# Reprezentuje pojedynczy produkt w magazynie.
# Stan (quantity) zmienia się wyłącznie przez ruchy magazynowe (StockMovement),
# poza wartością początkową podaną przy tworzeniu.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(500))
    supplier = Column(String(100))

    # Ceny kontrolowane poprzez ograniczenia.
    cost_price = Column(Float, CheckConstraint("cost_price > 0"), nullable=False)
    sale_price = Column(Float, CheckConstraint("sale_price > 0"), nullable=False)

    # Dane magazynowe.
    quantity = Column(Integer, CheckConstraint(f"quantity >= 0 AND quantity <= {MAX_QUANTITY}"), nullable=False, default=0)
    expiration_date = Column(Date, nullable=True)

    product_type_id = Column(Integer, ForeignKey("product_types.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    product_type = relationship("ProductType", back_populates="products")
    # The ledger belongs to the product and goes with it
    movements = relationship(
        "StockMovement", back_populates="product", cascade="all, delete-orphan"
    )

    @property
    def profit_value(self) -> float:
        return round(self.sale_price - self.cost_price, 2)

    @property
    def profit_margin(self) -> float:
        if not self.cost_price:
            return 0.0
        return round((self.sale_price - self.cost_price) / self.cost_price * 100, 2)

    @property
    def is_loss(self) -> bool:
        return self.sale_price < self.cost_price

    @property
    def warnings(self):
        return [LOSS_WARNING] if self.is_loss else []
