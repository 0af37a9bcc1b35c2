from datetime import datetime
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base

ENTRY = "entry"
EXIT = "exit"
MOVEMENT_TYPES = (ENTRY, EXIT)

class StockMovement(Base):
    __tablename__ = "stock_movements"

    id = Column(Integer, primary_key=True, index=True)
    # Immutable after creation
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)

    # Movement classification: entry (purchase) or exit (sale)
    type = Column(
        String(10),
        CheckConstraint("type IN (" + ", ".join(f"'{t}'" for t in MOVEMENT_TYPES) + ")"),
        nullable=False,
    )
    quantity = Column(Integer, CheckConstraint("quantity > 0"), nullable=False)

    notes = Column(String(500), nullable=True)

    # Local time, so that "today" follows the local calendar day
    created_at = Column(DateTime, nullable=False, default=datetime.now, index=True)

    product = relationship("Product", back_populates="movements")

    @property
    def delta(self) -> int:
        """Signed effect of this movement on the product quantity."""
        return self.quantity if self.type == ENTRY else -self.quantity
