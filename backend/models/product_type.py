from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from database import Base

# Model ProductType
# Grupuje produkty w kategorie (np. Eletrônicos, Computadores).
# Nie może zostać usunięty, dopóki odwołuje się do niego jakikolwiek produkt.
class ProductType(Base):
    __tablename__ = "product_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(500), nullable=True)

    products = relationship("Product", back_populates="product_type")
