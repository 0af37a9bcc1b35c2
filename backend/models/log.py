from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, JSON
from database import Base

# Audit trail: one row per successful mutation of the inventory
class Log(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now, index=True)

    # e.g. PRODUCT_CREATE / products / 12
    action = Column(String(50), nullable=False, index=True)
    resource = Column(String(50), nullable=False, index=True)
    entity_id = Column(Integer, nullable=True, index=True)
    status = Column(String(20), nullable=False, default="SUCCESS", index=True)

    ip = Column(String(64), nullable=True)
    meta = Column(JSON, nullable=True)
