# backend/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv

from config import settings

load_dotenv()

# 1. Adres bazy z konfiguracji (domyślnie lokalny SQLite)
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# 2. SQLAlchemy wymaga schematu postgresql:// zamiast postgres://
if SQLALCHEMY_DATABASE_URL and SQLALCHEMY_DATABASE_URL.startswith("postgres://"):
    SQLALCHEMY_DATABASE_URL = SQLALCHEMY_DATABASE_URL.replace("postgres://", "postgresql://", 1)

# 3. Konfiguracja zależna od bazy
engine_kwargs = {}
if "sqlite" in SQLALCHEMY_DATABASE_URL:
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    # In-memory SQLite lives inside a single connection
    if SQLALCHEMY_DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool

engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_kwargs)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Primary keys are 64-bit signed integers
MAX_ID = 2**63 - 1

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def _import_models():
    # Register every table on Base.metadata
    import models.product_type  # noqa: F401
    import models.product  # noqa: F401
    import models.stock  # noqa: F401
    import models.log  # noqa: F401

def init_db():
    _import_models()
    Base.metadata.create_all(bind=engine)

def reset_db():
    """Drop and recreate every table. Used by tests and the seeding script."""
    _import_models()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
