# backend/config.py
from pydantic_settings import BaseSettings
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./inventory.db"

    ENVIRONMENT: str = "development"
    FRONTEND_URL: str = "http://localhost:3000"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Dashboard and listing defaults
    LOW_STOCK_THRESHOLD: int = 5
    STOCK_TREND_DAYS: int = 7
    RECENT_MOVEMENTS_LIMIT: int = 10
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = str(env_path)
        extra = "ignore"

settings = Settings()
