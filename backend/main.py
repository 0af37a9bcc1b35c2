# backend/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

load_dotenv()

from config import settings
from database import init_db
from utils.errors import InventoryError

# Import routerów
from routes.products import router as products_router
from routes.product_types import router as product_types_router
from routes.stock import router as stock_router
from routes.dashboard import router as dashboard_router
from routes.logs import router as logs_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Inicjalizacja
init_db()

app = FastAPI(title="Inventory API", version="1.0.0")

# CORS: any origin in development, only the frontend otherwise
origins = ["*"] if settings.ENVIRONMENT == "development" else [settings.FRONTEND_URL]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=settings.ENVIRONMENT != "development",
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# Obsługa błędów
@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def _field_name(loc) -> Optional[str]:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or None


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        field = _field_name(err.get("loc", ()))
        message = err.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            # Custom rule messages are already readable
            message = message[len("Value error, "):]
        elif field:
            message = f"{field}: {message}"
        errors.append({"field": field, "message": message})
    return JSONResponse(
        status_code=400,
        content={"message": ", ".join(e["message"] for e in errors), "errors": errors},
    )


# Rejestracja routerów
app.include_router(products_router, prefix=settings.API_PREFIX)
app.include_router(product_types_router, prefix=settings.API_PREFIX)
app.include_router(stock_router, prefix=settings.API_PREFIX)
app.include_router(dashboard_router, prefix=settings.API_PREFIX)
app.include_router(logs_router, prefix=settings.API_PREFIX)


@app.get("/")
def read_root():
    return {"message": "Inventory API is running", "docs_url": "/docs"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}
