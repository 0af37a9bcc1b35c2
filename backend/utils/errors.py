# backend/utils/errors.py
from typing import Any, Dict, List, Optional


class InventoryError(Exception):
    """Base class for client-correctable errors returned as structured 4xx responses."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class NotFoundError(InventoryError):
    status_code = 404

    def __init__(self, resource: str, entity_id: Any):
        super().__init__(f"{resource} {entity_id} not found")
        self.resource = resource
        self.entity_id = entity_id


class ValidationFailed(InventoryError):
    """Collects every field violation of a request instead of stopping at the first."""

    def __init__(self, errors: List[Dict[str, Optional[str]]]):
        super().__init__(", ".join(e["message"] for e in errors))
        self.errors = errors

    @classmethod
    def single(cls, field: Optional[str], message: str) -> "ValidationFailed":
        return cls([{"field": field, "message": message}])

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class InsufficientStock(InventoryError):

    def __init__(self, product_id: int, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for product {product_id}: "
            f"available {available}, requested {requested}"
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested

    def to_body(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "productId": self.product_id,
            "available": self.available,
            "requested": self.requested,
        }
