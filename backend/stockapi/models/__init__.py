"""SQLAlchemy models."""

from stockapi.models.user import User
from stockapi.models.product import Product, ProductStatus
from stockapi.models.stock import ImmutableMovementError, MovementKind, StockMovement

__all__ = [
    "User",
    "Product",
    "ProductStatus",
    "StockMovement",
    "MovementKind",
    "ImmutableMovementError",
]
