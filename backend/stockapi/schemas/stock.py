"""Stock movement schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from stockapi.models.stock import MovementKind, StockMovement


class StockMovementRequest(BaseModel):
    """Entry or exit request, identified by the scanned barcode."""

    barcode: str = Field(..., min_length=1, max_length=50)
    quantity: int = Field(..., ge=1, description="Units to add or remove (must be greater than 0)")
    notes: Optional[str] = Field(None, max_length=500)


class StockMovementResponse(BaseModel):
    """Ledger entry as shown in history listings."""

    id: int
    product_id: int
    product_name: str
    barcode: str
    user_id: int
    user_name: str
    kind: MovementKind
    quantity: int
    stock_before: int
    stock_after: int
    notes: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_movement(cls, movement: StockMovement) -> "StockMovementResponse":
        return cls(
            id=movement.id,
            product_id=movement.product_id,
            product_name=movement.product.name if movement.product else "",
            barcode=movement.product.barcode if movement.product else "",
            user_id=movement.user_id,
            user_name=movement.user.name if movement.user else "",
            kind=movement.kind,
            quantity=movement.quantity,
            stock_before=movement.stock_before,
            stock_after=movement.stock_after,
            notes=movement.notes,
            created_at=movement.created_at,
        )
