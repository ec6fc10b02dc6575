"""Stock ledger model: StockMovement."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Enum as SAEnum, ForeignKey, Integer, String, event
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stockapi.db.base import Base


class MovementKind(str, Enum):
    """Direction of a stock movement."""

    ENTRY = "entry"  # Goods received, stock increases
    EXIT = "exit"  # Goods dispatched, stock decreases

    @property
    def label(self) -> str:
        return "Entry" if self is MovementKind.ENTRY else "Exit"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StockMovement(Base):
    """Append-only ledger of stock changes with before/after snapshots."""

    __tablename__ = "stock_movements"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_stock_movements_quantity_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    kind: Mapped[MovementKind] = mapped_column(SAEnum(MovementKind), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    stock_before: Mapped[int] = mapped_column(Integer, nullable=False)
    stock_after: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False, index=True
    )

    # Relationships
    product: Mapped["Product"] = relationship("Product", back_populates="stock_movements")
    user: Mapped["User"] = relationship("User", back_populates="stock_movements")


class ImmutableMovementError(Exception):
    """Raised when code tries to modify or delete a persisted stock movement."""


@event.listens_for(StockMovement, "before_update")
def _refuse_movement_update(mapper, connection, target):
    raise ImmutableMovementError(f"Stock movement {target.id} is immutable")


@event.listens_for(StockMovement, "before_delete")
def _refuse_movement_delete(mapper, connection, target):
    raise ImmutableMovementError(f"Stock movement {target.id} cannot be deleted")


# Forward references
from stockapi.models.product import Product
from stockapi.models.user import User
