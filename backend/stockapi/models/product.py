"""Product model."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import CheckConstraint, Enum as SAEnum, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stockapi.db.base import Base, TimestampMixin


class ProductStatus(str, Enum):
    """Soft-delete state of a product. Inactive products accept no movements."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Product(Base, TimestampMixin):
    """Product in the warehouse catalog."""

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint("min_stock >= 0", name="ck_products_min_stock_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    barcode: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    min_stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    status: Mapped[ProductStatus] = mapped_column(
        SAEnum(ProductStatus), default=ProductStatus.ACTIVE, nullable=False
    )
    # Bumped by SQLAlchemy on every UPDATE; a mismatch raises StaleDataError
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    stock_movements: Mapped[list["StockMovement"]] = relationship(
        "StockMovement", back_populates="product", passive_deletes="all"
    )

    @property
    def active(self) -> bool:
        return self.status == ProductStatus.ACTIVE


# Forward references
from stockapi.models.stock import StockMovement
