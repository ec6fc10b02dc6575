"""Product schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from stockapi.models.product import ProductStatus


class ProductCreate(BaseModel):
    """Product creation schema."""

    barcode: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    image_url: Optional[str] = Field(None, max_length=500)
    stock: int = Field(0, ge=0)
    min_stock: int = Field(0, ge=0)
    unit_price: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=100)


class ProductUpdate(BaseModel):
    """Partial product update. Stock is changed through stock movements only."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    image_url: Optional[str] = Field(None, max_length=500)
    min_stock: Optional[int] = Field(None, ge=0)
    unit_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=100)
    active: Optional[bool] = None


class ProductResponse(BaseModel):
    """Product response schema."""

    id: int
    barcode: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    stock: int
    min_stock: int
    unit_price: Decimal
    category: Optional[str] = None
    location: Optional[str] = None
    status: ProductStatus
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def low_stock(self) -> bool:
        return self.stock <= self.min_stock
