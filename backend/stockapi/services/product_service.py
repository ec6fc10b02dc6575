"""Product Catalog Service - product CRUD, lookups and category listing."""

import logging
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockapi.models.product import Product, ProductStatus
from stockapi.schemas.pagination import paginate_query
from stockapi.schemas.product import ProductCreate, ProductUpdate
from stockapi.services.errors import DuplicateBarcode, NotFound, PersistenceFailure

logger = logging.getLogger(__name__)

_TRIMMED_FIELDS = ("barcode", "name", "description", "image_url", "category", "location")


def _clean(value):
    return value.strip() if isinstance(value, str) else value


class ProductService:
    """Owns product records. The stock column is only set at creation;
    afterwards it changes exclusively through the stock ledger."""

    def __init__(self, db: Session):
        self.db = db

    def list_products(
        self,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> tuple[list[Product], int]:
        """List active products ordered by name, with optional filters."""
        query = select(Product).where(Product.status == ProductStatus.ACTIVE)

        if search and search.strip():
            term = f"%{search.strip().lower()}%"
            query = query.where(
                or_(
                    func.lower(Product.name).like(term),
                    func.lower(Product.barcode).like(term),
                    func.lower(Product.description).like(term),
                )
            )
        if category and category.strip():
            query = query.where(Product.category == category.strip())

        query = query.order_by(Product.name, Product.id)
        return paginate_query(self.db, query, page, page_size)

    def get_by_id(self, product_id: int) -> Product:
        product = self.db.get(Product, product_id)
        if product is None:
            raise NotFound("Product not found")
        return product

    def get_by_barcode(self, barcode: str) -> Product:
        product = self.db.execute(
            select(Product).where(Product.barcode == barcode.strip())
        ).scalar_one_or_none()
        if product is None:
            raise NotFound("Product not found")
        return product

    def create(self, data: ProductCreate) -> Product:
        values = data.model_dump()
        for field in _TRIMMED_FIELDS:
            values[field] = _clean(values.get(field))

        existing = self.db.execute(
            select(Product.id).where(Product.barcode == values["barcode"])
        ).first()
        if existing:
            raise DuplicateBarcode("A product with this barcode already exists")

        product = Product(**values, status=ProductStatus.ACTIVE)
        try:
            self.db.add(product)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Error creating product")
            raise PersistenceFailure("Internal error while creating the product")

        self.db.refresh(product)
        logger.info(f"Product created: {product.id} - {product.name}")
        return product

    def update(self, product_id: int, data: ProductUpdate) -> Product:
        """Apply only the fields present in the request."""
        product = self.get_by_id(product_id)

        update_data = data.model_dump(exclude_unset=True)
        active = update_data.pop("active", None)
        for field, value in update_data.items():
            if value is None:
                continue
            setattr(product, field, _clean(value))
        if active is not None:
            product.status = ProductStatus.ACTIVE if active else ProductStatus.INACTIVE

        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Error updating product {product_id}")
            raise PersistenceFailure("Internal error while updating the product")

        self.db.refresh(product)
        logger.info(f"Product updated: {product.id}")
        return product

    def deactivate(self, product_id: int) -> None:
        """Soft delete: the row and its history stay, movements are refused."""
        product = self.get_by_id(product_id)
        product.status = ProductStatus.INACTIVE
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Error deactivating product {product_id}")
            raise PersistenceFailure("Internal error while deleting the product")

        logger.info(f"Product deactivated: {product_id}")

    def list_categories(self) -> list[str]:
        rows = self.db.execute(
            select(Product.category)
            .where(Product.status == ProductStatus.ACTIVE, Product.category.is_not(None))
            .distinct()
            .order_by(Product.category)
        ).scalars().all()
        return list(rows)
