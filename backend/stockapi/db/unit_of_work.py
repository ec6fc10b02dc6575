"""Unit of work and repositories over a SQLAlchemy session.

The stock ledger receives a ``SqlAlchemyUnitOfWork`` at construction time and
never touches the session directly. A unit of work is used as a context
manager: leaving the block without ``commit()`` rolls back everything done
inside it, so a failure can never leave a half-applied movement behind.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from stockapi.models.product import Product
from stockapi.models.stock import StockMovement


class ProductRepository:
    """Product lookups used by the ledger."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_barcode(self, barcode: str, for_update: bool = False) -> Optional[Product]:
        """Find a product by barcode.

        With ``for_update`` the row is locked until the transaction ends
        (``SELECT ... FOR UPDATE``; ignored by SQLite, where the version
        counter on Product catches concurrent writers instead).
        """
        stmt = select(Product).where(Product.barcode == barcode)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()


class StockMovementRepository:
    """Append-only access to the stock ledger."""

    def __init__(self, session: Session):
        self.session = session

    def add(self, movement: StockMovement) -> StockMovement:
        self.session.add(movement)
        return movement

    def count(self, product_id: Optional[int] = None) -> int:
        stmt = select(func.count(StockMovement.id))
        if product_id is not None:
            stmt = stmt.where(StockMovement.product_id == product_id)
        return self.session.execute(stmt).scalar_one()

    def list_page(
        self,
        product_id: Optional[int],
        offset: int,
        limit: int,
    ) -> tuple[list[StockMovement], int]:
        """Return one page of movements (newest first) and the total count.

        Ties on the timestamp fall back to insertion order so pages never
        overlap or skip rows.
        """
        stmt = select(StockMovement).options(
            joinedload(StockMovement.product),
            joinedload(StockMovement.user),
        )
        if product_id is not None:
            stmt = stmt.where(StockMovement.product_id == product_id)
        stmt = (
            stmt.order_by(StockMovement.created_at.desc(), StockMovement.id.asc())
            .offset(offset)
            .limit(limit)
        )
        items = list(self.session.execute(stmt).scalars().all())
        return items, self.count(product_id)


class SqlAlchemyUnitOfWork:
    """Transaction boundary plus the repositories bound to it."""

    def __init__(self, session: Session):
        self.session = session
        self.products = ProductRepository(session)
        self.movements = StockMovementRepository(session)
        self._committed = False

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._committed = False
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Anything not committed explicitly is discarded
        if exc_type is not None or not self._committed:
            self.rollback()

    def flush(self) -> None:
        self.session.flush()

    def refresh(self, instance) -> None:
        self.session.refresh(instance)

    def commit(self) -> None:
        self.session.commit()
        self._committed = True

    def rollback(self) -> None:
        self.session.rollback()
