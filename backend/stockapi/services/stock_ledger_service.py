"""Stock Ledger Service - applies stock entries/exits and serves their history.

Every accepted movement updates the product's stock and appends exactly one
StockMovement row in the same transaction:

1. Lock the product row (by barcode)
2. Reject inactive products
3. Compute the new stock; exits may not go below zero
4. Persist the new stock and the movement with before/after snapshots
5. Commit, or roll back everything

Concurrent writers on the same product are serialized by the row lock. Where
the database ignores ``FOR UPDATE`` (SQLite) the version counter on Product
detects the lost update at flush time and the whole transaction is retried.

The returned product is a ``ProductResponse`` read inside the movement's own
transaction, so it reflects this movement even if another writer commits
right after.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from stockapi.core.config import settings
from stockapi.db.unit_of_work import SqlAlchemyUnitOfWork
from stockapi.schemas.product import ProductResponse
from stockapi.models.stock import MovementKind, StockMovement
from stockapi.services.errors import (
    InsufficientStock,
    InvalidInput,
    NotFound,
    PersistenceFailure,
    ProductInactive,
)

logger = logging.getLogger(__name__)


@dataclass
class HistoryPage:
    """One page of ledger entries plus the total count across all pages."""

    items: list[StockMovement]
    total_items: int
    page: int
    page_size: int


class StockLedgerService:
    """Applies stock movements and queries the ledger."""

    def __init__(self, uow: SqlAlchemyUnitOfWork, max_retries: Optional[int] = None):
        self.uow = uow
        if max_retries is None:
            max_retries = settings.stock_movement_max_retries
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.max_retries = max_retries

    # ===== MOVEMENTS =====

    def register_entry(
        self, barcode: str, quantity: int, user_id: int, notes: Optional[str] = None
    ) -> ProductResponse:
        return self.apply_movement(barcode, quantity, MovementKind.ENTRY, notes, user_id)

    def register_exit(
        self, barcode: str, quantity: int, user_id: int, notes: Optional[str] = None
    ) -> ProductResponse:
        return self.apply_movement(barcode, quantity, MovementKind.EXIT, notes, user_id)

    def apply_movement(
        self,
        barcode: str,
        quantity: int,
        kind: MovementKind,
        notes: Optional[str],
        user_id: Optional[int],
    ) -> ProductResponse:
        """Apply one movement atomically and return the product as committed.

        Raises:
            InvalidInput: quantity is not positive or no user is given.
            NotFound: no product has this barcode.
            ProductInactive: the product is soft-deleted.
            InsufficientStock: an exit larger than the current stock.
            PersistenceFailure: the storage layer failed; nothing was written.
        """
        if quantity is None or quantity <= 0:
            raise InvalidInput("Quantity must be greater than 0")
        if user_id is None:
            raise InvalidInput("A user is required to record a stock movement")

        attempt = 0
        while True:
            attempt += 1
            try:
                return self._apply_once(barcode, quantity, kind, notes, user_id)
            except StaleDataError:
                if attempt >= self.max_retries:
                    logger.error(
                        f"Stock movement on barcode {barcode} abandoned after "
                        f"{attempt} concurrent update conflicts"
                    )
                    raise PersistenceFailure("Internal error while processing the stock movement")
                logger.warning(
                    f"Concurrent update on barcode {barcode}, retrying "
                    f"(attempt {attempt}/{self.max_retries})"
                )
            except SQLAlchemyError:
                logger.exception(f"Error processing stock movement for barcode {barcode}")
                raise PersistenceFailure("Internal error while processing the stock movement")

    def _apply_once(
        self,
        barcode: str,
        quantity: int,
        kind: MovementKind,
        notes: Optional[str],
        user_id: int,
    ) -> ProductResponse:
        with self.uow as uow:
            product = uow.products.get_by_barcode(barcode, for_update=True)
            if product is None:
                raise NotFound("Product not found")
            if not product.active:
                raise ProductInactive(barcode)

            stock_before = product.stock
            if kind == MovementKind.ENTRY:
                stock_after = stock_before + quantity
            else:
                if stock_before < quantity:
                    raise InsufficientStock(current_stock=stock_before, requested=quantity)
                stock_after = stock_before - quantity

            product_id = product.id
            product.stock = stock_after
            uow.movements.add(
                StockMovement(
                    product_id=product_id,
                    user_id=user_id,
                    kind=kind,
                    quantity=quantity,
                    stock_before=stock_before,
                    stock_after=stock_after,
                    notes=notes,
                )
            )
            # Snapshot taken inside the transaction, before other writers can commit
            uow.flush()
            uow.refresh(product)
            snapshot = ProductResponse.model_validate(product)
            uow.commit()

        logger.info(
            f"{kind.label} of stock: product {product_id}, quantity {quantity}, "
            f"stock {stock_before} -> {stock_after}"
        )
        return snapshot

    # ===== HISTORY =====

    def get_history(
        self, product_id: Optional[int], page: int = 1, page_size: int = 20
    ) -> HistoryPage:
        """Return one page of the ledger, newest first.

        ``product_id=None`` returns the global ledger. Page size limits are
        the caller's concern; any page/page_size >= 1 is accepted.
        """
        if page < 1 or page_size < 1:
            raise InvalidInput("page and page_size must be at least 1")

        offset = (page - 1) * page_size
        items, total = self.uow.movements.list_page(product_id, offset, page_size)
        return HistoryPage(items=items, total_items=total, page=page, page_size=page_size)
