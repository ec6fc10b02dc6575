"""Stock routes - entries, exits and ledger history.

Movements require a bearer token; the authenticated user's id is recorded on
every ledger row. History is readable without authentication.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from stockapi.core.auth import CurrentUser
from stockapi.core.config import settings
from stockapi.core.rate_limit import limiter
from stockapi.db.session import DbSession
from stockapi.db.unit_of_work import SqlAlchemyUnitOfWork
from stockapi.models.stock import MovementKind
from stockapi.schemas.pagination import PaginatedResponse, clamp_page
from stockapi.schemas.product import ProductResponse
from stockapi.schemas.response import ApiResponse
from stockapi.schemas.stock import StockMovementRequest, StockMovementResponse
from stockapi.services.stock_ledger_service import HistoryPage, StockLedgerService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_ledger(db: DbSession) -> StockLedgerService:
    return StockLedgerService(SqlAlchemyUnitOfWork(db))


Ledger = Annotated[StockLedgerService, Depends(get_ledger)]


def _movement_response(
    ledger: StockLedgerService,
    body: StockMovementRequest,
    kind: MovementKind,
    user_id: int,
) -> ApiResponse[ProductResponse]:
    data = ledger.apply_movement(
        barcode=body.barcode.strip(),
        quantity=body.quantity,
        kind=kind,
        notes=body.notes.strip() if body.notes else None,
        user_id=user_id,
    )
    return ApiResponse[ProductResponse].ok(
        data, f"{kind.label} recorded successfully. New stock: {data.stock}"
    )


def _history_response(page: HistoryPage) -> PaginatedResponse[StockMovementResponse]:
    return PaginatedResponse[StockMovementResponse].create(
        items=[StockMovementResponse.from_movement(m) for m in page.items],
        total_items=page.total_items,
        page=page.page,
        page_size=page.page_size,
    )


@router.post("/entry", response_model=ApiResponse[ProductResponse])
@limiter.limit("60/minute")
def register_entry(
    request: Request, body: StockMovementRequest, ledger: Ledger, current_user: CurrentUser
):
    """Record a stock entry for the product with the given barcode."""
    return _movement_response(ledger, body, MovementKind.ENTRY, current_user.user_id)


@router.post("/exit", response_model=ApiResponse[ProductResponse])
@limiter.limit("60/minute")
def register_exit(
    request: Request, body: StockMovementRequest, ledger: Ledger, current_user: CurrentUser
):
    """Record a stock exit; fails when the product has less stock than requested."""
    return _movement_response(ledger, body, MovementKind.EXIT, current_user.user_id)


@router.get("/history/{product_id}", response_model=PaginatedResponse[StockMovementResponse])
@limiter.limit("60/minute")
def get_product_history(
    request: Request,
    product_id: int,
    ledger: Ledger,
    page: int = Query(1, description="Page number (1-indexed)"),
    page_size: int = Query(settings.product_history_page_size, description="Items per page"),
):
    """Movements of one product, newest first."""
    page, page_size = clamp_page(
        page, page_size,
        settings.product_history_page_size, settings.product_history_max_page_size,
    )
    return _history_response(ledger.get_history(product_id, page, page_size))


@router.get("/history", response_model=PaginatedResponse[StockMovementResponse])
@limiter.limit("60/minute")
def get_history(
    request: Request,
    ledger: Ledger,
    page: int = Query(1, description="Page number (1-indexed)"),
    page_size: int = Query(settings.history_page_size, description="Items per page"),
):
    """All movements across products, newest first."""
    page, page_size = clamp_page(
        page, page_size, settings.history_page_size, settings.history_max_page_size
    )
    return _history_response(ledger.get_history(None, page, page_size))
