"""Product routes."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from stockapi.core.auth import CurrentUser
from stockapi.core.config import settings
from stockapi.core.rate_limit import limiter
from stockapi.db.session import DbSession
from stockapi.schemas.pagination import PaginatedResponse, clamp_page
from stockapi.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from stockapi.schemas.response import ApiResponse
from stockapi.services.product_service import ProductService

router = APIRouter()


def get_product_service(db: DbSession) -> ProductService:
    return ProductService(db)


Products = Annotated[ProductService, Depends(get_product_service)]


@router.get("/", response_model=PaginatedResponse[ProductResponse])
@limiter.limit("60/minute")
def list_products(
    request: Request,
    products: Products,
    page: int = Query(1, description="Page number (1-indexed)"),
    page_size: int = Query(settings.products_page_size, description="Items per page"),
    search: Optional[str] = Query(None, description="Search by name, barcode or description"),
    category: Optional[str] = Query(None, description="Filter by category"),
):
    """List active products with optional filters and pagination."""
    page, page_size = clamp_page(
        page, page_size, settings.products_page_size, settings.products_max_page_size
    )
    items, total = products.list_products(page, page_size, search, category)
    return PaginatedResponse[ProductResponse].create(
        items=[ProductResponse.model_validate(p) for p in items],
        total_items=total,
        page=page,
        page_size=page_size,
    )


@router.get("/categories", response_model=ApiResponse[List[str]])
@limiter.limit("60/minute")
def list_categories(request: Request, products: Products):
    """Distinct categories of active products."""
    return ApiResponse[List[str]].ok(products.list_categories())


@router.get("/barcode/{barcode}", response_model=ApiResponse[ProductResponse])
@limiter.limit("60/minute")
def get_product_by_barcode(request: Request, barcode: str, products: Products):
    """Get a product by barcode (EAN/UPC)."""
    product = products.get_by_barcode(barcode)
    return ApiResponse[ProductResponse].ok(ProductResponse.model_validate(product))


@router.get("/{product_id}", response_model=ApiResponse[ProductResponse])
@limiter.limit("60/minute")
def get_product(request: Request, product_id: int, products: Products):
    """Get a specific product."""
    product = products.get_by_id(product_id)
    return ApiResponse[ProductResponse].ok(ProductResponse.model_validate(product))


@router.post("/", response_model=ApiResponse[ProductResponse], status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
def create_product(
    request: Request, product_data: ProductCreate, products: Products, current_user: CurrentUser
):
    """Create a new product."""
    product = products.create(product_data)
    return ApiResponse[ProductResponse].ok(
        ProductResponse.model_validate(product), "Product created successfully"
    )


@router.put("/{product_id}", response_model=ApiResponse[ProductResponse])
@limiter.limit("30/minute")
def update_product(
    request: Request,
    product_id: int,
    product_data: ProductUpdate,
    products: Products,
    current_user: CurrentUser,
):
    """Update the fields present in the request body."""
    product = products.update(product_id, product_data)
    return ApiResponse[ProductResponse].ok(
        ProductResponse.model_validate(product), "Product updated successfully"
    )


@router.delete("/{product_id}", response_model=ApiResponse[bool])
@limiter.limit("30/minute")
def delete_product(request: Request, product_id: int, products: Products, current_user: CurrentUser):
    """Soft delete: the product is deactivated and keeps its history."""
    products.deactivate(product_id)
    return ApiResponse[bool].ok(True, "Product deleted successfully")
