"""Demo data: an administrator account and a handful of warehouse products.

Only inserted into an empty database; existing rows are never touched.
"""

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from stockapi.core.security import get_password_hash
from stockapi.models.product import Product, ProductStatus
from stockapi.models.user import User

logger = logging.getLogger(__name__)

DEMO_ADMIN_EMAIL = "admin@stockapi.pt"
DEMO_ADMIN_PASSWORD = "admin123"

DEMO_PRODUCTS = [
    {
        "barcode": "5601234567890",
        "name": "Parafuso M8x50",
        "description": "Parafuso de aço zincado M8x50mm",
        "stock": 500,
        "min_stock": 100,
        "unit_price": Decimal("0.15"),
        "category": "Fixação",
        "location": "Corredor A - Prateleira 1",
    },
    {
        "barcode": "5609876543210",
        "name": "Porca M8",
        "description": "Porca sextavada M8 em aço zincado",
        "stock": 450,
        "min_stock": 100,
        "unit_price": Decimal("0.08"),
        "category": "Fixação",
        "location": "Corredor A - Prateleira 1",
    },
    {
        "barcode": "5605555555555",
        "name": "Chave de Fendas Phillips PH2",
        "description": "Chave de fendas Phillips tamanho PH2, cabo ergonómico",
        "stock": 25,
        "min_stock": 10,
        "unit_price": Decimal("4.99"),
        "category": "Ferramentas",
        "location": "Corredor B - Prateleira 3",
    },
    {
        "barcode": "5601111111111",
        "name": "Fita Isoladora Preta",
        "description": "Fita isoladora elétrica 19mm x 20m",
        "stock": 80,
        "min_stock": 20,
        "unit_price": Decimal("1.50"),
        "category": "Elétrico",
        "location": "Corredor C - Prateleira 2",
    },
    {
        "barcode": "5602222222222",
        "name": "Cabo Elétrico 2.5mm²",
        "description": "Cabo elétrico H07V-U 2.5mm² azul (por metro)",
        "stock": 5,
        "min_stock": 50,
        "unit_price": Decimal("0.85"),
        "category": "Elétrico",
        "location": "Corredor C - Prateleira 1",
    },
]


def seed_demo_data(db: Session) -> dict:
    """Insert the demo admin and products into empty tables."""
    result = {"users": 0, "products": 0}

    if not db.execute(select(func.count(User.id))).scalar_one():
        db.add(User(
            email=DEMO_ADMIN_EMAIL,
            password_hash=get_password_hash(DEMO_ADMIN_PASSWORD),
            name="Administrador",
            is_verified=True,
        ))
        result["users"] = 1

    if not db.execute(select(func.count(Product.id))).scalar_one():
        db.add_all(Product(**row, status=ProductStatus.ACTIVE) for row in DEMO_PRODUCTS)
        result["products"] = len(DEMO_PRODUCTS)

    db.commit()
    if result["users"] or result["products"]:
        logger.info(f"Demo data seeded: {result['users']} user(s), {result['products']} product(s)")
    return result
