"""Tests for the product catalog service and /products endpoints."""

import pytest
from decimal import Decimal

from stockapi.models.product import Product, ProductStatus
from stockapi.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from stockapi.services.errors import DuplicateBarcode, NotFound, ProductInactive
from stockapi.services.product_service import ProductService

API = "/api/v1/products"


@pytest.fixture
def catalog(db_session):
    """A small catalog across two categories plus one inactive product."""
    rows = [
        ("1000000000001", "Porca M8", "Fixação", ProductStatus.ACTIVE),
        ("1000000000002", "Anilha M8", "Fixação", ProductStatus.ACTIVE),
        ("1000000000003", "Fita Isoladora", "Elétrico", ProductStatus.ACTIVE),
        ("1000000000004", "Martelo Antigo", "Ferramentas", ProductStatus.INACTIVE),
    ]
    products = [
        Product(barcode=b, name=n, category=c, status=s, stock=10, min_stock=5, unit_price=Decimal("1.00"))
        for b, n, c, s in rows
    ]
    db_session.add_all(products)
    db_session.commit()
    return products


# ============== Service ==============

class TestProductService:
    def test_list_only_active_ordered_by_name(self, db_session, catalog):
        items, total = ProductService(db_session).list_products()
        assert total == 3
        assert [p.name for p in items] == ["Anilha M8", "Fita Isoladora", "Porca M8"]

    def test_search_is_case_insensitive(self, db_session, catalog):
        items, total = ProductService(db_session).list_products(search="FITA")
        assert total == 1
        assert items[0].barcode == "1000000000003"

    def test_search_matches_barcode(self, db_session, catalog):
        items, _ = ProductService(db_session).list_products(search="0000000002")
        assert [p.name for p in items] == ["Anilha M8"]

    def test_filter_by_category(self, db_session, catalog):
        items, total = ProductService(db_session).list_products(category="Fixação")
        assert total == 2

    def test_pagination(self, db_session, catalog):
        items, total = ProductService(db_session).list_products(page=2, page_size=2)
        assert total == 3
        assert [p.name for p in items] == ["Porca M8"]

    def test_get_by_barcode_not_found(self, db_session):
        with pytest.raises(NotFound):
            ProductService(db_session).get_by_barcode("nope")

    def test_create_trims_and_activates(self, db_session):
        product = ProductService(db_session).create(
            ProductCreate(barcode=" 5600000000001 ", name="  Broca 6mm ", stock=12, min_stock=3)
        )
        assert product.id is not None
        assert product.barcode == "5600000000001"
        assert product.name == "Broca 6mm"
        assert product.status == ProductStatus.ACTIVE
        assert product.version == 1

    def test_create_duplicate_barcode(self, db_session, test_product):
        with pytest.raises(DuplicateBarcode):
            ProductService(db_session).create(ProductCreate(barcode=test_product.barcode, name="Other"))

    def test_update_ignores_unset_fields(self, db_session, test_product):
        product = ProductService(db_session).update(
            test_product.id, ProductUpdate(location="Corredor Z", min_stock=150)
        )
        assert product.location == "Corredor Z"
        assert product.min_stock == 150
        assert product.name == "Parafuso M8x50"
        assert product.stock == 100

    def test_deactivate_keeps_row(self, db_session, test_product):
        ProductService(db_session).deactivate(test_product.id)
        db_session.refresh(test_product)
        assert test_product.status == ProductStatus.INACTIVE
        assert test_product.active is False

    def test_deactivated_product_refuses_movements(self, db_session, ledger, test_product, test_user):
        ProductService(db_session).deactivate(test_product.id)
        with pytest.raises(ProductInactive):
            ledger.register_entry(test_product.barcode, 1, test_user.id)

    def test_reactivate(self, db_session, inactive_product):
        product = ProductService(db_session).update(inactive_product.id, ProductUpdate(active=True))
        assert product.active is True

    def test_categories(self, db_session, catalog):
        assert ProductService(db_session).list_categories() == ["Elétrico", "Fixação"]


class TestLowStockFlag:
    def test_at_minimum_is_low(self, low_stock_product):
        low_stock_product.stock = 50
        assert ProductResponse.model_validate(low_stock_product).low_stock is True

    def test_below_minimum_is_low(self, low_stock_product):
        assert ProductResponse.model_validate(low_stock_product).low_stock is True

    def test_above_minimum_is_not_low(self, test_product):
        assert ProductResponse.model_validate(test_product).low_stock is False


# ============== Endpoints ==============

class TestProductEndpoints:
    def test_list_is_public(self, client, catalog):
        response = client.get(f"{API}/")
        assert response.status_code == 200
        body = response.json()
        assert body["total_items"] == 3
        assert body["page_size"] == 20

    def test_list_clamps_page_size(self, client, catalog):
        body = client.get(f"{API}/", params={"page_size": 1000, "page": -1}).json()
        assert body["page_size"] == 100
        assert body["page"] == 1

    def test_categories(self, client, catalog):
        response = client.get(f"{API}/categories")
        assert response.status_code == 200
        assert response.json()["data"] == ["Elétrico", "Fixação"]

    def test_get_by_barcode(self, client, test_product):
        response = client.get(f"{API}/barcode/{test_product.barcode}")
        assert response.status_code == 200
        assert response.json()["data"]["id"] == test_product.id

    def test_get_by_id_not_found(self, client):
        response = client.get(f"{API}/99999")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Product not found",
            "data": None,
            "errors": None,
        }

    def test_create_requires_auth(self, client):
        response = client.post(f"{API}/", json={"barcode": "5600000000009", "name": "Serrote"})
        assert response.status_code == 401

    def test_create(self, client, auth_headers):
        response = client.post(
            f"{API}/",
            json={"barcode": "5600000000009", "name": "Serrote", "stock": 4, "min_stock": 2, "unit_price": "12.50"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Serrote"
        assert data["active"] is True
        assert data["status"] == "active"

    def test_create_duplicate(self, client, auth_headers, test_product):
        response = client.post(
            f"{API}/", json={"barcode": test_product.barcode, "name": "Copy"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_create_negative_stock_rejected(self, client, auth_headers):
        response = client.post(
            f"{API}/", json={"barcode": "5600000000010", "name": "X", "stock": -1}, headers=auth_headers
        )
        assert response.status_code == 422

    def test_update(self, client, auth_headers, test_product):
        response = client.put(f"{API}/{test_product.id}", json={"name": "Parafuso M8x60"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Parafuso M8x60"

    def test_update_cannot_change_stock(self, client, auth_headers, test_product):
        response = client.put(f"{API}/{test_product.id}", json={"stock": 9999}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["stock"] == 100

    def test_delete_is_soft(self, client, db_session, auth_headers, test_product):
        response = client.delete(f"{API}/{test_product.id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"] is True

        # Still reachable by id, but gone from the listing
        assert client.get(f"{API}/{test_product.id}").json()["data"]["active"] is False
        assert client.get(f"{API}/").json()["total_items"] == 0
