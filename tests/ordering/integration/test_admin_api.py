"""Integration tests for the admin endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain

from ordering.api.errors import register_error_handlers
from ordering.api.routes import admin_router, cart_router, checkout_router, order_router
from ordering.order.order import Order

ADDRESS = {"full_name": "Aye Aye", "phone": "09-123456789", "address": "12 Bogyoke Road, Yangon"}


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(order_router)
    app.include_router(admin_router)
    return TestClient(app)


@pytest.fixture()
def admin(admin_id):
    return {"X-User-Id": admin_id}


@pytest.fixture()
def customer(customer_id):
    return {"X-User-Id": customer_id}


@pytest.fixture()
def order_id(client, customer, make_product):
    product = make_product(price=1000)
    client.post("/cart/items", json={"product_id": str(product.id), "quantity": 2}, headers=customer)
    response = client.post("/checkout", json={"payment_method": "wallet-pay", **ADDRESS}, headers=customer)
    return response.json()["order_id"]


class TestAdminOrders:
    def test_list_orders(self, client, admin, order_id):
        response = client.get("/admin/orders", headers=admin)
        assert response.status_code == 200
        [order] = response.json()
        assert order["order_id"] == order_id
        assert order["total_amount"] == 2000.0
        assert order["delivery_address"]["full_name"] == "Aye Aye"

    def test_customer_is_forbidden(self, client, customer, order_id):
        response = client.get("/admin/orders", headers=customer)
        assert response.status_code == 403

    def test_order_detail(self, client, admin, customer, order_id):
        client.post(f"/orders/{order_id}/payment-slips", json={"image_url": "slips/1.jpg"}, headers=customer)

        response = client.get(f"/admin/orders/{order_id}", headers=admin)

        assert response.status_code == 200
        assert response.json()["payment_slips"][0]["image_url"] == "slips/1.jpg"

    def test_unknown_order_detail_is_404(self, client, admin):
        response = client.get("/admin/orders/no-such-order", headers=admin)
        assert response.status_code == 404

    def test_update_status(self, client, admin, order_id):
        response = client.put(f"/admin/orders/{order_id}/status", json={"status": "shipped"}, headers=admin)
        assert response.status_code == 200
        assert current_domain.repository_for(Order).get(order_id).status == "shipped"

    def test_invalid_status_is_400(self, client, admin, order_id):
        response = client.put(f"/admin/orders/{order_id}/status", json={"status": "lost"}, headers=admin)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "invalid_argument"

    def test_delete_order(self, client, admin, order_id):
        response = client.delete(f"/admin/orders/{order_id}", headers=admin)
        assert response.status_code == 200
        assert response.json()["orders"] == 1
        assert response.json()["notifications"] == 2

    def test_cleanup_with_nothing_old(self, client, admin, order_id):
        response = client.post("/admin/orders/cleanup", json={}, headers=admin)
        assert response.status_code == 200
        assert response.json()["orders"] == 0

    def test_remove_delivery_address(self, client, admin, order_id):
        response = client.delete(f"/admin/orders/{order_id}/delivery-address", headers=admin)
        assert response.status_code == 200
        assert current_domain.repository_for(Order).get(order_id).delivery_address is None


class TestAdminPaymentSlips:
    def test_verify_unverified_slip(self, client, admin, customer, order_id):
        client.post(f"/orders/{order_id}/payment-slips", json={"image_url": "slips/1.jpg"}, headers=customer)

        [slip] = client.get("/admin/payment-slips/unverified", headers=admin).json()
        assert slip["order_id"] == order_id
        assert slip["total_amount"] == 2000.0

        response = client.put(f"/admin/payment-slips/{slip['slip_id']}", json={"verified": True}, headers=admin)

        assert response.status_code == 200
        assert client.get("/admin/payment-slips/unverified", headers=admin).json() == []
        assert current_domain.repository_for(Order).get(order_id).status == "paid"


class TestAdminMetricsAndRoles:
    def test_metrics(self, client, admin, order_id):
        response = client.get("/admin/metrics", headers=admin)
        assert response.status_code == 200
        assert response.json() == {
            "total_customers": 1,
            "total_orders": 1,
            "total_revenue": 0.0,
            "pending_orders": 1,
            "processing_orders": 0,
        }

    def test_grant_role(self, client, admin):
        response = client.post("/admin/roles", json={"user_id": "staff-001", "role": "admin"}, headers=admin)
        assert response.status_code == 200
        assert client.get("/admin/metrics", headers={"X-User-Id": "staff-001"}).status_code == 200


class TestAdminCatalogue:
    def test_category_and_product_lifecycle(self, client, admin):
        category = client.post("/admin/categories", json={"season": "summer", "year": 2025}, headers=admin)
        assert category.status_code == 201
        category_id = category.json()["id"]

        duplicate = client.post("/admin/categories", json={"season": "summer", "year": 2025}, headers=admin)
        assert duplicate.status_code == 400

        product = client.post(
            "/admin/products",
            json={"name": "Linen Shirt", "price": 1000, "stock": 5, "category_id": category_id, "sizes": ["S", "M"]},
            headers=admin,
        )
        assert product.status_code == 201
        product_id = product.json()["id"]

        image = client.post(
            f"/admin/products/{product_id}/images",
            json={"image_url": "https://cdn.example/1.jpg", "is_primary": True},
            headers=admin,
        )
        assert image.status_code == 201

        [summary] = client.get("/admin/products", headers=admin).json()
        assert summary["image_count"] == 1
        assert summary["category_id"] == category_id

        [listed] = client.get(f"/admin/products/{product_id}/images", headers=admin).json()
        assert listed["is_primary"] is True

        deactivated = client.put(f"/admin/products/{product_id}/active", json={"is_active": False}, headers=admin)
        assert deactivated.status_code == 200
        assert client.delete(f"/admin/categories/{category_id}", headers=admin).status_code == 200
        assert client.get("/admin/products", headers=admin).json() == []

    def test_customer_cannot_manage_catalogue(self, client, customer):
        response = client.post("/admin/products", json={"name": "Hat", "price": 10}, headers=customer)
        assert response.status_code == 403
