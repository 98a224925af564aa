"""Ordering load test scenarios.

Three stateful SequentialTaskSet journeys: a wallet-pay purchase through
slip verification, a cash-on-delivery purchase through delivery, and a
browsing customer who edits the cart and leaves. Every journey stocks its
own product through the admin API, so the admin id in ``LOADTEST_ADMIN_ID``
must hold the admin role (``python src/manage.py grant-role <id> admin``).
"""

import os

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    cart_item_data,
    checkout_data,
    customer_id,
    payment_slip_data,
    product_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState

ADMIN_ID = os.getenv("LOADTEST_ADMIN_ID", "admin-001")


class ShopperJourney(SequentialTaskSet):
    """Common steps: stock a product as admin, then fill the cart as a fresh customer."""

    def on_start(self):
        self.state = ShopperState(customer_id=customer_id())

    @property
    def customer(self) -> dict:
        return {"X-User-Id": self.state.customer_id}

    @property
    def admin(self) -> dict:
        return {"X-User-Id": ADMIN_ID}

    def stock_product(self):
        payload = product_data()
        with self.client.post(
            "/admin/products",
            json=payload,
            headers=self.admin,
            catch_response=True,
            name="POST /admin/products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product.product_id = resp.json()["id"]
                self.state.product.sizes = payload["sizes"]
                self.state.product.colors = payload["colors"]
            else:
                resp.failure(f"Create product failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    def add_item(self):
        product = self.state.product
        with self.client.post(
            "/cart/items",
            json=cart_item_data(product.product_id, product.sizes, product.colors),
            headers=self.customer,
            catch_response=True,
            name="POST /cart/items",
        ) as resp:
            if resp.status_code == 201:
                self.state.item_ids.append(resp.json()["item_id"])
            else:
                resp.failure(f"Add cart item failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    def view_total(self):
        with self.client.get("/cart/total", headers=self.customer, catch_response=True, name="GET /cart/total") as resp:
            if resp.status_code != 200:
                resp.failure(f"Cart total failed: {resp.status_code}: {extract_error_detail(resp)}")

    def checkout(self, payment_method):
        with self.client.post(
            "/checkout",
            json=checkout_data(payment_method),
            headers=self.customer,
            catch_response=True,
            name="POST /checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["order_id"]
            else:
                resp.failure(f"Checkout failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    def set_status(self, status):
        with self.client.put(
            f"/admin/orders/{self.state.order_id}/status",
            json={"status": status},
            headers=self.admin,
            catch_response=True,
            name="PUT /admin/orders/{id}/status",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Set status {status} failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()


class WalletPayJourney(ShopperJourney):
    """Stock -> Add Items -> Total -> Checkout (wallet-pay) -> Upload Slip -> Admin Verifies.

    Generates events: OrderCreated, PaymentSlipUploaded, PaymentSlipReviewed,
    OrderStatusChanged (paid), plus the notifications they trigger.
    """

    @task
    def create_product(self):
        self.stock_product()

    @task
    def add_first_item(self):
        self.add_item()

    @task
    def add_second_item(self):
        self.add_item()

    @task
    def cart_total(self):
        self.view_total()

    @task
    def place_order(self):
        self.checkout("wallet-pay")

    @task
    def upload_slip(self):
        with self.client.post(
            f"/orders/{self.state.order_id}/payment-slips",
            json=payment_slip_data(self.state.order_id),
            headers=self.customer,
            catch_response=True,
            name="POST /orders/{id}/payment-slips",
        ) as resp:
            if resp.status_code == 201:
                self.state.slip_id = resp.json()["slip_id"]
            else:
                resp.failure(f"Upload slip failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def verify_slip(self):
        with self.client.put(
            f"/admin/payment-slips/{self.state.slip_id}",
            json={"verified": True},
            headers=self.admin,
            catch_response=True,
            name="PUT /admin/payment-slips/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Verify slip failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CashOnDeliveryJourney(ShopperJourney):
    """Stock -> Add Item -> Checkout (cash-on-delivery) -> Confirm -> Ship -> Deliver."""

    @task
    def create_product(self):
        self.stock_product()

    @task
    def add_first_item(self):
        self.add_item()

    @task
    def place_order(self):
        self.checkout("cash-on-delivery")

    @task
    def confirm(self):
        self.set_status("confirmed")

    @task
    def ship(self):
        self.set_status("shipped")

    @task
    def deliver(self):
        self.set_status("delivered")

    @task
    def done(self):
        self.interrupt()


class CartBrowsingJourney(ShopperJourney):
    """Stock -> Add Items -> Change Quantity -> Remove Item -> Leave.

    Models a browsing customer who changes their mind and never checks out.
    """

    @task
    def create_product(self):
        self.stock_product()

    @task
    def add_items(self):
        self.add_item()
        self.add_item()

    @task
    def change_quantity(self):
        item_id = self.state.item_ids[0]
        with self.client.put(
            f"/cart/items/{item_id}",
            json={"quantity": 4},
            headers=self.customer,
            catch_response=True,
            name="PUT /cart/items/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update quantity failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def remove_item(self):
        item_id = self.state.item_ids[-1]
        with self.client.delete(
            f"/cart/items/{item_id}",
            headers=self.customer,
            catch_response=True,
            name="DELETE /cart/items/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Remove item failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def view_cart(self):
        with self.client.get("/cart", headers=self.customer, catch_response=True, name="GET /cart") as resp:
            if resp.status_code != 200:
                resp.failure(f"View cart failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    """Locust user simulating customer and admin ordering traffic.

    Weighted distribution:
    - 40% Wallet-pay purchase with slip verification
    - 30% Cash-on-delivery purchase through delivery
    - 30% Cart browsing without checkout
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        WalletPayJourney: 4,
        CashOnDeliveryJourney: 3,
        CartBrowsingJourney: 3,
    }


class AdminDashboardUser(HttpUser):
    """Locust user polling the admin read endpoints."""

    wait_time = between(2.0, 5.0)

    @property
    def admin(self) -> dict:
        return {"X-User-Id": ADMIN_ID}

    @task(3)
    def list_orders(self):
        self.client.get("/admin/orders?limit=20", headers=self.admin, name="GET /admin/orders")

    @task(2)
    def unverified_slips(self):
        self.client.get(
            "/admin/payment-slips/unverified", headers=self.admin, name="GET /admin/payment-slips/unverified"
        )

    @task(1)
    def metrics(self):
        self.client.get("/admin/metrics", headers=self.admin, name="GET /admin/metrics")
