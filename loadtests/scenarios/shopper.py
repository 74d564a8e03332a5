"""Shopper load test scenarios.

``BrowsingUser`` only reads the catalogue. ``ShopperUser`` walks a full
cash-on-delivery journey; each step depends on the previous one.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import address_data, listing_query, shipping_address, user_identity
from loadtests.helpers.state import ShopperState


class BrowsingUser(HttpUser):
    """Anonymous catalogue traffic: listings, showcases and product pages."""

    wait_time = between(0.5, 2)
    weight = 3

    def on_start(self):
        self.product_ids = []

    @task(5)
    def browse_listing(self):
        with self.client.get(
            "/api/products", params=listing_query(), catch_response=True, name="GET /api/products"
        ) as resp:
            if resp.status_code == 200:
                self.product_ids = [p["id"] for p in resp.json()["products"]]
            else:
                resp.failure(f"Listing failed: {resp.status_code}")

    @task(2)
    def trending(self):
        self.client.get("/api/products/trending", name="GET /api/products/trending")

    @task(2)
    def bestsellers(self):
        self.client.get("/api/products/bestsellers", name="GET /api/products/bestsellers")

    @task(3)
    def product_detail(self):
        if not self.product_ids:
            return
        self.client.get(f"/api/products/{random.choice(self.product_ids)}", name="GET /api/products/{id}")


class CashOnDeliveryJourney(SequentialTaskSet):
    """Browse -> Save Address -> Add to Cart -> Review Cart -> Place COD Order -> View Order."""

    def on_start(self):
        self.state = ShopperState(**user_identity())

    @task
    def browse(self):
        with self.client.get(
            "/api/products", params={"limit": 24}, catch_response=True, name="GET /api/products"
        ) as resp:
            products = resp.json().get("products", []) if resp.status_code == 200 else []
            in_stock = [p for p in products if p["stock"] > 2]
            if not in_stock:
                resp.failure("No products in stock to buy")
                self.interrupt()
                return
            self.state.product_ids = [p["id"] for p in random.sample(in_stock, k=min(2, len(in_stock)))]

    @task
    def save_address(self):
        with self.client.post(
            "/api/user/addresses",
            json=address_data(is_default=True),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/user/addresses",
        ) as resp:
            if resp.status_code == 201:
                self.state.address_id = resp.json()["id"]
            else:
                resp.failure(f"Add address failed: {resp.status_code}")

    @task
    def add_to_cart(self):
        for product_id in self.state.product_ids:
            with self.client.post(
                "/api/user/cart",
                json={"productId": product_id, "quantity": 1},
                headers=self.state.headers,
                catch_response=True,
                name="POST /api/user/cart",
            ) as resp:
                if resp.status_code == 201:
                    self.state.cart_item_ids.append(resp.json()["id"])
                else:
                    resp.failure(f"Add to cart failed: {resp.status_code}")

    @task
    def review_cart(self):
        self.client.get("/api/user/cart", headers=self.state.headers, name="GET /api/user/cart")

    @task
    def place_order(self):
        with self.client.post(
            "/api/payment/create-order",
            json={"paymentMethod": "COD", "shippingAddress": shipping_address()},
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/payment/create-order",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["orderId"])
            else:
                resp.failure(f"Create order failed: {resp.status_code}")
                self.interrupt()

    @task
    def view_order(self):
        self.client.get(
            f"/api/user/orders/{self.state.order_ids[-1]}",
            headers=self.state.headers,
            name="GET /api/user/orders/{id}",
        )

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    wait_time = between(1, 3)
    weight = 1
    tasks = [CashOnDeliveryJourney]
