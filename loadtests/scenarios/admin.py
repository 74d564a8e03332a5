"""Admin console load test scenario: stock the shelves, then read the dashboard."""

import uuid

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import product_data
from loadtests.helpers.state import AdminState


class CatalogueUpkeep(SequentialTaskSet):
    """Create Product -> Restock -> Dashboard -> Orders -> Metrics."""

    def on_start(self):
        self.state = AdminState(admin_id=f"lt-admin-{uuid.uuid4().hex[:8]}")

    @task
    def create_product(self):
        with self.client.post(
            "/api/admin/products",
            json=product_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/admin/products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["id"])
            else:
                resp.failure(f"Create product failed: {resp.status_code}")
                self.interrupt()

    @task
    def restock(self):
        self.client.put(
            f"/api/admin/products/{self.state.product_ids[-1]}",
            json={"stock": 500},
            headers=self.state.headers,
            name="PUT /api/admin/products/{id}",
        )

    @task
    def dashboard(self):
        self.client.get("/api/admin/dashboard", headers=self.state.headers, name="GET /api/admin/dashboard")

    @task
    def orders(self):
        self.client.get("/api/admin/orders", headers=self.state.headers, name="GET /api/admin/orders")

    @task
    def metrics(self):
        self.client.get(
            "/api/admin/metrics", params={"days": 7}, headers=self.state.headers, name="GET /api/admin/metrics"
        )

    @task
    def done(self):
        self.interrupt()


class AdminUser(HttpUser):
    wait_time = between(2, 5)
    weight = 1
    tasks = [CatalogueUpkeep]
