import pytest

from storefront.catalogue.query import get_product


@pytest.fixture()
def placed_order(client, shopper, address_payload, make_product):
    tee = make_product(name="Classic Tee", price=40.0, stock=10)
    client.post("/api/user/cart", json={"productId": str(tee.id), "quantity": 2}, headers=shopper)
    body = client.post(
        "/api/payment/create-order",
        json={"paymentMethod": "COD", "shippingAddress": address_payload},
        headers=shopper,
    ).json()
    return client.get(f"/api/user/orders/{body['orderId']}", headers=shopper).json()


class TestAccess:
    def test_requires_admin_role(self, client, shopper):
        response = client.get("/api/admin/dashboard", headers=shopper)
        assert response.status_code == 403
        assert response.json()["error"] == "Admin access required"

    def test_requires_identity(self, client):
        assert client.get("/api/admin/dashboard").status_code == 401


class TestDashboard:
    def test_dashboard(self, client, admin, placed_order, make_product):
        make_product(name="Almost Gone", stock=1)
        body = client.get("/api/admin/dashboard", headers=admin).json()

        assert body["totalOrders"] == 1
        assert body["revenue"] == 0.0
        assert body["lowStockCount"] == 1
        assert body["recentOrders"][0]["id"] == placed_order["id"]

    def test_metrics(self, client, admin):
        body = client.get("/api/admin/metrics", params={"days": 7}, headers=admin).json()
        assert body == {"days": 7, "orderCount": 0, "revenue": 0.0, "daily": []}

    def test_activity(self, client, admin):
        client.post("/api/admin/products", json={"name": "Tee", "price": 10.0}, headers=admin)
        [entry] = client.get("/api/admin/activity", headers=admin).json()
        assert entry["action"] == "CREATE_PRODUCT"
        assert entry["userId"] == "admin-1"


class TestOrders:
    def test_list(self, client, admin, placed_order):
        body = client.get("/api/admin/orders", params={"status": "PROCESSING"}, headers=admin).json()
        assert body["total"] == 1
        assert body["orders"][0]["customerName"] == "Asha Rao"

    def test_status_update(self, client, admin, placed_order):
        response = client.patch(
            f"/api/admin/orders/{placed_order['id']}/status", json={"status": "SHIPPED"}, headers=admin
        )
        assert response.status_code == 200
        assert response.json() == {"status": "SHIPPED"}

    def test_invalid_status_transition(self, client, admin, placed_order):
        response = client.patch(
            f"/api/admin/orders/{placed_order['id']}/status", json={"status": "DELIVERED"}, headers=admin
        )
        assert response.status_code == 400
        assert response.json()["error_type"] == "InvalidStatusTransitionError"

    def test_unknown_status_value(self, client, admin, placed_order):
        response = client.patch(
            f"/api/admin/orders/{placed_order['id']}/status", json={"status": "LOST"}, headers=admin
        )
        assert response.status_code == 422


class TestRefunds:
    def test_refund_and_list(self, client, admin, placed_order):
        item_id = placed_order["items"][0]["id"]
        response = client.post(
            f"/api/admin/orders/{placed_order['id']}/refund",
            json={"items": [{"orderItemId": item_id, "quantity": 1}], "reason": "Too small"},
            headers=admin,
        )

        assert response.status_code == 201
        refund = response.json()
        assert refund["amount"] == 40.0
        assert refund["status"] == "COMPLETED"
        assert refund["gatewayRefundId"].startswith("re_")

        [listed] = client.get(f"/api/admin/orders/{placed_order['id']}/refunds", headers=admin).json()
        assert listed["id"] == refund["id"]

    def test_over_refund(self, client, admin, placed_order):
        item_id = placed_order["items"][0]["id"]
        response = client.post(
            f"/api/admin/orders/{placed_order['id']}/refund",
            json={"items": [{"orderItemId": item_id, "quantity": 3}]},
            headers=admin,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Cannot refund more items than purchased"
        assert client.get(f"/api/admin/orders/{placed_order['id']}/refunds", headers=admin).json() == []

    def test_repeated_lines_cannot_exceed_purchase(self, client, admin, placed_order):
        item_id = placed_order["items"][0]["id"]
        response = client.post(
            f"/api/admin/orders/{placed_order['id']}/refund",
            json={"items": [{"orderItemId": item_id, "quantity": 2}, {"orderItemId": item_id, "quantity": 2}]},
            headers=admin,
        )
        assert response.status_code == 400
        assert response.json()["error_type"] == "OverRefundError"

    def test_unknown_order(self, client, admin):
        response = client.post(
            "/api/admin/orders/missing/refund", json={"items": [{"orderItemId": "x", "quantity": 1}]}, headers=admin
        )
        assert response.status_code == 404


class TestProducts:
    def test_create_update_delete(self, client, admin):
        created = client.post(
            "/api/admin/products",
            json={"name": "Hoodie", "price": 70.0, "stock": 5, "sizes": ["M", "L"], "tags": ["New"]},
            headers=admin,
        )
        assert created.status_code == 201
        product_id = created.json()["id"]
        assert created.json()["sizes"] == ["M", "L"]

        updated = client.put(f"/api/admin/products/{product_id}", json={"stock": 50}, headers=admin)
        assert updated.json()["stock"] == 50
        assert updated.json()["price"] == 70.0
        assert get_product(product_id).stock == 50

        assert client.delete(f"/api/admin/products/{product_id}", headers=admin).status_code == 200
        assert client.get(f"/api/products/{product_id}").status_code == 404

    def test_negative_price(self, client, admin):
        assert client.post("/api/admin/products", json={"name": "X", "price": -1}, headers=admin).status_code == 422


class TestCustomers:
    def test_customers_and_notes(self, client, admin, placed_order):
        response = client.put("/api/admin/customers/user-1/notes", json={"notes": "Gift wrap"}, headers=admin)
        assert response.status_code == 200

        [customer] = client.get("/api/admin/customers", headers=admin).json()
        assert customer["userId"] == "user-1"
        assert customer["orderCount"] == 1
        assert customer["email"] == "asha@example.com"
        assert customer["notes"] == "Gift wrap"
