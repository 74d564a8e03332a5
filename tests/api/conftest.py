import pytest
from fastapi.testclient import TestClient

from storefront.api.app import build_app
from storefront.config import Settings


@pytest.fixture()
def settings():
    return Settings(
        payment_backend="fake",
        email_backend="fake",
        api_base_url="http://testserver",
        frontend_url="http://shop.test",
    )


@pytest.fixture()
def client(settings, gateway, email):
    return TestClient(build_app(settings, gateway=gateway, email=email))


@pytest.fixture()
def shopper():
    """Identity headers the upstream auth service forwards for a signed-in shopper."""
    return {"X-User-Id": "user-1", "X-User-Email": "asha@example.com", "X-User-Name": "Asha Rao"}


@pytest.fixture()
def other_shopper():
    return {"X-User-Id": "user-2", "X-User-Email": "ravi@example.com"}


@pytest.fixture()
def admin():
    return {"X-User-Id": "admin-1", "X-User-Role": "ADMIN"}


@pytest.fixture()
def address_payload():
    return {
        "name": "Asha Rao",
        "phone": "9876543210",
        "street": "12 Park Street",
        "city": "Pune",
        "state": "MH",
        "zip": "411001",
    }
