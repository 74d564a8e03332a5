import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is initialized."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture()
def make_product():
    """Persist a product and return it. Keyword arguments override the defaults."""
    from storefront.catalogue.product import Product

    def _make(**overrides):
        fields = {
            "name": "Classic Tee",
            "price": 50.0,
            "stock": 10,
            "category": "Tops",
            "gender": "Men",
            "sizes": ["S", "M", "L"],
            "colors": ["Black"],
            "tags": [],
            "images": ["https://images.test/tee.jpg"],
        }
        fields.update(overrides)
        product = Product.create(**fields)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def gateway():
    from storefront.payments.gateway import FakeGateway

    return FakeGateway()


@pytest.fixture()
def email():
    from storefront.notifications.fake_email import FakeEmailAdapter

    return FakeEmailAdapter()


@pytest.fixture()
def mailer(email):
    from storefront.notifications.mailer import OrderMailer

    return OrderMailer(email)


@pytest.fixture()
def redirects():
    from storefront.checkout.service import PaymentRedirects

    return PaymentRedirects(
        success_url="http://shop.test/order-success",
        failure_url="http://shop.test/payment-failed",
    )


@pytest.fixture()
def checkout(gateway, mailer, redirects):
    from storefront.checkout.service import CheckoutService

    return CheckoutService(gateway=gateway, mailer=mailer, redirects=redirects)


@pytest.fixture()
def customer():
    from storefront.checkout.service import Customer

    return Customer(user_id="user-1", email="asha@example.com", name="Asha Rao")


@pytest.fixture()
def shipping_address():
    return {
        "name": "Asha Rao",
        "phone": "9876543210",
        "street": "12 Park Street",
        "city": "Pune",
        "state": "MH",
        "postal_code": "411001",
        "tag": "HOME",
    }
