"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's Pydantic request
schemas (camelCase on the wire).
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = ["Tops", "Bottoms", "Outerwear", "Accessories"]
GENDERS = ["Men", "Women", "Unisex"]
SIZES = ["XS", "S", "M", "L", "XL"]
COLORS = ["Black", "White", "Beige", "Olive", "Grey", "Pink"]
TAGS = ["New", "Bestseller", "Classic", "Trending"]


def user_identity() -> dict:
    """A shopper identity as the upstream auth service would forward it."""
    return {
        "user_id": f"lt-{uuid.uuid4().hex[:12]}",
        "email": f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}",
        "name": fake.name(),
    }


def valid_phone() -> str:
    return f"9{random.randint(100000000, 999999999)}"


def address_data(is_default: bool = False) -> dict:
    """Generate an AddressRequest payload."""
    return {
        "name": fake.name()[:255],
        "phone": valid_phone(),
        "tag": random.choice(["HOME", "WORK", "OTHER"]),
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "zip": fake.zipcode()[:20],
        "isDefault": is_default,
    }


def shipping_address() -> dict:
    payload = address_data()
    payload.pop("isDefault")
    return payload


def product_data() -> dict:
    """Generate a ProductRequest payload."""
    price = round(random.uniform(15.0, 120.0), 2)
    return {
        "name": f"{fake.word().capitalize()} {random.choice(['Tee', 'Hoodie', 'Joggers', 'Cap', 'Shorts'])}",
        "description": fake.sentence(nb_words=12),
        "price": price,
        "originalPrice": round(price * 1.2, 2),
        "stock": random.randint(50, 500),
        "category": random.choice(CATEGORIES),
        "gender": random.choice(GENDERS),
        "sizes": random.sample(SIZES, k=3),
        "colors": random.sample(COLORS, k=2),
        "tags": random.sample(TAGS, k=1),
        "images": [fake.image_url()],
    }


def listing_query() -> dict:
    """Random filter and sort combination for the product listing."""
    params = {"page": 1, "limit": 12}
    if random.random() < 0.5:
        params["category"] = random.choice(CATEGORIES)
    if random.random() < 0.3:
        params["gender"] = random.choice(GENDERS)
    if random.random() < 0.3:
        params["sizes"] = ",".join(random.sample(SIZES, k=2))
    if random.random() < 0.3:
        params["sort"] = random.choice(["price-low", "price-high", "newest"])
    return params
