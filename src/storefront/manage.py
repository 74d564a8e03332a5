"""Storefront database management CLI.

Usage:
    storefront-manage setup-db          # Create all tables
    storefront-manage drop-db           # Drop all tables
    storefront-manage seed-catalogue    # Load the sample catalogue
"""

import argparse
import json
import sys

from protean.utils.globals import current_domain

SAMPLE_PRODUCTS = [
    {
        "name": "Classic Tee - Beige",
        "description": "A premium beige tee for everyday wear.",
        "price": 45.0,
        "original_price": 55.0,
        "stock": 50,
        "category": "Tops",
        "gender": "Men",
        "sizes": ["S", "M", "L", "XL"],
        "colors": ["Beige", "Black"],
        "tags": ["Bestseller", "Classic"],
        "images": ["https://images.unsplash.com/photo-1521572163474-6864f9cf17ab"],
    },
    {
        "name": "Lift Tee",
        "description": "Performance wear for serious lifting.",
        "price": 35.0,
        "original_price": 45.0,
        "stock": 100,
        "category": "Tops",
        "gender": "Women",
        "sizes": ["XS", "S", "M"],
        "colors": ["Pink", "White"],
        "tags": ["New", "Trending"],
        "images": ["https://images.unsplash.com/photo-1518459031867-a89b944bffe4"],
    },
    {
        "name": "Training Joggers",
        "description": "Tapered joggers with a brushed inner lining.",
        "price": 60.0,
        "original_price": 75.0,
        "stock": 30,
        "category": "Bottoms",
        "gender": "Men",
        "sizes": ["M", "L", "XL"],
        "colors": ["Black", "Grey"],
        "tags": ["Bestseller"],
        "images": ["https://images.unsplash.com/photo-1552902865-b72c031ac5ea"],
    },
    {
        "name": "Seamless Leggings",
        "description": "High-rise leggings that stay put.",
        "price": 55.0,
        "stock": 4,
        "category": "Bottoms",
        "gender": "Women",
        "sizes": ["XS", "S", "M", "L"],
        "colors": ["Black", "Olive"],
        "tags": ["New"],
        "images": ["https://images.unsplash.com/photo-1506629082955-511b1aa562c8"],
    },
    {
        "name": "Everyday Cap",
        "description": "Six-panel cotton cap.",
        "price": 20.0,
        "stock": 80,
        "category": "Accessories",
        "gender": "Unisex",
        "sizes": ["One Size"],
        "colors": ["Black", "Beige"],
        "tags": ["Classic"],
        "images": ["https://images.unsplash.com/photo-1588850561407-ed78c282e89b"],
    },
]


def _storefront():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_databases():
    """Create the storefront database schema."""
    from storefront.utils.db import setup_db

    domain = _storefront()
    print("Creating storefront database schema...")
    providers = setup_db(domain)
    print(f"  schema ready on: {', '.join(providers) or 'no SQL providers'}")
    print("Done.")


def drop_databases():
    """Drop the storefront database schema."""
    from storefront.utils.db import drop_db

    domain = _storefront()
    print("Dropping storefront database schema...")
    providers = drop_db(domain)
    print(f"  schema dropped on: {', '.join(providers) or 'no SQL providers'}")
    print("Done.")


def seed_catalogue(admin_id: str, products=None) -> list[str]:
    """Create the sample products through the admin command path.

    Must run inside a storefront domain context.
    """
    from storefront.catalogue.management import CreateProduct

    created = []
    for sample in products if products is not None else SAMPLE_PRODUCTS:
        fields = dict(sample)
        for attribute in ("sizes", "colors", "tags", "images"):
            if attribute in fields:
                fields[attribute] = json.dumps(fields[attribute])
        created.append(current_domain.process(CreateProduct(admin_id=admin_id, **fields), asynchronous=False))
    return created


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    seed_parser = subparsers.add_parser("seed-catalogue", help="Load the sample catalogue")
    seed_parser.add_argument(
        "--admin-id",
        default="system",
        help="User id recorded against the created products in the activity log",
    )

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    elif args.command == "seed-catalogue":
        domain = _storefront()
        with domain.domain_context():
            created = seed_catalogue(args.admin_id)
        print(f"Seeded {len(created)} products.")
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
