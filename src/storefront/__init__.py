"""Storefront: catalogue, cart, checkout and order management backend."""
