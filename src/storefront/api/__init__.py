from storefront.api.account import user_router
from storefront.api.admin import admin_router
from storefront.api.catalogue import product_router
from storefront.api.checkout import payment_router

__all__ = ["admin_router", "payment_router", "product_router", "user_router"]
