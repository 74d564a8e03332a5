"""Storefront FastAPI application.

Commands are processed synchronously inside a per-request domain context.
The app is built by a factory so that importing this module (which
Protean does while discovering domain elements) has no side effects.

Usage:
    uvicorn storefront.api.app:create_app --factory --host 0.0.0.0 --port 8000 --reload
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api.account import user_router
from storefront.api.admin import admin_router
from storefront.api.catalogue import product_router
from storefront.api.checkout import payment_router
from storefront.api.errors import register_error_handlers
from storefront.checkout.service import PaymentRedirects
from storefront.config import Settings, get_settings
from storefront.domain import storefront
from storefront.notifications.email_port import EmailPort
from storefront.notifications.mailer import OrderMailer, build_email_adapter
from storefront.payments.gateway import PaymentGateway, build_gateway
from storefront.utils.logging import add_context, clear_context, configure_logging


def build_app(
    settings: Settings,
    gateway: PaymentGateway | None = None,
    email: EmailPort | None = None,
) -> FastAPI:
    """Assemble the API around an initialized domain.

    ``gateway`` and ``email`` default to the adapters named by ``settings``.
    """
    app = FastAPI(
        title="Storefront API",
        description="Catalogue, cart, checkout with PayU payments, and admin console",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and tag log lines with a request id."""
        clear_context()
        add_context(request_id=request.headers.get("x-request-id") or uuid.uuid4().hex)
        with storefront.domain_context():
            response = await call_next(request)
        return response

    register_error_handlers(app)

    app.include_router(product_router)
    app.include_router(user_router)
    app.include_router(payment_router)
    app.include_router(admin_router)

    app.state.settings = settings
    app.state.gateway = gateway or build_gateway(settings)
    app.state.mailer = OrderMailer(email or build_email_adapter(settings))
    app.state.redirects = PaymentRedirects(
        success_url=settings.payment_success_redirect,
        failure_url=settings.payment_failure_redirect,
    )

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app


def create_app() -> FastAPI:
    """Production entry point: logging, domain and adapters from the environment."""
    configure_logging()
    storefront.init()
    return build_app(get_settings())
