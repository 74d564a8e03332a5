"""Runtime settings for the storefront API.

Protean's own configuration (databases, brokers, event store) lives in
``domain.toml``. Everything the application layer needs to talk to the
outside world is read here from ``STOREFRONT_*`` environment variables.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", env_file=".env", extra="ignore")

    # PayU
    payment_backend: str = "payu"
    payu_merchant_key: str = ""
    payu_merchant_salt: str = ""
    payu_payment_url: str = "https://test.payu.in/_payment"
    payu_refund_url: str = "https://test.payu.in/merchant/postservice.php?form=2"
    gateway_timeout_seconds: float = 10.0

    # Public URLs
    api_base_url: str = "http://localhost:8000"
    frontend_url: str = "http://localhost:5173"

    # Email
    email_backend: str = "smtp"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    email_sender: str = "Storefront <no-reply@storefront.local>"
    smtp_timeout_seconds: float = 10.0

    cors_origins: list[str] = ["*"]

    @property
    def payment_callback_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/api/payment/payu/callback"

    @property
    def payment_success_redirect(self) -> str:
        return f"{self.frontend_url.rstrip('/')}/order-success"

    @property
    def payment_failure_redirect(self) -> str:
        return f"{self.frontend_url.rstrip('/')}/payment-failed"


@lru_cache
def get_settings() -> Settings:
    return Settings()
