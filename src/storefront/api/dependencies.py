"""FastAPI dependencies: caller identity and service wiring.

Tokens are verified upstream; the gateway in front of this service
forwards the resolved identity in ``X-User-*`` headers.
"""

from dataclasses import dataclass

from fastapi import BackgroundTasks, Depends, Header, Request

from storefront.checkout.service import CheckoutService, Customer
from storefront.errors import ForbiddenError, UnauthorizedError
from storefront.notifications.mailer import OrderMailer
from storefront.refund.issuing import RefundService
from storefront.utils.logging import add_context

ADMIN_ROLE = "ADMIN"
CUSTOMER_ROLE = "CUSTOMER"


@dataclass(frozen=True)
class CurrentUser:
    id: str
    role: str = CUSTOMER_ROLE
    email: str | None = None
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    def as_customer(self) -> Customer:
        return Customer(user_id=self.id, email=self.email, name=self.name)


def current_user(
    x_user_id: str | None = Header(default=None),
    x_user_role: str = Header(default=CUSTOMER_ROLE),
    x_user_email: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
) -> CurrentUser:
    if not x_user_id:
        raise UnauthorizedError()
    add_context(user_id=x_user_id)
    return CurrentUser(id=x_user_id, role=x_user_role.upper(), email=x_user_email, name=x_user_name)


def require_admin(user: CurrentUser = Depends(current_user)) -> CurrentUser:
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user


class DeferredMailer:
    """Hands confirmation emails to a background task run after the response."""

    def __init__(self, background_tasks: BackgroundTasks, mailer: OrderMailer):
        self.background_tasks = background_tasks
        self.mailer = mailer

    def send_order_confirmation(self, email, order_id, total) -> None:
        self.background_tasks.add_task(self.mailer.send_order_confirmation, email, order_id, total)


def checkout_service(request: Request, background_tasks: BackgroundTasks) -> CheckoutService:
    state = request.app.state
    return CheckoutService(
        gateway=state.gateway,
        mailer=DeferredMailer(background_tasks, state.mailer),
        redirects=state.redirects,
    )


def refund_service(request: Request) -> RefundService:
    return RefundService(gateway=request.app.state.gateway)
