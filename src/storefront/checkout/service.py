"""Checkout orchestration.

``create_order`` resolves lines, prices them and takes one of two
payment paths:

* Cash on delivery: stock is taken and the order recorded as PROCESSING
  in one unit of work; a cart-sourced order empties the cart.
* Online: stock is only checked. The order is recorded as PENDING with a
  fresh transaction id and the signed gateway parameters are returned.

``handle_gateway_callback`` settles an online order when the gateway
posts back. Settlement only ever happens from payment PENDING, so a
repeated callback cannot take stock or send mail twice.
"""

import secrets
import time
from collections import Counter
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

from protean.core.unit_of_work import UnitOfWork
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.cart.queries import find_cart_for_user
from storefront.catalogue.product import Product
from storefront.checkout.pricing import compute_totals, ensure_payable
from storefront.checkout.resolution import DirectItem, ResolvedItems, resolve_items
from storefront.domain import logger
from storefront.errors import InsufficientStockError, NotFoundError, SignatureMismatchError, StorefrontError
from storefront.notifications.mailer import order_reference
from storefront.order.order import Order, OrderSource, PaymentMethod, PaymentStatus, ShippingAddress
from storefront.order.queries import find_by_transaction_id
from storefront.payments.gateway.port import PaymentGateway, PaymentRequest

MAX_TRANSACTION_ID_ATTEMPTS = 5
GATEWAY_SUCCESS = "success"


def generate_transaction_id() -> str:
    return f"TXN{int(time.time() * 1000)}{secrets.token_hex(4)}"


class CallbackReason(Enum):
    HASH_MISMATCH = "hash_mismatch"
    ORDER_NOT_FOUND = "order_not_found"
    TRANSACTION_FAILED = "transaction_failed"
    SERVER_ERROR = "server_error"


@dataclass(frozen=True)
class PaymentRedirects:
    """Frontend pages the shopper lands on after paying."""

    success_url: str
    failure_url: str

    def success(self, order_id) -> str:
        return f"{self.success_url}?{urlencode({'orderId': str(order_id)})}"

    def failure(self, reason: CallbackReason) -> str:
        return f"{self.failure_url}?{urlencode({'reason': reason.value})}"


@dataclass(frozen=True)
class Customer:
    user_id: str
    email: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class CheckoutResult:
    order_id: str
    mode: PaymentMethod
    payment_request: PaymentRequest | None = None


@dataclass(frozen=True)
class CallbackOutcome:
    success: bool
    redirect_url: str
    order_id: str | None = None
    reason: CallbackReason | None = None


class CheckoutService:
    def __init__(
        self,
        gateway: PaymentGateway,
        mailer,
        redirects: PaymentRedirects,
        transaction_ids: Callable[[], str] = generate_transaction_id,
    ):
        self.gateway = gateway
        self.mailer = mailer
        self.redirects = redirects
        self.transaction_ids = transaction_ids

    # -------------------------------------------------------------------
    # Order creation
    # -------------------------------------------------------------------
    def create_order(
        self,
        customer: Customer,
        payment_method: PaymentMethod | str,
        shipping_address: Mapping | None = None,
        direct_items: Sequence[DirectItem] | None = None,
    ) -> CheckoutResult:
        method = PaymentMethod(payment_method)
        resolved = resolve_items(customer.user_id, direct_items)
        totals = compute_totals(resolved.lines)
        ensure_payable(totals)
        address = ShippingAddress(**shipping_address) if shipping_address else None

        if method == PaymentMethod.COD:
            return self._place_cod_order(customer, resolved, totals, address)
        return self._place_online_order(customer, resolved, totals, address)

    def _place_cod_order(self, customer, resolved: ResolvedItems, totals, address) -> CheckoutResult:
        with UnitOfWork():
            order = Order.place(
                user_id=customer.user_id,
                lines=resolved.lines,
                pricing=totals.as_pricing(),
                payment_method=PaymentMethod.COD,
                shipping_address=address,
                source=resolved.source,
                customer_email=customer.email,
                customer_name=customer.name,
            )
            _take_stock(order)
            current_domain.repository_for(Order).add(order)
            if resolved.source == OrderSource.CART:
                _clear_cart(customer.user_id, order.id)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            payment_method=PaymentMethod.COD.value,
            source=resolved.source.value,
            total=order.total,
        )
        self.mailer.send_order_confirmation(customer.email, order.id, order.total)
        return CheckoutResult(order_id=str(order.id), mode=PaymentMethod.COD)

    def _place_online_order(self, customer, resolved: ResolvedItems, totals, address) -> CheckoutResult:
        _ensure_available(resolved.lines)
        transaction_id = self._unique_transaction_id()

        with UnitOfWork():
            order = Order.place(
                user_id=customer.user_id,
                lines=resolved.lines,
                pricing=totals.as_pricing(),
                payment_method=PaymentMethod.ONLINE,
                shipping_address=address,
                source=resolved.source,
                transaction_id=transaction_id,
                customer_email=customer.email,
                customer_name=customer.name,
            )
            current_domain.repository_for(Order).add(order)

        firstname = (customer.name or (address.name if address else "") or "Customer").split()[0]
        payment_request = self.gateway.build_payment_request(
            txnid=transaction_id,
            amount=order.total,
            productinfo=f"Order {order_reference(order.id)}",
            firstname=firstname,
            email=customer.email or "",
            phone=address.phone if address else "",
        )
        logger.info(
            "order_awaiting_payment",
            order_id=str(order.id),
            transaction_id=transaction_id,
            source=resolved.source.value,
            total=order.total,
        )
        return CheckoutResult(order_id=str(order.id), mode=PaymentMethod.ONLINE, payment_request=payment_request)

    def _unique_transaction_id(self) -> str:
        for _ in range(MAX_TRANSACTION_ID_ATTEMPTS):
            transaction_id = self.transaction_ids()
            if find_by_transaction_id(transaction_id) is None:
                return transaction_id
            logger.error("transaction_id_collision", transaction_id=transaction_id)
        raise StorefrontError("Could not allocate a unique transaction id")

    # -------------------------------------------------------------------
    # Gateway callback
    # -------------------------------------------------------------------
    def handle_gateway_callback(self, payload: Mapping) -> CallbackOutcome:
        """Settle the order named by a gateway callback and pick the redirect.

        Never raises: every failure becomes a failure redirect with a reason.
        """
        transaction_id = payload.get("txnid")
        try:
            if not self.gateway.verify_callback(payload):
                raise SignatureMismatchError(transaction_id)

            order = find_by_transaction_id(transaction_id) if transaction_id else None
            if order is None:
                logger.warning("payment_callback_order_not_found", transaction_id=transaction_id)
                return self._failure(CallbackReason.ORDER_NOT_FOUND)

            if payload.get("status") == GATEWAY_SUCCESS:
                return self._settle_success(order.id, payload.get("mihpayid"))
            return self._settle_failure(order.id, payload)
        except SignatureMismatchError:
            logger.warning("payment_callback_signature_mismatch", transaction_id=transaction_id)
            return self._failure(CallbackReason.HASH_MISMATCH)
        except Exception:
            logger.exception("payment_callback_error", transaction_id=transaction_id)
            return self._failure(CallbackReason.SERVER_ERROR)

    def _settle_success(self, order_id, gateway_payment_id) -> CallbackOutcome:
        with UnitOfWork():
            order = current_domain.repository_for(Order).get(order_id)
            settled = order.accepts_payment
            if settled:
                _take_stock(order, allow_shortfall=True)
                order.confirm_payment(gateway_payment_id)
                current_domain.repository_for(Order).add(order)
                if order.is_from_cart:
                    _clear_cart(order.user_id, order.id)

        if not settled:
            logger.info(
                "payment_callback_ignored",
                order_id=str(order.id),
                payment_status=order.payment_status,
                order_status=order.order_status,
            )
            return self._outcome_for(order)

        logger.info("payment_confirmed", order_id=str(order.id), gateway_payment_id=gateway_payment_id)
        self.mailer.send_order_confirmation(order.customer_email, order.id, order.total)
        return self._outcome_for(order)

    def _settle_failure(self, order_id, payload: Mapping) -> CallbackOutcome:
        with UnitOfWork():
            order = current_domain.repository_for(Order).get(order_id)
            if order.fail_payment(reason=payload.get("error_Message") or payload.get("status")):
                current_domain.repository_for(Order).add(order)
                logger.info("payment_failed", order_id=str(order.id), gateway_status=payload.get("status"))
            else:
                logger.info("payment_callback_duplicate", order_id=str(order.id), payment_status=order.payment_status)
        return self._outcome_for(order)

    def _outcome_for(self, order: Order) -> CallbackOutcome:
        if order.payment_status == PaymentStatus.PAID.value:
            return CallbackOutcome(success=True, redirect_url=self.redirects.success(order.id), order_id=str(order.id))
        reason = CallbackReason.TRANSACTION_FAILED
        return CallbackOutcome(
            success=False, redirect_url=self.redirects.failure(reason), order_id=str(order.id), reason=reason
        )

    def _failure(self, reason: CallbackReason) -> CallbackOutcome:
        return CallbackOutcome(success=False, redirect_url=self.redirects.failure(reason), reason=reason)


def _quantities_by_product(lines) -> Counter:
    quantities = Counter()
    for line in lines:
        quantities[str(line.product_id)] += line.quantity
    return quantities


def _load_product(product_repo, product_id) -> Product:
    try:
        return product_repo.get(product_id)
    except ObjectNotFoundError:
        raise NotFoundError("Product", product_id) from None


def _ensure_available(lines) -> None:
    product_repo = current_domain.repository_for(Product)
    for product_id, quantity in _quantities_by_product(lines).items():
        product = _load_product(product_repo, product_id)
        if not product.has_stock(quantity):
            raise InsufficientStockError(product.name, quantity, product.stock)


def _take_stock(order: Order, allow_shortfall: bool = False) -> None:
    product_repo = current_domain.repository_for(Product)
    for product_id, quantity in _quantities_by_product(order.items).items():
        product = _load_product(product_repo, product_id)
        taken = product.decrement_stock(quantity, order_id=str(order.id), allow_shortfall=allow_shortfall)
        if taken < quantity:
            logger.error(
                "stock_shortfall_after_payment",
                order_id=str(order.id),
                product_id=product_id,
                requested=quantity,
                taken=taken,
            )
        product_repo.add(product)


def _clear_cart(user_id, order_id) -> None:
    cart = find_cart_for_user(user_id)
    if cart is None or cart.is_empty:
        return
    cart.clear_items(order_id=str(order_id))
    current_domain.repository_for(ShoppingCart).add(cart)
