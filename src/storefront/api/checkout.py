"""Checkout endpoints: order creation and the PayU transaction callback."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from storefront.api.dependencies import CurrentUser, checkout_service, current_user
from storefront.api.schemas import CreateOrderRequest, CreateOrderResponse, GatewayParams
from storefront.checkout.resolution import DirectItem
from storefront.checkout.service import CheckoutService
from storefront.order.order import PaymentMethod

payment_router = APIRouter(prefix="/api/payment", tags=["payment"])


@payment_router.post(
    "/create-order",
    status_code=201,
    response_model=CreateOrderResponse,
    response_model_exclude_none=True,
)
async def create_order(
    body: CreateOrderRequest,
    user: CurrentUser = Depends(current_user),
    service: CheckoutService = Depends(checkout_service),
) -> CreateOrderResponse:
    direct_items = [
        DirectItem(product_id=i.product_id, quantity=i.quantity, size=i.size, color=i.color) for i in body.items or []
    ]
    result = service.create_order(
        customer=user.as_customer(),
        payment_method=body.payment_method,
        shipping_address=body.shipping_address.as_shipping_address(),
        direct_items=direct_items,
    )

    if result.mode == PaymentMethod.COD:
        return CreateOrderResponse(mode=result.mode.value, order_id=result.order_id)
    return CreateOrderResponse(
        mode=result.mode.value,
        gateway_params=GatewayParams(**result.payment_request.as_params()),
    )


@payment_router.post("/payu/callback")
async def payu_callback(
    request: Request,
    service: CheckoutService = Depends(checkout_service),
) -> RedirectResponse:
    """PayU posts here for both outcomes; the shopper is always redirected."""
    form = await request.form()
    outcome = service.handle_gateway_callback({key: str(value) for key, value in form.items()})
    return RedirectResponse(url=outcome.redirect_url, status_code=303)
