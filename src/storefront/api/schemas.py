"""Pydantic request/response schemas for the storefront API.

These are the external contracts (camelCase on the wire) and stay
separate from the Protean commands and aggregates behind them.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusResponse(ApiModel):
    status: str = "ok"


class IdResponse(ApiModel):
    id: str


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductResponse(ApiModel):
    id: str
    name: str
    description: str | None = None
    price: float
    original_price: float | None = None
    stock: int
    category: str | None = None
    gender: str | None = None
    sizes: list[str] = []
    colors: list[str] = []
    tags: list[str] = []
    images: list[str] = []
    created_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            original_price=product.original_price,
            stock=product.stock,
            category=product.category,
            gender=product.gender,
            sizes=product.size_list,
            colors=product.color_list,
            tags=product.tag_list,
            images=product.image_list,
            created_at=product.created_at,
        )


class ProductPageResponse(ApiModel):
    total: int
    page: int
    total_pages: int
    products: list[ProductResponse]


class ProductRequest(ApiModel):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Classic Tee - Beige",
                    "price": 45.0,
                    "originalPrice": 55.0,
                    "stock": 50,
                    "category": "Tops",
                    "gender": "Men",
                    "sizes": ["S", "M", "L"],
                    "colors": ["Beige"],
                    "tags": ["Bestseller"],
                    "images": ["https://images.example.com/tee.jpg"],
                }
            ]
        },
    )

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(ge=0)
    original_price: float | None = Field(default=None, ge=0)
    stock: int = Field(default=0, ge=0)
    category: str | None = None
    gender: str | None = None
    sizes: list[str] = []
    colors: list[str] = []
    tags: list[str] = []
    images: list[str] = []


class ProductUpdateRequest(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    original_price: float | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    category: str | None = None
    gender: str | None = None
    sizes: list[str] | None = None
    colors: list[str] | None = None
    tags: list[str] | None = None
    images: list[str] | None = None


# ---------------------------------------------------------------------------
# Cart, wishlist and addresses
# ---------------------------------------------------------------------------
class AddToCartRequest(ApiModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)
    size: str | None = None
    color: str | None = None


class UpdateCartItemRequest(ApiModel):
    quantity: int = Field(ge=1)


class CartLineResponse(ApiModel):
    id: str
    product_id: str
    name: str
    price: float
    images: list[str]
    size: str
    color: str
    quantity: int


class CartResponse(ApiModel):
    items: list[CartLineResponse]


class WishlistRequest(ApiModel):
    product_id: str


class WishlistEntryResponse(ApiModel):
    product_id: str
    name: str
    price: float
    image: str | None = None


class WishlistStatusResponse(ApiModel):
    in_wishlist: bool


class AddressFields(ApiModel):
    name: str = Field(min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=20)
    street: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    zip: str = Field(min_length=1, max_length=20)
    tag: str | None = Field(default=None, max_length=20)

    def as_shipping_address(self) -> dict:
        return {
            "name": self.name,
            "phone": self.phone,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "postal_code": self.zip,
            "tag": self.tag,
        }


class AddressRequest(AddressFields):
    is_default: bool = False


class AddressResponse(ApiModel):
    id: str
    name: str
    phone: str | None = None
    tag: str | None = None
    street: str
    city: str
    state: str | None = None
    zip: str
    is_default: bool

    @classmethod
    def from_address(cls, address) -> "AddressResponse":
        return cls(
            id=str(address.id),
            name=address.name,
            phone=address.phone,
            tag=address.tag,
            street=address.street,
            city=address.city,
            state=address.state,
            zip=address.postal_code,
            is_default=address.is_default,
        )


class UserResponse(ApiModel):
    id: str
    role: str
    email: str | None = None
    name: str | None = None


# ---------------------------------------------------------------------------
# Orders and checkout
# ---------------------------------------------------------------------------
class OrderItemResponse(ApiModel):
    id: str
    product_id: str
    product_name: str | None = None
    quantity: int
    price: float
    size: str | None = None
    color: str | None = None


class ShippingAddressResponse(ApiModel):
    name: str
    phone: str | None = None
    street: str
    city: str
    state: str | None = None
    zip: str
    tag: str | None = None


class OrderResponse(ApiModel):
    id: str
    user_id: str
    items: list[OrderItemResponse]
    subtotal: float
    shipping: float
    tax: float
    total: float
    payment_method: str
    order_status: str
    payment_status: str
    transaction_id: str | None = None
    gateway_payment_id: str | None = None
    shipping_address: ShippingAddressResponse | None = None
    metadata: dict
    created_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        address = order.shipping_address
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    quantity=item.quantity,
                    price=item.price,
                    size=item.size,
                    color=item.color,
                )
                for item in order.items
            ],
            subtotal=order.pricing.subtotal,
            shipping=order.pricing.shipping,
            tax=order.pricing.tax,
            total=order.total,
            payment_method=order.payment_method,
            order_status=order.order_status,
            payment_status=order.payment_status,
            transaction_id=order.transaction_id,
            gateway_payment_id=order.gateway_payment_id,
            shipping_address=(
                ShippingAddressResponse(
                    name=address.name,
                    phone=address.phone,
                    street=address.street,
                    city=address.city,
                    state=address.state,
                    zip=address.postal_code,
                    tag=address.tag,
                )
                if address
                else None
            ),
            metadata={"source": order.source},
            created_at=order.created_at,
        )


class DirectItemRequest(ApiModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)
    size: str | None = None
    color: str | None = None


class CreateOrderRequest(ApiModel):
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "paymentMethod": "COD",
                    "shippingAddress": {
                        "name": "Asha Rao",
                        "phone": "9876543210",
                        "street": "12 Park Street",
                        "city": "Pune",
                        "state": "MH",
                        "zip": "411001",
                    },
                }
            ]
        },
    )

    payment_method: Literal["COD", "ONLINE"]
    shipping_address: AddressFields
    items: list[DirectItemRequest] | None = None


class GatewayParams(ApiModel):
    key: str
    txnid: str
    amount: str
    productinfo: str
    firstname: str
    email: str
    phone: str
    success_url: str
    failure_url: str
    hash: str


class CreateOrderResponse(ApiModel):
    success: bool = True
    mode: str
    order_id: str | None = None
    gateway_params: GatewayParams | None = None


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
class OrderSummaryResponse(ApiModel):
    id: str
    user_id: str
    customer_name: str | None = None
    total: float
    payment_method: str
    order_status: str
    payment_status: str
    created_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderSummaryResponse":
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            customer_name=order.customer_name,
            total=order.total,
            payment_method=order.payment_method,
            order_status=order.order_status,
            payment_status=order.payment_status,
            created_at=order.created_at,
        )


class DashboardResponse(ApiModel):
    revenue: float
    total_orders: int
    low_stock_count: int
    low_stock: list[ProductResponse]
    recent_orders: list[OrderSummaryResponse]


class DailyRevenue(ApiModel):
    date: str
    revenue: float


class MetricsResponse(ApiModel):
    days: int
    order_count: int
    revenue: float
    daily: list[DailyRevenue]


class OrderPageResponse(ApiModel):
    total: int
    page: int
    total_pages: int
    orders: list[OrderSummaryResponse]


class UpdateOrderStatusRequest(ApiModel):
    status: Literal["PENDING", "PROCESSING", "SHIPPED", "DELIVERED", "CANCELLED"]


class RefundLineRequest(ApiModel):
    order_item_id: str
    quantity: int = Field(ge=1)


class RefundRequest(ApiModel):
    items: list[RefundLineRequest] = Field(min_length=1)
    reason: str | None = None


class RefundItemResponse(ApiModel):
    order_item_id: str
    quantity: int
    unit_price: float


class RefundResponse(ApiModel):
    id: str
    order_id: str
    amount: float
    reason: str | None = None
    status: str
    gateway_refund_id: str | None = None
    items: list[RefundItemResponse]
    created_at: datetime | None = None

    @classmethod
    def from_refund(cls, refund) -> "RefundResponse":
        return cls(
            id=str(refund.id),
            order_id=str(refund.order_id),
            amount=refund.amount,
            reason=refund.reason,
            status=refund.status,
            gateway_refund_id=refund.gateway_refund_id,
            items=[
                RefundItemResponse(order_item_id=str(i.order_item_id), quantity=i.quantity, unit_price=i.unit_price)
                for i in refund.items
            ],
            created_at=refund.created_at,
        )


class CustomerResponse(ApiModel):
    user_id: str
    email: str | None = None
    name: str | None = None
    order_count: int
    total_spent: float
    last_order_at: datetime | None = None
    notes: str | None = None


class CustomerNotesRequest(ApiModel):
    notes: str = ""


class ActivityResponse(ApiModel):
    id: str
    user_id: str
    action: str
    details: str | None = None
    created_at: datetime | None = None
