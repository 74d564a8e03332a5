"""Shopper endpoints: profile, address book, cart, wishlist and order history."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.accounts.addresses import AddAddress, RemoveAddress, SetDefaultAddress, list_addresses
from storefront.api.dependencies import CurrentUser, current_user
from storefront.api.schemas import (
    AddressRequest,
    AddressResponse,
    AddToCartRequest,
    CartLineResponse,
    CartResponse,
    IdResponse,
    OrderResponse,
    StatusResponse,
    UpdateCartItemRequest,
    UserResponse,
    WishlistEntryResponse,
    WishlistRequest,
    WishlistStatusResponse,
)
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartItem
from storefront.cart.queries import view_cart
from storefront.order.queries import order_for_user, orders_for_user
from storefront.wishlist.management import AddToWishlist, RemoveFromWishlist, view_wishlist, wishlist_status

user_router = APIRouter(prefix="/api/user", tags=["user"])


@user_router.get("/me", response_model=UserResponse)
async def me(user: CurrentUser = Depends(current_user)) -> UserResponse:
    return UserResponse(id=user.id, role=user.role, email=user.email, name=user.name)


# --- Addresses ---


@user_router.get("/addresses", response_model=list[AddressResponse])
async def get_addresses(user: CurrentUser = Depends(current_user)) -> list[AddressResponse]:
    return [AddressResponse.from_address(a) for a in list_addresses(user.id)]


@user_router.post("/addresses", status_code=201, response_model=IdResponse)
async def add_address(body: AddressRequest, user: CurrentUser = Depends(current_user)) -> IdResponse:
    command = AddAddress(
        user_id=user.id,
        name=body.name,
        phone=body.phone,
        tag=body.tag,
        street=body.street,
        city=body.city,
        state=body.state,
        postal_code=body.zip,
        is_default=body.is_default,
    )
    address_id = current_domain.process(command, asynchronous=False)
    return IdResponse(id=address_id)


@user_router.put("/addresses/{address_id}/default", response_model=StatusResponse)
async def set_default_address(address_id: str, user: CurrentUser = Depends(current_user)) -> StatusResponse:
    current_domain.process(SetDefaultAddress(user_id=user.id, address_id=address_id), asynchronous=False)
    return StatusResponse()


@user_router.delete("/addresses/{address_id}", response_model=StatusResponse)
async def delete_address(address_id: str, user: CurrentUser = Depends(current_user)) -> StatusResponse:
    current_domain.process(RemoveAddress(user_id=user.id, address_id=address_id), asynchronous=False)
    return StatusResponse(status="deleted")


# --- Cart ---


@user_router.get("/cart", response_model=CartResponse)
async def get_cart(user: CurrentUser = Depends(current_user)) -> CartResponse:
    return CartResponse(
        items=[
            CartLineResponse(
                id=line.item_id,
                product_id=line.product_id,
                name=line.name,
                price=line.price,
                images=line.images,
                size=line.size,
                color=line.color,
                quantity=line.quantity,
            )
            for line in view_cart(user.id)
        ]
    )


@user_router.post("/cart", status_code=201, response_model=IdResponse)
async def add_to_cart(body: AddToCartRequest, user: CurrentUser = Depends(current_user)) -> IdResponse:
    command = AddToCart(
        user_id=user.id,
        product_id=body.product_id,
        quantity=body.quantity,
        size=body.size,
        color=body.color,
    )
    item_id = current_domain.process(command, asynchronous=False)
    return IdResponse(id=item_id)


@user_router.patch("/cart/{item_id}", response_model=StatusResponse)
async def update_cart_item(
    item_id: str, body: UpdateCartItemRequest, user: CurrentUser = Depends(current_user)
) -> StatusResponse:
    current_domain.process(UpdateCartItem(user_id=user.id, item_id=item_id, quantity=body.quantity), asynchronous=False)
    return StatusResponse()


@user_router.delete("/cart/{item_id}", response_model=StatusResponse)
async def remove_from_cart(item_id: str, user: CurrentUser = Depends(current_user)) -> StatusResponse:
    current_domain.process(RemoveFromCart(user_id=user.id, item_id=item_id), asynchronous=False)
    return StatusResponse(status="removed")


# --- Wishlist ---


@user_router.get("/wishlist", response_model=list[WishlistEntryResponse])
async def get_wishlist(user: CurrentUser = Depends(current_user)) -> list[WishlistEntryResponse]:
    return [
        WishlistEntryResponse(product_id=e.product_id, name=e.name, price=e.price, image=e.image)
        for e in view_wishlist(user.id)
    ]


@user_router.post("/wishlist", status_code=201, response_model=StatusResponse)
async def add_to_wishlist(body: WishlistRequest, user: CurrentUser = Depends(current_user)) -> StatusResponse:
    current_domain.process(AddToWishlist(user_id=user.id, product_id=body.product_id), asynchronous=False)
    return StatusResponse(status="added")


@user_router.get("/wishlist/{product_id}", response_model=WishlistStatusResponse)
async def check_wishlist(product_id: str, user: CurrentUser = Depends(current_user)) -> WishlistStatusResponse:
    return WishlistStatusResponse(in_wishlist=wishlist_status(user.id, product_id))


@user_router.delete("/wishlist/{product_id}", response_model=StatusResponse)
async def remove_from_wishlist(product_id: str, user: CurrentUser = Depends(current_user)) -> StatusResponse:
    current_domain.process(RemoveFromWishlist(user_id=user.id, product_id=product_id), asynchronous=False)
    return StatusResponse(status="removed")


# --- Orders ---


@user_router.get("/orders", response_model=list[OrderResponse])
async def my_orders(user: CurrentUser = Depends(current_user)) -> list[OrderResponse]:
    return [OrderResponse.from_order(o) for o in orders_for_user(user.id)]


@user_router.get("/orders/{order_id}", response_model=OrderResponse)
async def my_order(order_id: str, user: CurrentUser = Depends(current_user)) -> OrderResponse:
    return OrderResponse.from_order(order_for_user(order_id, user.id))
