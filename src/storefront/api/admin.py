"""Admin console endpoints. Every route requires the ADMIN role."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.admin.activity import recent_activity
from storefront.admin.customers import UpdateCustomerNotes, list_customers
from storefront.admin.dashboard import METRICS_WINDOW_DAYS, dashboard_stats, sales_metrics
from storefront.api.dependencies import CurrentUser, refund_service, require_admin
from storefront.api.schemas import (
    ActivityResponse,
    CustomerNotesRequest,
    CustomerResponse,
    DailyRevenue,
    DashboardResponse,
    IdResponse,
    MetricsResponse,
    OrderPageResponse,
    OrderSummaryResponse,
    ProductRequest,
    ProductResponse,
    ProductUpdateRequest,
    RefundRequest,
    RefundResponse,
    StatusResponse,
    UpdateOrderStatusRequest,
)
from storefront.catalogue.management import CreateProduct, RemoveProduct, UpdateProduct
from storefront.catalogue.query import get_product
from storefront.order.queries import get_order, list_orders
from storefront.order.status import ChangeOrderStatus
from storefront.refund.issuing import RefundLine, RefundService, refunds_for_order

admin_router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _json_list(values: list[str] | None) -> str | None:
    return json.dumps(values) if values is not None else None


# --- Dashboard ---


@admin_router.get("/dashboard", response_model=DashboardResponse)
async def dashboard() -> DashboardResponse:
    stats = dashboard_stats()
    return DashboardResponse(
        revenue=stats.revenue,
        total_orders=stats.total_orders,
        low_stock_count=stats.low_stock_count,
        low_stock=[ProductResponse.from_product(p) for p in stats.low_stock],
        recent_orders=[OrderSummaryResponse.from_order(o) for o in stats.recent_orders],
    )


@admin_router.get("/metrics", response_model=MetricsResponse)
async def metrics(days: int = Query(default=METRICS_WINDOW_DAYS, ge=1, le=365)) -> MetricsResponse:
    result = sales_metrics(days=days)
    return MetricsResponse(
        days=result.days,
        order_count=result.order_count,
        revenue=result.revenue,
        daily=[DailyRevenue(date=day.isoformat(), revenue=amount) for day, amount in result.daily_revenue.items()],
    )


@admin_router.get("/activity", response_model=list[ActivityResponse])
async def activity(limit: int = Query(default=50, ge=1, le=200)) -> list[ActivityResponse]:
    return [
        ActivityResponse(
            id=str(entry.id),
            user_id=str(entry.user_id),
            action=entry.action,
            details=entry.details,
            created_at=entry.created_at,
        )
        for entry in recent_activity(limit)
    ]


# --- Orders ---


@admin_router.get("/orders", response_model=OrderPageResponse)
async def orders(
    status: str | None = None,
    page: int = Query(default=1, ge=1),
) -> OrderPageResponse:
    result = list_orders(status=status, page=page)
    return OrderPageResponse(
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
        orders=[OrderSummaryResponse.from_order(o) for o in result.orders],
    )


@admin_router.patch("/orders/{order_id}/status", response_model=StatusResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    admin: CurrentUser = Depends(require_admin),
) -> StatusResponse:
    command = ChangeOrderStatus(admin_id=admin.id, order_id=order_id, status=body.status)
    order_status = current_domain.process(command, asynchronous=False)
    return StatusResponse(status=order_status)


@admin_router.post("/orders/{order_id}/refund", status_code=201, response_model=RefundResponse)
async def refund_order(
    order_id: str,
    body: RefundRequest,
    admin: CurrentUser = Depends(require_admin),
    service: RefundService = Depends(refund_service),
) -> RefundResponse:
    lines = [RefundLine(order_item_id=line.order_item_id, quantity=line.quantity) for line in body.items]
    refund = service.issue_refund(order_id, lines, reason=body.reason, admin_id=admin.id)
    return RefundResponse.from_refund(refund)


@admin_router.get("/orders/{order_id}/refunds", response_model=list[RefundResponse])
async def order_refunds(order_id: str) -> list[RefundResponse]:
    order = get_order(order_id)
    return [RefundResponse.from_refund(r) for r in refunds_for_order(order.id)]


# --- Products ---


@admin_router.post("/products", status_code=201, response_model=ProductResponse)
async def create_product(body: ProductRequest, admin: CurrentUser = Depends(require_admin)) -> ProductResponse:
    command = CreateProduct(
        admin_id=admin.id,
        name=body.name,
        description=body.description,
        price=body.price,
        original_price=body.original_price,
        stock=body.stock,
        category=body.category,
        gender=body.gender,
        sizes=_json_list(body.sizes),
        colors=_json_list(body.colors),
        tags=_json_list(body.tags),
        images=_json_list(body.images),
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(get_product(product_id))


@admin_router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: ProductUpdateRequest,
    admin: CurrentUser = Depends(require_admin),
) -> ProductResponse:
    command = UpdateProduct(
        admin_id=admin.id,
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        original_price=body.original_price,
        stock=body.stock,
        category=body.category,
        gender=body.gender,
        sizes=_json_list(body.sizes),
        colors=_json_list(body.colors),
        tags=_json_list(body.tags),
        images=_json_list(body.images),
    )
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(get_product(product_id))


@admin_router.delete("/products/{product_id}", response_model=IdResponse)
async def delete_product(product_id: str, admin: CurrentUser = Depends(require_admin)) -> IdResponse:
    removed_id = current_domain.process(RemoveProduct(admin_id=admin.id, product_id=product_id), asynchronous=False)
    return IdResponse(id=removed_id)


# --- Customers ---


@admin_router.get("/customers", response_model=list[CustomerResponse])
async def customers() -> list[CustomerResponse]:
    return [
        CustomerResponse(
            user_id=c.user_id,
            email=c.email,
            name=c.name,
            order_count=c.order_count,
            total_spent=c.total_spent,
            last_order_at=c.last_order_at,
            notes=c.notes,
        )
        for c in list_customers()
    ]


@admin_router.put("/customers/{user_id}/notes", response_model=StatusResponse)
async def update_customer_notes(
    user_id: str,
    body: CustomerNotesRequest,
    admin: CurrentUser = Depends(require_admin),
) -> StatusResponse:
    current_domain.process(
        UpdateCustomerNotes(admin_id=admin.id, user_id=user_id, notes=body.notes), asynchronous=False
    )
    return StatusResponse()
