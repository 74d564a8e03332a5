"""Admin order status override."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.admin.activity import record_activity
from storefront.domain import logger, storefront
from storefront.order.order import Order, OrderStatus
from storefront.order.queries import get_order


@storefront.command(part_of="Order")
class ChangeOrderStatus:
    admin_id = Identifier(required=True)
    order_id = Identifier(required=True)
    status = String(choices=OrderStatus, required=True)


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(ChangeOrderStatus)
    def change_order_status(self, command):
        order = get_order(command.order_id)
        if order.change_status(command.status):
            current_domain.repository_for(Order).add(order)
            record_activity(command.admin_id, "UPDATE_ORDER_STATUS", f"Order {order.id} -> {command.status}")
            logger.info("order_status_changed", order_id=str(order.id), status=command.status)
        return order.order_status
