"""Customer overview for the admin console.

Accounts live with the external identity service; the storefront knows
customers through the orders they placed, plus private admin notes.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from protean import handle
from protean.fields import DateTime, Identifier, Text
from protean.utils.globals import current_domain

from storefront.admin.activity import record_activity
from storefront.domain import storefront
from storefront.order.order import PaymentStatus
from storefront.order.queries import all_orders
from storefront.utils.query import first_or_none, iterate_all


@storefront.aggregate
class CustomerNote:
    user_id = Identifier(required=True, unique=True)
    notes = Text()
    updated_at = DateTime()


@storefront.command(part_of="CustomerNote")
class UpdateCustomerNotes:
    admin_id = Identifier(required=True)
    user_id = Identifier(required=True)
    notes = Text()


@dataclass
class CustomerSummary:
    user_id: str
    email: str | None
    name: str | None
    order_count: int
    total_spent: float
    last_order_at: datetime | None
    notes: str | None = None


def find_customer_note(user_id) -> CustomerNote | None:
    query = current_domain.repository_for(CustomerNote)._dao.query.filter(user_id=str(user_id))
    return first_or_none(query)


def list_customers() -> list[CustomerSummary]:
    """One row per ordering customer, most recent buyer first."""
    notes = {str(n.user_id): n.notes for n in iterate_all(current_domain.repository_for(CustomerNote)._dao.query)}
    summaries: dict[str, CustomerSummary] = {}

    for order in sorted(all_orders(), key=lambda o: o.created_at):
        user_id = str(order.user_id)
        summary = summaries.setdefault(
            user_id,
            CustomerSummary(
                user_id=user_id,
                email=None,
                name=None,
                order_count=0,
                total_spent=0.0,
                last_order_at=None,
                notes=notes.get(user_id),
            ),
        )
        summary.order_count += 1
        summary.email = order.customer_email or summary.email
        summary.name = order.customer_name or summary.name
        summary.last_order_at = order.created_at
        if order.payment_status == PaymentStatus.PAID.value:
            summary.total_spent = round(summary.total_spent + order.total, 2)

    return sorted(summaries.values(), key=lambda s: s.last_order_at, reverse=True)


@storefront.command_handler(part_of=CustomerNote)
class CustomerNotesHandler:
    @handle(UpdateCustomerNotes)
    def update_customer_notes(self, command):
        note = find_customer_note(command.user_id) or CustomerNote(user_id=str(command.user_id))
        note.notes = command.notes
        note.updated_at = datetime.now(UTC)
        current_domain.repository_for(CustomerNote).add(note)
        record_activity(command.admin_id, "UPDATE_CUSTOMER_NOTES", f"Updated notes for customer {command.user_id}")
        return str(note.id)
