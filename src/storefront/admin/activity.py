"""Audit trail of admin actions."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront

RECENT_ACTIVITY_LIMIT = 50


@storefront.aggregate
class ActivityLog:
    user_id: Identifier(required=True)
    action: String(required=True, max_length=50)
    details: Text()
    created_at: DateTime(required=True)


def record_activity(user_id, action: str, details: str | None = None) -> ActivityLog:
    """Append an audit entry. Joins the caller's unit of work when one is active."""
    entry = ActivityLog(user_id=str(user_id), action=action, details=details, created_at=datetime.now(UTC))
    current_domain.repository_for(ActivityLog).add(entry)
    logger.info("admin_activity_recorded", user_id=str(user_id), action=action)
    return entry


def recent_activity(limit: int = RECENT_ACTIVITY_LIMIT) -> list[ActivityLog]:
    query = current_domain.repository_for(ActivityLog)._dao.query.order_by("-created_at").limit(limit)
    return query.all().items
