"""Fake email adapter: records sent emails for development and tests."""

from uuid import uuid4

from storefront.notifications.email_port import EmailPort


class FakeEmailAdapter(EmailPort):
    def __init__(self):
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.raise_error: Exception | None = None

    def configure(self, should_succeed: bool = True, raise_error: Exception | None = None):
        """Make later sends report failure, or raise ``raise_error`` outright."""
        self.should_succeed = should_succeed
        self.raise_error = raise_error

    def send(self, to, subject, body, html_body=None) -> dict:
        if self.raise_error is not None:
            raise self.raise_error
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": "Email delivery failed"}

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            {
                "message_id": message_id,
                "to": to,
                "subject": subject,
                "body": body,
                "html_body": html_body,
            }
        )
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        self.sent_emails.clear()
        self.should_succeed = True
        self.raise_error = None
