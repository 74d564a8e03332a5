import smtplib
from unittest.mock import MagicMock, patch

from storefront.config import Settings
from storefront.notifications.fake_email import FakeEmailAdapter
from storefront.notifications.mailer import OrderMailer, build_email_adapter, order_reference
from storefront.notifications.smtp_email import SmtpEmailAdapter

ORDER_ID = "3f2a9c1e-5b7d-4e8f-9a0b-1c2d3e4f5a6b"


class TestOrderMailer:
    def test_order_reference_is_first_eight_characters(self):
        assert order_reference(ORDER_ID) == "3f2a9c1e"

    def test_sends_confirmation(self):
        email = FakeEmailAdapter()
        OrderMailer(email, shop_name="Rawr").send_order_confirmation("asha@example.com", ORDER_ID, 118.0)

        [sent] = email.sent_emails
        assert sent["to"] == "asha@example.com"
        assert sent["subject"] == "Order Confirmed #3f2a9c1e"
        assert "Rawr" in sent["body"]
        assert "118.00" in sent["body"]

    def test_skips_without_address(self):
        email = FakeEmailAdapter()
        OrderMailer(email).send_order_confirmation(None, ORDER_ID, 118.0)
        assert email.sent_emails == []

    def test_swallows_adapter_exceptions(self):
        email = FakeEmailAdapter()
        email.configure(raise_error=OSError("connection refused"))
        OrderMailer(email).send_order_confirmation("asha@example.com", ORDER_ID, 118.0)

    def test_reported_failure_is_not_raised(self):
        email = FakeEmailAdapter()
        email.configure(should_succeed=False)
        OrderMailer(email).send_order_confirmation("asha@example.com", ORDER_ID, 118.0)
        assert email.sent_emails == []


class TestSmtpEmailAdapter:
    def _adapter(self, **overrides):
        options = {"host": "smtp.test", "port": 587, "sender": "shop@test", "username": "u", "password": "p"}
        options.update(overrides)
        return SmtpEmailAdapter(**options)

    def test_sends_over_starttls(self):
        with patch("storefront.notifications.smtp_email.smtplib.SMTP") as smtp_cls:
            client = MagicMock()
            smtp_cls.return_value.__enter__.return_value = client

            result = self._adapter(timeout=4.0).send("asha@example.com", "Hi", "Body")

        smtp_cls.assert_called_once_with("smtp.test", 587, timeout=4.0)
        client.starttls.assert_called_once()
        client.login.assert_called_once_with("u", "p")
        message = client.send_message.call_args[0][0]
        assert message["To"] == "asha@example.com"
        assert message["Subject"] == "Hi"
        assert result["status"] == "sent"

    def test_plain_connection_without_login(self):
        with patch("storefront.notifications.smtp_email.smtplib.SMTP") as smtp_cls:
            client = MagicMock()
            smtp_cls.return_value.__enter__.return_value = client

            self._adapter(use_tls=False, username=None).send("asha@example.com", "Hi", "Body")

        client.starttls.assert_not_called()
        client.login.assert_not_called()

    def test_smtp_failure_is_reported(self):
        with patch("storefront.notifications.smtp_email.smtplib.SMTP") as smtp_cls:
            smtp_cls.side_effect = smtplib.SMTPConnectError(421, "busy")
            result = self._adapter().send("asha@example.com", "Hi", "Body")

        assert result["status"] == "failed"
        assert result["message_id"] is None


class TestBuildEmailAdapter:
    def test_fake_backend(self):
        assert isinstance(build_email_adapter(Settings(email_backend="fake")), FakeEmailAdapter)

    def test_smtp_backend(self):
        adapter = build_email_adapter(Settings(email_backend="smtp", smtp_host="mail.test", smtp_user=""))
        assert isinstance(adapter, SmtpEmailAdapter)
        assert adapter.host == "mail.test"
        assert adapter.username is None
