"""
Tests for log redaction and the inquiry notification email
"""
import json
import logging
from datetime import date
from types import SimpleNamespace

import httpx
import pytest

from estate_enquiry.config.logging import (
    CustomJsonFormatter,
    RequestContextFilter,
    SensitiveDataFilter,
    clear_request_id,
    set_request_id,
)
from estate_enquiry.services.email_service import EmailService


def _record(msg, args=None, **extra):
    record = logging.LogRecord("estate_enquiry.test", logging.INFO, __file__, 1, msg, args, None)
    record.__dict__.update(extra)
    return record


class TestSensitiveDataFilter:

    def test_redacts_emails_in_message(self):
        record = _record("Inquiry from asha@example.com received")
        SensitiveDataFilter().filter(record)
        assert record.msg == "Inquiry from [EMAIL_REDACTED] received"

    def test_redacts_tokens_and_passwords(self):
        record = _record("login password=hunter2 token=abc.def")
        SensitiveDataFilter().filter(record)
        assert "hunter2" not in record.msg
        assert "abc.def" not in record.msg

    def test_redacts_structured_fields(self):
        record = _record("Inquiry submitted", email="asha@example.com", phone="98450", inquiry_id="i-1")
        SensitiveDataFilter().filter(record)
        assert record.email == "[REDACTED]"
        assert record.phone == "[REDACTED]"
        assert record.inquiry_id == "i-1"

    def test_redacts_dict_args(self):
        record = _record("%(password)s", ({"password": "hunter2"},))
        SensitiveDataFilter().filter(record)
        assert record.args == {"password": "[REDACTED]"}


class TestJsonFormatter:

    def test_emits_request_id_and_extra_fields(self):
        formatter = CustomJsonFormatter(fmt="%(timestamp)s %(level)s %(name)s %(message)s")
        record = _record("Inquiry submitted", inquiry_type="tour")

        set_request_id("req-42")
        try:
            RequestContextFilter().filter(record)
        finally:
            clear_request_id()

        payload = json.loads(formatter.format(record))
        assert payload["message"] == "Inquiry submitted"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "estate_enquiry.test"
        assert payload["request_id"] == "req-42"
        assert payload["inquiry_type"] == "tour"

    def test_request_id_omitted_outside_requests(self):
        formatter = CustomJsonFormatter(fmt="%(message)s")
        record = _record("Scheduled job ran")
        RequestContextFilter().filter(record)

        assert "request_id" not in json.loads(formatter.format(record))


def _inquiry(**overrides):
    values = dict(
        inquiry_type="tour",
        name="Vikram Shah",
        email="vikram@example.com",
        phone=None,
        property_name="Palm Grove Residency",
        property_location="Whitefield, Bengaluru",
        property_configurations=None,
        tour_date=date(2026, 10, 17),
        tour_time="11:00 AM",
        tour_type=["siteVisit", "videoChat"],
        message="Tour request",
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class TestEmailService:

    async def test_no_inbox_configured(self, monkeypatch):
        monkeypatch.delenv("INQUIRY_NOTIFY_EMAIL", raising=False)

        status_code, _ = await EmailService().notify_new_inquiry(_inquiry())

        assert status_code == 204

    async def test_dev_mode_does_not_send(self, monkeypatch):
        monkeypatch.setenv("INQUIRY_NOTIFY_EMAIL", "sales@example.com")
        monkeypatch.setenv("MAILGUN_DEV", "yes")

        assert await EmailService().notify_new_inquiry(_inquiry()) == (200, "Dev mode - email not sent")

    @pytest.mark.parametrize("inquiry_type, template, subject", [
        ("tour", "tour_request", "New Tour Request - Palm Grove Residency"),
        ("contact", "new_inquiry", "New Enquiry - Palm Grove Residency"),
    ])
    async def test_posts_to_mailgun(self, monkeypatch, inquiry_type, template, subject):
        monkeypatch.setenv("INQUIRY_NOTIFY_EMAIL", "sales@example.com")
        monkeypatch.setenv("MAILGUN_DEV", "no")
        monkeypatch.setenv("MAILGUN_URL", "https://mailgun.test/v3/messages")
        monkeypatch.setenv("MAILGUN_API_KEY", "key-123")
        monkeypatch.setenv("MAILGUN_FROM", "noreply@example.com")

        sent = []

        def handler(request):
            sent.append(request)
            return httpx.Response(200, text="Queued")

        real_client = httpx.AsyncClient
        monkeypatch.setattr(
            "estate_enquiry.services.email_service.httpx.AsyncClient",
            lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
        )

        result = await EmailService().notify_new_inquiry(_inquiry(inquiry_type=inquiry_type))

        assert result == (200, "Queued")
        form = httpx.QueryParams(sent[0].content.decode())
        assert form["to"] == "sales@example.com"
        assert form["template"] == template
        assert form["subject"] == subject
        variables = json.loads(form["h:X-Mailgun-Variables"])
        assert variables["visitor_phone"] == "Not provided"
        assert variables["tour_type"] == "siteVisit, videoChat"

    async def test_transport_failure_reported_not_raised(self, monkeypatch):
        monkeypatch.setenv("INQUIRY_NOTIFY_EMAIL", "sales@example.com")
        monkeypatch.setenv("MAILGUN_DEV", "no")
        monkeypatch.setenv("MAILGUN_URL", "https://mailgun.test/v3/messages")
        monkeypatch.setenv("MAILGUN_API_KEY", "key-123")

        def handler(request):
            raise httpx.ConnectError("mailgun unreachable", request=request)

        real_client = httpx.AsyncClient
        monkeypatch.setattr(
            "estate_enquiry.services.email_service.httpx.AsyncClient",
            lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
        )

        status_code, body = await EmailService().notify_new_inquiry(_inquiry())

        assert status_code == 500
        assert "mailgun unreachable" in body
