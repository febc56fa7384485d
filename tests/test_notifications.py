import pytest
import resend

from app.config import settings
from app.core.email_service import NewReservationEmail, send_email, send_new_reservation_email


@pytest.fixture
def booking():
    return NewReservationEmail(customer_name="Ali Veli", date="2025-06-01", field="saha-3", time_slot="16-17")


@pytest.fixture
def sent(monkeypatch):
    calls = []

    def fake_send(params):
        calls.append(params)
        return {"id": "email-1"}

    monkeypatch.setattr(settings, "RESEND_API_KEY", "re_test")
    monkeypatch.setattr(settings, "ADMIN_EMAIL", "owner@halisaha.test")
    monkeypatch.setattr(resend.Emails, "send", fake_send)
    return calls


def test_without_api_key_nothing_is_sent(monkeypatch, booking):
    monkeypatch.setattr(settings, "RESEND_API_KEY", "")

    assert send_new_reservation_email(booking) is False


def test_admin_is_notified(sent, booking):
    assert send_new_reservation_email(booking) is True

    assert len(sent) == 1
    params = sent[0]
    assert params["to"] == ["owner@halisaha.test"]
    assert "16:00 - 17:00" in params["subject"]
    assert "Ali Veli" in params["text"]
    assert "Halı Saha 3" in params["html"]


def test_provider_failure_is_swallowed(monkeypatch):
    def boom(params):
        raise RuntimeError("provider down")

    monkeypatch.setattr(settings, "RESEND_API_KEY", "re_test")
    monkeypatch.setattr(resend.Emails, "send", boom)

    assert send_email("owner@halisaha.test", "subject", "body") is False
