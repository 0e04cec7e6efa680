"""
Tests for the HTTP surface using FastAPI's TestClient.
"""
import json
import pytest
from unittest.mock import AsyncMock, Mock
from fastapi.testclient import TestClient

from config.settings import AppConfig, BookingStoreConfig, ReminderConfig
from villa_docs.api.app import create_app
from villa_docs.api.dependencies import get_app_config, get_booking_store_client, get_notifier
from villa_docs.api.errors import UpstreamError
from villa_docs.utils.models import Booking, PresenceResult, StoreResult, NotificationResult

CRON_SECRET = "s3cret-token"
PDF = b"%PDF-1.4 test document"
JPEG = b"\xff\xd8\xff\xe0 test image"


@pytest.fixture
def app_config():
    return AppConfig(
        booking_store=BookingStoreConfig(api_url="https://wp.example.com/wp-json/villa-claudia/v1", api_key="k"),
        reminders=ReminderConfig(cron_secret=CRON_SECRET),
    )


@pytest.fixture
def store_client():
    client = Mock()
    client.get_booking = AsyncMock(return_value={"bookingId": "42", "guestName": "Jane", "status": "confirmed"})
    client.get_upcoming_bookings = AsyncMock(return_value=[])
    client.has_documents = AsyncMock(return_value=PresenceResult(has_documents=True))
    client.upload_documents = AsyncMock(return_value=StoreResult(success=True))
    return client


@pytest.fixture
def notifier():
    n = Mock()
    n.send_admin_notification = AsyncMock(
        return_value=NotificationResult(success=True, recipient="admin@villa.test"))
    n.send_document_reminder = AsyncMock(
        return_value=NotificationResult(success=True, recipient="guest@example.com"))
    return n


@pytest.fixture
def app(app_config, store_client, notifier):
    app = create_app()
    app.dependency_overrides[get_app_config] = lambda: app_config
    app.dependency_overrides[get_booking_store_client] = lambda: store_client
    app.dependency_overrides[get_notifier] = lambda: notifier
    return app


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


def _upload_form(reference="123456789012345", guest_name="A. Guest"):
    data = {
        "bookingId": reference,
        "guestName": guest_name,
        "email": "guest@example.com",
        "travelers": json.dumps([{"name": "Jane Doe", "documentType": "passport", "documentNumber": "P1"}]),
        "fileMetadata[0]": json.dumps({"travelerName": "Jane Doe", "documentType": "passport",
                                       "documentNumber": "P1"}),
        "fileMetadata[1]": json.dumps({"travelerName": "Jane Doe", "documentType": "id_card",
                                       "documentNumber": "ID1"}),
    }
    files = [
        ("files", ("passport.jpg", JPEG, "image/jpeg")),
        ("files", ("id.pdf", PDF, "application/pdf")),
    ]
    return data, files


class TestBookingEndpoints:

    def test_get_booking(self, client, store_client):
        response = client.get("/api/v1/booking", params={"id": "42"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["guestName"] == "Jane"
        store_client.get_booking.assert_awaited_once_with("42")

    def test_get_booking_missing_id(self, client, store_client):
        response = client.get("/api/v1/booking")

        assert response.status_code == 400
        assert response.json()["message"] == "Missing booking ID"
        assert response.json()["error_code"] == "INVALID_INPUT"
        store_client.get_booking.assert_not_called()

    def test_get_booking_store_error(self, client, store_client):
        store_client.get_booking.side_effect = UpstreamError("Booking store returned 404", status=404)

        response = client.get("/api/v1/booking", params={"id": "42"})

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to fetch booking data (404)"

    def test_get_booking_store_unreachable(self, client, store_client):
        store_client.get_booking.side_effect = UpstreamError("Booking store unreachable")

        response = client.get("/api/v1/booking", params={"id": "42"})

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to fetch booking information"

    def test_check_documents(self, client, store_client):
        response = client.get("/api/v1/admin/check-documents", params={"bookingId": "42"})

        assert response.status_code == 200
        assert response.json()["data"] == {"booking_id": "42", "has_documents": True}
        store_client.has_documents.assert_awaited_once_with("42")

    def test_check_documents_fails_open(self, client, store_client):
        store_client.has_documents.return_value = PresenceResult.unknown("store down")

        response = client.get("/api/v1/admin/check-documents", params={"bookingId": "42"})

        assert response.status_code == 200
        assert response.json()["data"]["has_documents"] is False

    def test_check_documents_missing_id(self, client):
        response = client.get("/api/v1/admin/check-documents")
        assert response.status_code == 400


class TestUploadEndpoint:

    def test_upload_success(self, client, store_client, notifier):
        data, files = _upload_form()

        response = client.post("/api/v1/upload", data=data, files=files)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Files uploaded successfully"
        assert body["data"]["booking_id"] == "1234567"
        assert [f["original_name"] for f in body["data"]["files"]] == ["passport.jpg", "id.pdf"]
        assert body["data"]["files"][1]["size"] == len(PDF)

        booking_id, documents = store_client.upload_documents.call_args[0]
        assert booking_id == "1234567"
        assert documents[0].content == JPEG
        assert documents[1].document_type == "id_card"
        notifier.send_admin_notification.assert_awaited_once()

    def test_upload_succeeds_when_store_rejects(self, client, store_client):
        store_client.upload_documents.return_value = StoreResult(success=False, error_message="WordPress API error")
        data, files = _upload_form()

        response = client.post("/api/v1/upload", data=data, files=files)

        assert response.status_code == 200
        assert response.json()["data"]["storage_accepted"] is False

    def test_upload_invalid_reference(self, client, store_client, notifier):
        data, files = _upload_form(reference="12AB")

        response = client.post("/api/v1/upload", data=data, files=files)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid booking ID format"
        store_client.upload_documents.assert_not_called()
        notifier.send_admin_notification.assert_not_called()

    def test_upload_missing_guest_name(self, client):
        data, files = _upload_form(guest_name="")

        response = client.post("/api/v1/upload", data=data, files=files)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing guest name"

    def test_upload_without_files(self, client):
        data, _ = _upload_form()

        response = client.post("/api/v1/upload", data=data, files=[("unrelated", ("a.txt", b"x", "text/plain"))])

        assert response.status_code == 400
        assert response.json()["message"] == "No files provided"

    def test_upload_unsupported_type(self, client):
        data, _ = _upload_form()

        response = client.post("/api/v1/upload", data=data,
                               files=[("files", ("notes.txt", b"hello", "text/plain"))])

        assert response.status_code == 400
        assert "text/plain" in response.json()["message"]

    def test_upload_unexpected_failure(self, client, store_client):
        store_client.upload_documents.side_effect = RuntimeError("boom")
        data, files = _upload_form()

        response = client.post("/api/v1/upload", data=data, files=files)

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to upload files"


class TestReminderEndpoint:

    def test_requires_secret(self, client, store_client):
        response = client.get("/api/v1/cron/document-reminders")

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized"
        store_client.get_upcoming_bookings.assert_not_called()

    def test_wrong_secret(self, client):
        response = client.get("/api/v1/cron/document-reminders", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_rejects_when_secret_not_configured(self, app, client):
        app.dependency_overrides[get_app_config] = lambda: AppConfig()

        response = client.get("/api/v1/cron/document-reminders", headers={"Authorization": "Bearer "})

        assert response.status_code == 401

    def test_run(self, client, store_client, notifier):
        from datetime import datetime, timedelta, timezone
        store_client.get_upcoming_bookings.return_value = [
            Booking(booking_id="7", guest_email="guest@example.com", status="confirmed",
                    check_in_date=datetime.now(timezone.utc) + timedelta(days=7)),
            Booking(booking_id="8", guest_email="other@example.com", status="confirmed",
                    check_in_date=datetime.now(timezone.utc) + timedelta(days=2)),
        ]
        store_client.has_documents.return_value = PresenceResult(has_documents=False)

        response = client.get("/api/v1/cron/document-reminders",
                              headers={"Authorization": f"Bearer {CRON_SECRET}"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Document reminders processed successfully"
        assert body["data"] == {"candidates": 2, "processed": 1, "sent": 1, "failed": 0}
        notifier.send_document_reminder.assert_awaited_once()

    def test_upcoming_fetch_failure(self, client, store_client):
        store_client.get_upcoming_bookings.side_effect = UpstreamError("Booking store returned 503", status=503)

        response = client.get("/api/v1/cron/document-reminders",
                              headers={"Authorization": f"Bearer {CRON_SECRET}"})

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Failed to process document reminders"
        assert body["details"] == {"error": "Booking store returned 503"}


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["dependencies"]["booking_store"] == "configured"
    assert body["dependencies"]["cron_secret"] == "configured"
    assert body["dependencies"]["smtp"] == "not_configured"


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "running" in response.json()["message"]
