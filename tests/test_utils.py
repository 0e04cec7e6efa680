"""
Unit tests for utility modules.
"""
import logging
import pytest
from unittest.mock import Mock
from datetime import datetime, timezone

from villa_docs.utils.models import (
    Booking, Traveler, FileMetadata, IncomingFile, UploadedDocument, PresenceResult,
    ReminderRunResult, DocumentType, document_type_name
)
from villa_docs.utils.logger import setup_logger, get_logger, ReminderRunLogger, ColorizedFormatter


class TestModels:
    """Test cases for data models."""

    def test_document_type_enum(self):
        assert DocumentType.PASSPORT.value == "passport"
        assert DocumentType("id_card") == DocumentType.ID_CARD
        assert DocumentType("drivers_license") == DocumentType.DRIVERS_LICENSE

    def test_document_type_names(self):
        assert document_type_name("passport") == "Passport"
        assert document_type_name("id_card") == "National ID Card"
        assert document_type_name("residence_permit") == "Residence Permit"
        assert document_type_name("drivers_license") == "Driver's License"
        assert document_type_name("visa") == "visa"

    def test_booking_from_store_payload(self):
        booking = Booking.from_dict({
            "bookingId": 1234,
            "checkInDate": "2026-10-26",
            "checkOutDate": "2026-11-02",
            "guestName": "Jane Doe",
            "guestEmail": "jane@example.com",
            "status": "confirmed",
        })

        assert booking.booking_id == "1234"
        assert booking.check_in_date == datetime(2026, 10, 26)
        assert booking.check_out_date == datetime(2026, 11, 2)
        assert booking.guest_email == "jane@example.com"
        assert booking.status == "confirmed"
        assert booking.has_documents is False

    def test_booking_from_payload_with_bad_dates(self):
        booking = Booking.from_dict({"bookingId": "7", "checkInDate": "soon", "checkOutDate": ""})
        assert booking.check_in_date is None
        assert booking.check_out_date is None
        assert booking.guest_email is None

    def test_booking_from_payload_with_utc_suffix(self):
        booking = Booking.from_dict({"bookingId": "7", "checkInDate": "2026-10-26T15:00:00Z"})
        assert booking.check_in_date == datetime(2026, 10, 26, 15, tzinfo=timezone.utc)

    def test_booking_to_dict(self):
        booking = Booking(booking_id="9", guest_name="A", check_in_date=datetime(2026, 1, 2))
        data = booking.to_dict()
        assert data["booking_id"] == "9"
        assert data["check_in_date"] == "2026-01-02T00:00:00"
        assert data["check_out_date"] is None

    def test_traveler_from_dict_defaults(self):
        traveler = Traveler.from_dict({"name": "John"})
        assert traveler.document_type == "passport"
        assert traveler.document_number == ""

    def test_file_metadata_fallback(self):
        meta = FileMetadata.fallback(3)
        assert meta.file_index == 3
        assert meta.traveler_name == "Unknown"
        assert meta.document_type == "passport"
        assert meta.document_number == ""

    def test_incoming_file_read_once(self):
        import asyncio

        source = Mock()

        async def read():
            return b"data"

        source.read = Mock(side_effect=read)
        f = IncomingFile(filename="a.pdf", content_type="application/pdf", size=4, source=source)

        assert asyncio.run(f.read()) == b"data"
        assert asyncio.run(f.read()) == b"data"
        source.read.assert_called_once()

    def test_uploaded_document_summary_has_no_content(self):
        doc = UploadedDocument(
            original_name="p.pdf", content=b"%PDF", content_type="application/pdf", size=4,
            traveler_name="Jane", document_type="passport", document_number="X1",
        )
        assert doc.to_dict() == {
            "original_name": "p.pdf",
            "size": 4,
            "type": "application/pdf",
            "traveler_name": "Jane",
            "document_type": "passport",
            "document_number": "X1",
        }

    def test_presence_unknown_defaults_to_false(self):
        result = PresenceResult.unknown("store down")
        assert result.has_documents is False
        assert result.success is False
        assert result.error_message == "store down"

    def test_reminder_run_result_to_dict(self):
        assert ReminderRunResult(candidates=5, processed=2, sent=1, failed=1).to_dict() == {
            "candidates": 5, "processed": 2, "sent": 1, "failed": 1,
        }


class TestLogger:
    """Test cases for logging utilities."""

    def test_setup_logger(self):
        logger = setup_logger("villa_docs_test_setup", "DEBUG")
        assert logger is not None
        assert logging.getLogger("villa_docs_test_setup").level == logging.DEBUG

    def test_setup_logger_does_not_duplicate_handlers(self):
        setup_logger("villa_docs_test_handlers", "INFO")
        setup_logger("villa_docs_test_handlers", "INFO")
        assert len(logging.getLogger("villa_docs_test_handlers").handlers) == 1

    def test_setup_logger_with_file(self, tmp_path):
        log_file = tmp_path / "relay.log"
        setup_logger("villa_docs_test_file", "INFO", str(log_file))
        handlers = logging.getLogger("villa_docs_test_file").handlers
        assert any(isinstance(h, logging.FileHandler) for h in handlers)

    def test_setup_logger_invalid_level_defaults_to_info(self):
        setup_logger("villa_docs_test_invalid", "NOT_A_LEVEL")
        assert logging.getLogger("villa_docs_test_invalid").level == logging.INFO

    def test_get_logger_nests_component_names(self):
        assert get_logger("notifier") is not None

    def test_colorized_formatter_restores_levelname(self):
        formatter = ColorizedFormatter('%(levelname)s %(message)s')
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)
        output = formatter.format(record)
        assert "boom" in output
        assert record.levelname == "ERROR"


class TestReminderRunLogger:

    def test_counts(self):
        mock_logger = Mock()
        run_logger = ReminderRunLogger(mock_logger)

        run_logger.log_candidates(4)
        run_logger.log_selected(3)
        run_logger.log_sent("1", "a@example.com")
        run_logger.log_sent("2", "b@example.com")
        run_logger.log_failed("3", "smtp down")
        run_logger.log_skipped("4", "no guest email")

        assert run_logger.result.candidates == 4
        assert run_logger.result.processed == 3
        assert run_logger.result.sent == 2
        assert run_logger.result.failed == 1
        assert run_logger.skipped == 1
        mock_logger.error.assert_called_once()
        mock_logger.warning.assert_called_once()

    def test_print_summary(self):
        mock_logger = Mock()
        run_logger = ReminderRunLogger(mock_logger)
        run_logger.log_selected(2)
        run_logger.log_sent("1", "a@example.com")

        run_logger.print_summary()

        message = mock_logger.info.call_args[0][0]
        assert message == "Successfully sent 1 of 2 document reminders"
