# guest_communications/notifier.py
import asyncio
from datetime import datetime
from functools import partial
from html import escape
from typing import List, Optional
from urllib.parse import urlencode

from .email_client import EmailClient, EmailAttachment
from ..utils.logger import get_logger
from ..utils.models import Booking, Traveler, UploadedDocument, NotificationResult, document_type_name
from config.settings import EmailConfig, ReminderConfig


def format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def attachment_filename(doc: UploadedDocument) -> str:
    """e.g. "Jane Doe - Passport (X123) - scan.pdf"; the number part is dropped when empty."""
    type_name = document_type_name(doc.document_type)
    number = f" ({doc.document_number})" if doc.document_number else ""
    return f"{doc.traveler_name} - {type_name}{number} - {doc.original_name}"


def _format_date(value: Optional[datetime]) -> str:
    return value.strftime("%d %B %Y") if value else "-"


class Notifier:
    def __init__(self, email_config: EmailConfig, reminder_config: ReminderConfig,
                 email_client: Optional[EmailClient] = None):
        self.email_config = email_config
        self.reminder_config = reminder_config
        self.email = email_client or EmailClient(email_config)
        self.logger = get_logger("notifier")

    async def _send(self, to: str, subject: str, html: str,
                    attachments: Optional[List[EmailAttachment]] = None) -> NotificationResult:
        # smtplib blocks, run it in the default thread pool
        try:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, partial(self.email.send, to, subject, html, attachments))
            return NotificationResult(success=True, recipient=to)
        except Exception as e:
            self.logger.error("email_failed", to=to, subject=subject, error=str(e),
                              smtp_server=self.email.smtp_server, smtp_port=self.email.smtp_port)
            return NotificationResult(success=False, recipient=to, error_message=str(e))

    def render_admin_notification(self, booking_id: str, guest_name: str, guest_email: Optional[str],
                                  travelers: List[Traveler], documents: List[UploadedDocument]) -> str:
        cell = 'style="padding: 8px; border: 1px solid #ddd;"'
        head = 'style="padding: 8px; text-align: left; border: 1px solid #ddd; background-color: #f2f2f2;"'
        rows = "".join(
            f"<tr><td {cell}>{escape(d.traveler_name)}</td>"
            f"<td {cell}>{escape(document_type_name(d.document_type))}</td>"
            f"<td {cell}>{escape(d.document_number)}</td>"
            f"<td {cell}>{escape(d.original_name)}</td>"
            f"<td {cell}>{escape(d.content_type)}</td>"
            f"<td {cell}>{format_file_size(d.size)}</td></tr>"
            for d in documents
        )
        traveler_items = "".join(
            f'<li style="margin-bottom: 5px;">{escape(t.name)} '
            f"({escape(document_type_name(t.document_type))}: {escape(t.document_number)})</li>"
            for t in travelers
        )
        headers = "".join(
            f"<th {head}>{label}</th>"
            for label in ("Traveler Name", "Document Type", "Document Number", "Filename", "Type", "Size")
        )
        return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <div style="background-color: #1e40af; color: white; padding: 20px; text-align: center;">
            <h1 style="margin: 0;">Villa Claudia - Document Upload Notification</h1>
          </div>
          <div style="padding: 20px; border: 1px solid #e5e7eb; border-top: none;">
            <h2>New Documents Uploaded</h2>
            <h3>Booking Information</h3>
            <p><strong>Booking ID:</strong> {escape(booking_id)}</p>
            <p><strong>Lead Guest Name:</strong> {escape(guest_name)}</p>
            <p><strong>Contact Email:</strong> {escape(guest_email or "Not provided")}</p>
            <h3>Travelers</h3>
            <ul style="padding-left: 20px;">{traveler_items}</ul>
            <h3>Documents</h3>
            <table style="width: 100%; border-collapse: collapse; margin-top: 10px;">
              <thead><tr>{headers}</tr></thead>
              <tbody>{rows}</tbody>
            </table>
            <p style="margin-top: 20px;">
              The uploaded documents are attached to this email and are also stored with the booking
              in the WordPress admin.
            </p>
            <p>This is an automated notification. Please do not reply to this email.</p>
          </div>
        </div>
        """

    async def send_admin_notification(self, booking_id: str, guest_name: str, guest_email: Optional[str],
                                      travelers: List[Traveler],
                                      documents: List[UploadedDocument]) -> NotificationResult:
        """Email the administrator a summary of an upload with every file attached."""
        subject = f"[Villa Claudia] Travel Documents Uploaded - Booking {booking_id}"
        html = self.render_admin_notification(booking_id, guest_name, guest_email, travelers, documents)
        attachments = [
            EmailAttachment(filename=attachment_filename(d), content=d.content, content_type=d.content_type)
            for d in documents
        ]
        result = await self._send(self.email_config.admin_email, subject, html, attachments)
        if result.success:
            self.logger.info("admin_notification_sent", booking_id=booking_id, files=len(documents))
        return result

    def upload_link(self, booking_id: str) -> str:
        return f"{self.reminder_config.upload_page_url}?{urlencode({'bookingId': booking_id})}"

    def render_document_reminder(self, booking: Booking) -> str:
        check_out = (f"<p><strong>Check-out:</strong> {_format_date(booking.check_out_date)}</p>"
                     if booking.check_out_date else "")
        link = escape(self.upload_link(booking.booking_id), quote=True)
        return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <div style="background-color: #1e40af; color: white; padding: 20px; text-align: center;">
            <h1 style="margin: 0;">Villa Claudia</h1>
          </div>
          <div style="padding: 20px; border: 1px solid #e5e7eb; border-top: none;">
            <p>Dear {escape(booking.guest_name or "Guest")},</p>
            <p>Your stay at Villa Claudia begins in one week. We have not yet received the identity
               documents for your booking. Please upload a document for every traveler before arrival.</p>
            <p><strong>Booking ID:</strong> {escape(booking.booking_id)}</p>
            <p><strong>Check-in:</strong> {_format_date(booking.check_in_date)}</p>
            {check_out}
            <p style="text-align: center; margin: 30px 0;">
              <a href="{link}" style="background-color: #1e40af; color: white; padding: 12px 24px;
                 text-decoration: none; border-radius: 4px;">Upload travel documents</a>
            </p>
            <p>We look forward to welcoming you.</p>
          </div>
        </div>
        """

    async def send_document_reminder(self, booking: Booking) -> NotificationResult:
        """Ask a guest to upload their travel documents."""
        if not booking.guest_email:
            return NotificationResult(success=False, error_message="Booking has no guest email")
        subject = f"[Villa Claudia] Please upload your travel documents - Booking {booking.booking_id}"
        result = await self._send(booking.guest_email, subject, self.render_document_reminder(booking))
        if result.success:
            self.logger.info("document_reminder_sent", booking_id=booking.booking_id)
        return result
