"""
Command line entry point for the guest document relay.
"""
import asyncio
import click
from typing import Optional

from .booking_store.booking_store_client import BookingStoreClient
from .guest_communications.notifier import Notifier
from .api.errors import UpstreamError
from .api.services.reminder_service import ReminderService
from .utils.logger import setup_logger
from config.settings import AppConfig, load_config


class DocumentRelay:
    """Wires the configured collaborators for command line use."""

    def __init__(self, config: AppConfig, log_level: str = "INFO", log_file: Optional[str] = None):
        self.config = config
        self.logger = setup_logger("villa_docs", log_level, log_file)
        self.store_client = BookingStoreClient(config.booking_store)
        self.notifier = Notifier(config.email, config.reminders)

    def reminder_service(self) -> ReminderService:
        return ReminderService(self.store_client, self.notifier, self.config.reminders, self.logger)


@click.group()
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              default='INFO', help='Logging level')
@click.option('--log-file', type=str, help='Log file path (optional)')
@click.pass_context
def main(ctx, log_level, log_file):
    """
    Villa Claudia guest document relay.

    Sends document reminders and checks document status against the booking store.
    """
    ctx.obj = DocumentRelay(load_config(), log_level, log_file)


@main.command('send-reminders')
@click.pass_obj
def send_reminders(relay: DocumentRelay):
    """Run one document reminder pass."""
    try:
        result = asyncio.run(relay.reminder_service().process_document_reminders())
    except UpstreamError as e:
        click.echo(f"Error: {e.message}")
        click.get_current_context().exit(1)

    click.echo("\nDocument reminders completed:")
    click.echo(f"  Upcoming bookings: {result.candidates}")
    click.echo(f"  Needing reminder: {result.processed}")
    click.echo(f"  Sent: {result.sent}")
    click.echo(f"  Failed: {result.failed}")


@main.command('check-documents')
@click.argument('booking_id')
@click.pass_obj
def check_documents(relay: DocumentRelay, booking_id: str):
    """Show whether documents were uploaded for BOOKING_ID."""
    presence = asyncio.run(relay.store_client.has_documents(booking_id))
    if presence.has_documents:
        click.echo(f"Booking {booking_id}: documents uploaded")
    else:
        click.echo(f"Booking {booking_id}: no documents found")
    if not presence.success:
        click.echo(f"  (check failed: {presence.error_message})")


if __name__ == "__main__":
    main()
