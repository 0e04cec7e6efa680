"""
Document reminder service, run once a day by an external scheduler.
"""
import asyncio
from datetime import datetime, timezone
from typing import List, Optional

from ...booking_store.booking_store_client import BookingStoreClient
from ...guest_communications.notifier import Notifier
from ...utils.logger import ReminderRunLogger
from ...utils.models import Booking, ReminderRunResult
from config.settings import ReminderConfig

SECONDS_PER_DAY = 24 * 60 * 60


def days_until(moment: datetime, now: datetime) -> float:
    """Fractional days from now to moment. Naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (moment - now).total_seconds() / SECONDS_PER_DAY


class ReminderService:
    """Selects bookings that still need documents and emails their guests."""

    def __init__(self, store_client: BookingStoreClient, notifier: Notifier,
                 config: ReminderConfig, logger):
        self.store_client = store_client
        self.notifier = notifier
        self.config = config
        self.logger = logger

    def needs_reminder(self, booking: Booking, now: datetime) -> bool:
        """
        A booking qualifies when it has no documents, is confirmed and checks
        in between 6.5 and 7.5 days from now (both ends inclusive). With one
        run per day each booking falls in the window exactly once.
        """
        if booking.has_documents:
            return False
        if booking.status != self.config.confirmed_status:
            return False
        if booking.check_in_date is None:
            return False
        days = days_until(booking.check_in_date, now)
        return self.config.window_min_days <= days <= self.config.window_max_days

    async def _with_presence(self, bookings: List[Booking]) -> List[Booking]:
        results = await asyncio.gather(*(self.store_client.has_documents(b.booking_id) for b in bookings))
        for booking, presence in zip(bookings, results):
            booking.has_documents = presence.has_documents
        return bookings

    async def process_document_reminders(self, now: Optional[datetime] = None) -> ReminderRunResult:
        """
        Run one reminder pass.

        Raises:
            UpstreamError: if the upcoming bookings cannot be fetched; the run is aborted
        """
        now = now or datetime.now(timezone.utc)
        run_logger = ReminderRunLogger(self.logger)

        upcoming = await self.store_client.get_upcoming_bookings()
        run_logger.log_candidates(len(upcoming))

        bookings = await self._with_presence(upcoming)
        selected = []
        for booking in bookings:
            if not self.needs_reminder(booking, now):
                continue
            if not booking.guest_email:
                run_logger.log_skipped(booking.booking_id, "no guest email")
                continue
            selected.append(booking)
        run_logger.log_selected(len(selected))

        # Sends are independent; a failed one does not cancel the rest
        results = await asyncio.gather(
            *(self.notifier.send_document_reminder(b) for b in selected),
            return_exceptions=True,
        )
        for booking, result in zip(selected, results):
            if isinstance(result, BaseException):
                run_logger.log_failed(booking.booking_id, str(result))
            elif result.success:
                run_logger.log_sent(booking.booking_id, result.recipient)
            else:
                run_logger.log_failed(booking.booking_id, result.error_message)

        run_logger.print_summary()
        return run_logger.result
