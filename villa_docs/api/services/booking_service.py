"""
Booking service: read-only proxies to the booking store.
"""
from typing import Dict, Any

from ...booking_store.booking_store_client import BookingStoreClient
from ...utils.models import PresenceResult
from ..errors import ClientInputError, UpstreamError


class BookingService:
    """Service for booking lookups and document presence checks."""

    def __init__(self, store_client: BookingStoreClient, logger):
        self.store_client = store_client
        self.logger = logger

    async def get_booking(self, booking_id: str) -> Dict[str, Any]:
        """
        Fetch one booking from the store.

        Args:
            booking_id: Store booking id

        Returns:
            The store's booking payload

        Raises:
            ClientInputError: if booking_id is empty
            UpstreamError: if the store answers with an error or cannot be reached
        """
        if not booking_id:
            raise ClientInputError("Missing booking ID")
        try:
            return await self.store_client.get_booking(booking_id)
        except UpstreamError as e:
            self.logger.error("Error fetching booking", booking_id=booking_id, error=e.message, status=e.status)
            if e.status is not None:
                raise UpstreamError(f"Failed to fetch booking data ({e.status})", status=e.status) from e
            raise UpstreamError("Failed to fetch booking information") from e

    async def check_documents(self, booking_id: str) -> PresenceResult:
        """
        Whether documents were uploaded for a booking.

        The store is treated as the source of truth but the check fails open:
        any upstream failure yields has_documents=False with success=False.
        """
        if not booking_id:
            raise ClientInputError("Missing booking ID")
        return await self.store_client.has_documents(booking_id)
