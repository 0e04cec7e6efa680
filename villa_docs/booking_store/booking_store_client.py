"""
Client for the booking store REST API exposed by the WordPress document plugin.

Endpoints (all authenticated with the x-api-key header):
- GET  /booking/{id}
- GET  /bookings/upcoming
- GET  /has-documents/{id}
- POST /upload-documents
"""
import json
from typing import Optional, Dict, Any, List
from urllib.parse import quote

import httpx

from ..api.errors import UpstreamError
from ..utils.models import Booking, UploadedDocument, StoreResult, PresenceResult
from ..utils.logger import get_logger
from config.settings import BookingStoreConfig


def _path_segment(value: str) -> str:
    # one opaque segment: no "/" and no dot segments the URL parser would resolve
    return quote(str(value), safe="").replace(".", "%2E")


class BookingStoreClient:
    """Async HTTP client for the remote booking store. Every call is attempted once."""

    def __init__(self, config: BookingStoreConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.logger = get_logger("booking_store_client")
        # Injected in tests; None means the default network transport
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        if not self.config.is_configured:
            raise UpstreamError("WordPress API configuration missing")
        return httpx.AsyncClient(
            headers={"x-api-key": self.config.api_key},
            timeout=self.config.timeout_seconds,
            transport=self._transport,
        )

    async def _get_json(self, path: str) -> Any:
        url = self.config.endpoint(path)
        try:
            async with self._client() as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Booking store unreachable: {e}") from e

        if not response.is_success:
            raise UpstreamError(
                f"Booking store returned {response.status_code} for {path}",
                status=response.status_code,
                details={"body": response.text[:500]},
            )
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from booking store for {path}", status=response.status_code) from e

    async def get_booking(self, booking_id: str) -> Dict[str, Any]:
        """Fetch a single booking's raw payload."""
        data = await self._get_json(f"booking/{_path_segment(booking_id)}")
        self.logger.info("Booking fetched", booking_id=booking_id)
        return data

    async def get_upcoming_bookings(self) -> List[Booking]:
        """
        Fetch bookings starting within the store's upcoming horizon (14 days).

        Raises:
            UpstreamError: if the store is unreachable or answers with an error
        """
        data = await self._get_json("bookings/upcoming")
        if not isinstance(data, list):
            raise UpstreamError("Unexpected upcoming bookings payload")
        bookings = [Booking.from_dict(item) for item in data if isinstance(item, dict)]
        self.logger.info("Upcoming bookings fetched", count=len(bookings))
        return bookings

    async def has_documents(self, booking_id: str) -> PresenceResult:
        """Check the has-documents flag. Never raises; failures report has_documents=False."""
        if not self.config.is_configured:
            self.logger.warning("WordPress API configuration missing, defaulting to no documents",
                                booking_id=booking_id)
            return PresenceResult.unknown("WordPress API configuration missing")
        try:
            data = await self._get_json(f"has-documents/{_path_segment(booking_id)}")
        except UpstreamError as e:
            self.logger.error("Error checking documents", booking_id=booking_id, error=e.message)
            return PresenceResult.unknown(e.message)

        has_docs = isinstance(data, dict) and data.get("hasDocuments") is True
        return PresenceResult(has_documents=has_docs)

    async def upload_documents(self, booking_id: str, documents: List[UploadedDocument]) -> StoreResult:
        """
        Forward documents to the store as multipart form data.

        Each document is sent as file_<i> with its metadata as JSON in
        file_info_file_<i>. Never raises; failures are reported in the result.
        """
        data = {"bookingId": booking_id}
        files = []
        for index, doc in enumerate(documents):
            key = f"file_{index}"
            files.append((key, (doc.original_name, doc.content, doc.content_type)))
            data[f"file_info_{key}"] = json.dumps(doc.store_info())

        try:
            async with self._client() as client:
                response = await client.post(self.config.endpoint("upload-documents"), data=data, files=files)
            if not response.is_success:
                raise UpstreamError(
                    f"WordPress API error ({response.status_code}): {response.text[:500]}",
                    status=response.status_code,
                )
        except httpx.HTTPError as e:
            self.logger.error("Error uploading to WordPress", booking_id=booking_id, error=str(e))
            return StoreResult(success=False, error_message=f"Booking store unreachable: {e}")
        except UpstreamError as e:
            self.logger.error("Error uploading to WordPress", booking_id=booking_id, error=e.message)
            return StoreResult(success=False, error_message=e.message)

        try:
            body = response.json()
        except ValueError:
            body = {}
        self.logger.info("Documents stored in WordPress", booking_id=booking_id, files=len(documents))
        return StoreResult(success=True, response_data=body if isinstance(body, dict) else {})
