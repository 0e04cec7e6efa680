"""
Upload service: validates a guest document submission and fans it out to the
booking store and the administrator's inbox.
"""
from dataclasses import dataclass, field
from typing import Optional, List, Tuple, Any

from ...booking_store.booking_store_client import BookingStoreClient
from ...document_intake import validator
from ...guest_communications.notifier import Notifier
from ...utils.models import IncomingFile, UploadOutcome


@dataclass
class UploadSubmission:
    """Raw form input of one upload request."""
    booking_reference: Optional[str]
    guest_name: Optional[str]
    guest_email: Optional[str] = None
    travelers_json: Optional[str] = None
    files: List[IncomingFile] = field(default_factory=list)
    metadata_fields: List[Tuple[str, Any]] = field(default_factory=list)


class UploadService:
    """Service for processing document uploads."""

    def __init__(self, store_client: BookingStoreClient, notifier: Notifier, logger):
        self.store_client = store_client
        self.notifier = notifier
        self.logger = logger

    async def process_upload(self, submission: UploadSubmission) -> UploadOutcome:
        """
        Validate, forward and notify.

        Validation raises ClientInputError on the first violated rule, before
        anything is sent upstream. Store and email failures are logged and
        reported in the outcome; neither stops the other.
        """
        reference = validator.parse_secure_reference(submission.booking_reference)
        booking_id = reference.booking_id
        guest_name = validator.require_guest_name(submission.guest_name)
        total_size = validator.validate_files(submission.files)
        travelers = validator.parse_travelers(submission.travelers_json)
        metadata = validator.parse_metadata_entries(submission.metadata_fields)

        for f in submission.files:
            await f.read()
        pairs = validator.pair_files_with_metadata(submission.files, metadata)
        documents = validator.build_documents(pairs)

        self.logger.info("Upload validated", booking_id=booking_id, files=len(documents), total_size=total_size)

        storage = await self.store_client.upload_documents(booking_id, documents)
        if not storage.success:
            # Email the documents even if the store rejected them
            self.logger.error("WordPress upload failed", booking_id=booking_id, error=storage.error_message)

        notification = await self.notifier.send_admin_notification(
            booking_id=booking_id,
            guest_name=guest_name,
            guest_email=submission.guest_email or None,
            travelers=travelers,
            documents=documents,
        )
        if not notification.success:
            self.logger.error("Failed to send admin notification email", booking_id=booking_id,
                              error=notification.error_message)

        return UploadOutcome(
            booking_id=booking_id,
            guest_name=guest_name,
            guest_email=submission.guest_email or None,
            travelers=travelers,
            documents=documents,
            storage=storage,
            notification=notification,
        )
