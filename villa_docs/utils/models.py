"""
Data models for the guest document relay.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any, List
from enum import Enum


class DocumentType(Enum):
    """Identity document kinds a traveler can upload."""
    PASSPORT = "passport"
    ID_CARD = "id_card"
    RESIDENCE_PERMIT = "residence_permit"
    DRIVERS_LICENSE = "drivers_license"


DOCUMENT_TYPE_NAMES = {
    DocumentType.PASSPORT.value: "Passport",
    DocumentType.ID_CARD.value: "National ID Card",
    DocumentType.RESIDENCE_PERMIT.value: "Residence Permit",
    DocumentType.DRIVERS_LICENSE.value: "Driver's License",
}


def document_type_name(document_type: str) -> str:
    """Human-readable name for a document type, unknown values pass through."""
    return DOCUMENT_TYPE_NAMES.get(document_type, document_type)


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass
class Booking:
    """Booking record as exposed by the remote booking store."""
    booking_id: str
    guest_name: str = ""
    guest_email: Optional[str] = None
    check_in_date: Optional[datetime] = None
    check_out_date: Optional[datetime] = None
    status: str = ""
    has_documents: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Booking':
        """Create a Booking from the store's camelCase payload."""
        return cls(
            booking_id=str(data.get('bookingId', data.get('id', ''))),
            guest_name=data.get('guestName') or "",
            guest_email=data.get('guestEmail') or None,
            check_in_date=_parse_datetime(data.get('checkInDate')),
            check_out_date=_parse_datetime(data.get('checkOutDate')),
            status=data.get('status') or "",
            has_documents=data.get('hasUploadedDocuments') is True,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'booking_id': self.booking_id,
            'guest_name': self.guest_name,
            'guest_email': self.guest_email,
            'check_in_date': self.check_in_date.isoformat() if self.check_in_date else None,
            'check_out_date': self.check_out_date.isoformat() if self.check_out_date else None,
            'status': self.status,
            'has_documents': self.has_documents,
        }

    def __str__(self) -> str:
        return (f"Booking(booking_id='{self.booking_id}', "
                f"guest='{self.guest_name}', "
                f"check_in='{self.check_in_date}', "
                f"status='{self.status}')")


@dataclass
class Traveler:
    """A traveler declared on the upload form."""
    name: str
    document_type: str = DocumentType.PASSPORT.value
    document_number: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Traveler':
        return cls(
            name=str(data.get('name') or ""),
            document_type=str(data.get('documentType') or DocumentType.PASSPORT.value),
            document_number=str(data.get('documentNumber') or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'document_type': self.document_type,
            'document_number': self.document_number,
        }


@dataclass
class FileMetadata:
    """Per-file metadata sent as fileMetadata[<index>], keyed by file position."""
    file_index: int
    traveler_name: str = "Unknown"
    document_type: str = DocumentType.PASSPORT.value
    document_number: str = ""

    @classmethod
    def fallback(cls, index: int) -> 'FileMetadata':
        """Metadata used for a file the client sent no entry for."""
        return cls(file_index=index)

    @classmethod
    def from_dict(cls, index: int, data: Dict[str, Any]) -> 'FileMetadata':
        # Empty strings fall back the same way missing keys do
        return cls(
            file_index=index,
            traveler_name=data.get('travelerName') or "Unknown",
            document_type=data.get('documentType') or DocumentType.PASSPORT.value,
            document_number=data.get('documentNumber') or "",
        )


@dataclass
class IncomingFile:
    """A file part as received from the client, before validation."""
    filename: str
    content_type: str
    size: int
    content: Optional[bytes] = None
    source: Any = field(default=None, repr=False)

    async def read(self) -> bytes:
        """Load the file bytes from the upload source, once."""
        if self.content is None:
            self.content = await self.source.read() if self.source is not None else b""
        return self.content


@dataclass
class UploadedDocument:
    """A validated file held in memory for forwarding and email attachment."""
    original_name: str
    content: bytes
    content_type: str
    size: int
    traveler_name: str
    document_type: str
    document_number: str

    def to_dict(self) -> Dict[str, Any]:
        """Summary without the file bytes."""
        return {
            'original_name': self.original_name,
            'size': self.size,
            'type': self.content_type,
            'traveler_name': self.traveler_name,
            'document_type': self.document_type,
            'document_number': self.document_number,
        }

    def store_info(self) -> Dict[str, str]:
        """Metadata sent to the booking store alongside the file."""
        return {
            'travelerName': self.traveler_name,
            'documentType': self.document_type,
            'documentNumber': self.document_number,
        }


@dataclass(frozen=True)
class SecureBookingReference:
    """Booking reference given to guests: the real id followed by 8-digit tokens."""
    raw: str
    booking_id: str
    first_token: str
    second_token: Optional[str] = None


@dataclass
class StoreResult:
    """Result of forwarding documents to the booking store."""
    success: bool
    error_message: Optional[str] = None
    response_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PresenceResult:
    """Result of a has-documents check; has_documents is False whenever the check failed."""
    has_documents: bool
    success: bool = True
    error_message: Optional[str] = None

    @classmethod
    def unknown(cls, error_message: str) -> 'PresenceResult':
        return cls(has_documents=False, success=False, error_message=error_message)


@dataclass
class NotificationResult:
    """Result of an email send."""
    success: bool
    recipient: Optional[str] = None
    error_message: Optional[str] = None


@dataclass
class UploadOutcome:
    """What the upload handler did with a valid submission."""
    booking_id: str
    guest_name: str
    guest_email: Optional[str]
    travelers: List[Traveler]
    documents: List[UploadedDocument]
    storage: StoreResult
    notification: NotificationResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            'booking_id': self.booking_id,
            'guest_name': self.guest_name,
            'files': [d.to_dict() for d in self.documents],
            'travelers': [t.to_dict() for t in self.travelers],
            'storage_accepted': self.storage.success,
            'notification_sent': self.notification.success,
        }


@dataclass
class ReminderRunResult:
    """Counts reported by one reminder run."""
    candidates: int = 0
    processed: int = 0
    sent: int = 0
    failed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'candidates': self.candidates,
            'processed': self.processed,
            'sent': self.sent,
            'failed': self.failed,
        }
