"""
Immutable data models for API responses.
"""
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict, field_serializer


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class APIResponse(BaseModel):
    """Base API response model."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    success: bool = Field(..., description="Whether the request was successful")
    message: str = Field(..., description="Response message")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")

    @field_serializer('timestamp')
    def serialize_timestamp(self, timestamp: datetime) -> str:
        return timestamp.isoformat()


class ErrorResponse(APIResponse):
    """Error response model."""
    error_code: Optional[str] = Field(None, description="Error code for debugging")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class HealthResponse(BaseModel):
    """Health check response model."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(default_factory=_utcnow, description="Health check timestamp")
    version: str = Field(..., description="API version")
    dependencies: Dict[str, str] = Field(default_factory=dict, description="Dependency statuses")

    @field_serializer('timestamp')
    def serialize_timestamp(self, timestamp: datetime) -> str:
        return timestamp.isoformat()


class BookingResponse(APIResponse):
    """Response model for a booking lookup; data is the booking store payload."""
    data: Dict[str, Any] = Field(..., description="Booking as returned by the booking store")


class DocumentStatus(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    booking_id: str = Field(..., description="Booking ID")
    has_documents: bool = Field(..., description="Whether documents were uploaded for the booking")


class DocumentStatusResponse(APIResponse):
    """Response model for the document presence check."""
    data: DocumentStatus


class TravelerInfo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    document_type: str
    document_number: str


class UploadedFileInfo(BaseModel):
    """Summary of one uploaded file (no content)."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    original_name: str = Field(..., description="Filename as uploaded")
    size: int = Field(..., ge=0, description="Size in bytes")
    type: str = Field(..., description="Declared media type")
    traveler_name: str
    document_type: str
    document_number: str


class UploadResult(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    booking_id: str = Field(..., description="Booking ID extracted from the secure reference")
    guest_name: str
    files: List[UploadedFileInfo]
    travelers: List[TravelerInfo] = Field(default_factory=list)
    storage_accepted: bool = Field(..., description="Whether the booking store accepted the files")
    notification_sent: bool = Field(..., description="Whether the administrator email was sent")


class UploadResponse(APIResponse):
    """Response model for a document upload."""
    data: UploadResult


class ReminderRunSummary(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    candidates: int = Field(..., ge=0, description="Upcoming bookings examined")
    processed: int = Field(..., ge=0, description="Bookings that needed a reminder")
    sent: int = Field(..., ge=0, description="Reminders sent")
    failed: int = Field(..., ge=0, description="Reminders that failed to send")


class ReminderRunResponse(APIResponse):
    """Response model for a reminder run."""
    data: ReminderRunSummary
