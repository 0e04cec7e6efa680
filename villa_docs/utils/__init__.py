"""
Utility modules for the guest document relay.
"""

from .models import (
    DocumentType, Booking, Traveler, FileMetadata, IncomingFile, UploadedDocument,
    SecureBookingReference, StoreResult, PresenceResult, NotificationResult,
    UploadOutcome, ReminderRunResult, document_type_name
)
from .logger import setup_logger, get_logger, ReminderRunLogger

__all__ = [
    'DocumentType', 'Booking', 'Traveler', 'FileMetadata', 'IncomingFile', 'UploadedDocument',
    'SecureBookingReference', 'StoreResult', 'PresenceResult', 'NotificationResult',
    'UploadOutcome', 'ReminderRunResult', 'document_type_name',
    'setup_logger', 'get_logger', 'ReminderRunLogger'
]
