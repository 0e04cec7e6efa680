"""
Error types raised by the services and translated into HTTP responses.
"""
from typing import Optional, Dict, Any


class DocumentRelayError(Exception):
    """Base class for errors carrying an HTTP status and error code."""
    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ClientInputError(DocumentRelayError):
    """Malformed or missing request input."""
    status_code = 400
    error_code = "INVALID_INPUT"


class AuthorizationError(DocumentRelayError):
    """Missing or incorrect scheduler secret."""
    status_code = 401
    error_code = "UNAUTHORIZED"


class UpstreamError(DocumentRelayError):
    """The booking store or mail transport failed or answered with an error."""
    status_code = 500
    error_code = "UPSTREAM_ERROR"

    def __init__(self, message: str, status: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.status = status
