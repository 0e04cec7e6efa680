"""
Remote booking store integration.
"""

from .booking_store_client import BookingStoreClient

__all__ = ['BookingStoreClient']
