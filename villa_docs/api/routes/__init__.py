"""
API routes and endpoints.
"""

from . import bookings, health, reminders, uploads

__all__ = ["bookings", "health", "reminders", "uploads"]
