"""
Configuration module for the guest document relay.
"""

from .settings import AppConfig, BookingStoreConfig, EmailConfig, ReminderConfig, load_config

__all__ = ['AppConfig', 'BookingStoreConfig', 'EmailConfig', 'ReminderConfig', 'load_config']
