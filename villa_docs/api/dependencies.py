"""
Dependency injection and service container for FastAPI application.
"""
from functools import lru_cache

from fastapi import Depends

from ..booking_store.booking_store_client import BookingStoreClient
from ..guest_communications.notifier import Notifier
from ..utils.logger import setup_logger
from .config import settings
from .services.booking_service import BookingService
from .services.reminder_service import ReminderService
from .services.upload_service import UploadService
from config.settings import AppConfig, load_config


@lru_cache(maxsize=1)
def get_app_config() -> AppConfig:
    """Configuration read once for the process lifetime."""
    return load_config()


@lru_cache(maxsize=1)
def get_logger():
    """Get application logger instance."""
    return setup_logger("villa_docs", settings.log_level)


def get_booking_store_client(config: AppConfig = Depends(get_app_config)) -> BookingStoreClient:
    return BookingStoreClient(config.booking_store)


def get_notifier(config: AppConfig = Depends(get_app_config)) -> Notifier:
    return Notifier(config.email, config.reminders)


def get_booking_service(
    store_client: BookingStoreClient = Depends(get_booking_store_client),
) -> BookingService:
    return BookingService(store_client, get_logger())


def get_upload_service(
    store_client: BookingStoreClient = Depends(get_booking_store_client),
    notifier: Notifier = Depends(get_notifier),
) -> UploadService:
    return UploadService(store_client, notifier, get_logger())


def get_reminder_service(
    config: AppConfig = Depends(get_app_config),
    store_client: BookingStoreClient = Depends(get_booking_store_client),
    notifier: Notifier = Depends(get_notifier),
) -> ReminderService:
    return ReminderService(store_client, notifier, config.reminders, get_logger())


def reset_dependencies():
    """Drop cached configuration and logger, e.g. after the environment changed."""
    get_app_config.cache_clear()
    get_logger.cache_clear()
