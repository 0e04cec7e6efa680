"""
Configuration settings for the Villa Claudia guest document relay.
"""
import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class BookingStoreConfig:
    """Remote booking store (WordPress plugin) API settings."""
    api_url: str = ""
    api_key: str = ""
    timeout_seconds: float = 30.0

    @property
    def is_configured(self) -> bool:
        return bool(self.api_url and self.api_key)

    def endpoint(self, path: str) -> str:
        """Join the API base URL and a path without doubling slashes."""
        return f"{self.api_url.rstrip('/')}/{path.lstrip('/')}"


@dataclass(frozen=True)
class EmailConfig:
    """SMTP transport and address settings."""
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    username: str = ""
    password: str = ""
    use_tls: bool = True
    sender: str = "Villa Claudia <no-reply@villa-claudia.eu>"
    admin_email: str = "administration@villa-claudia.eu"


@dataclass(frozen=True)
class ReminderConfig:
    """Document reminder job settings."""
    cron_secret: str = ""
    upload_page_url: str = "https://villa-claudia.eu/upload-documents"
    window_min_days: float = 6.5
    window_max_days: float = 7.5
    confirmed_status: str = "confirmed"


@dataclass(frozen=True)
class AppConfig:
    """Process-wide configuration, built once at startup."""
    booking_store: BookingStoreConfig = field(default_factory=BookingStoreConfig)
    email: EmailConfig = field(default_factory=EmailConfig)
    reminders: ReminderConfig = field(default_factory=ReminderConfig)
    log_level: str = "INFO"


def load_config() -> AppConfig:
    """Build an AppConfig from the current environment."""
    return AppConfig(
        booking_store=BookingStoreConfig(
            api_url=os.getenv("WORDPRESS_API_URL", ""),
            api_key=os.getenv("WORDPRESS_API_KEY", ""),
            timeout_seconds=float(os.getenv("BOOKING_STORE_TIMEOUT", "30")),
        ),
        email=EmailConfig(
            smtp_server=os.getenv("SMTP_SERVER", "smtp.gmail.com"),
            smtp_port=int(os.getenv("SMTP_PORT", "587")),
            username=os.getenv("SMTP_USER", ""),
            password=os.getenv("SMTP_PASSWORD", ""),
            use_tls=_env_bool("SMTP_USE_TLS"),
            sender=os.getenv("EMAIL_FROM", "Villa Claudia <no-reply@villa-claudia.eu>"),
            admin_email=os.getenv("ADMIN_EMAIL", "administration@villa-claudia.eu"),
        ),
        reminders=ReminderConfig(
            cron_secret=os.getenv("CRON_SECRET", ""),
            upload_page_url=os.getenv("UPLOAD_PAGE_URL", "https://villa-claudia.eu/upload-documents"),
        ),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
