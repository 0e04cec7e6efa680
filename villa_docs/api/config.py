"""
Configuration settings for FastAPI application.
"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "https://villa-claudia.eu", "https://www.villa-claudia.eu"]


class FastAPISettings(BaseSettings):
    """HTTP surface settings with environment variable loading."""

    # Application settings
    app_name: str = Field(default="Villa Claudia Document API", description="Application name")
    app_description: str = Field(default="Guest travel document upload and reminder API", description="Application description")
    app_version: str = Field(default="1.0.0", description="Application version")

    # Server settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8001, description="Server port")
    environment: str = Field(default="development", description="Environment (development, staging, production)")

    # API settings
    api_version: str = Field(default="v1", description="API version")
    api_prefix: str = Field(default="/api", description="API prefix")

    # Comma-separated; kept as a string so the env value is not JSON-decoded
    cors_origins_raw: Optional[str] = Field(
        default=None,
        description="Allowed CORS origins",
        validation_alias="CORS_ORIGINS"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = {"extra": "ignore", "env_file": ".env"}

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        return str(v).upper() if v else "INFO"

    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins or return the defaults."""
        if not self.cors_origins_raw:
            return list(DEFAULT_CORS_ORIGINS)
        origins = [origin.strip() for origin in self.cors_origins_raw.split(',') if origin.strip()]
        return origins or list(DEFAULT_CORS_ORIGINS)


# Global settings instance
settings = FastAPISettings()
