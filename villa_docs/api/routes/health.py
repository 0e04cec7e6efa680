"""
Health check endpoint.
"""
from fastapi import APIRouter, Depends
from ..models import HealthResponse
from ..config import settings
from ..dependencies import get_app_config
from config.settings import AppConfig


router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Check if the API is running and which collaborators are configured",
    responses={
        200: {"description": "Service is healthy"}
    }
)
async def health_check(config: AppConfig = Depends(get_app_config)) -> HealthResponse:
    """
    Health check endpoint for monitoring. Does not contact the booking store.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        dependencies={
            "booking_store": "configured" if config.booking_store.is_configured else "not_configured",
            "smtp": "configured" if config.email.username else "not_configured",
            "cron_secret": "configured" if config.reminders.cron_secret else "not_configured",
        }
    )
