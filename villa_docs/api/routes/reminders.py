"""
Scheduled job trigger for document reminders.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Header

from ..models import ReminderRunResponse, ErrorResponse
from ..dependencies import get_app_config, get_logger, get_reminder_service
from ..errors import AuthorizationError, UpstreamError
from ..security.cron_auth import verify_cron_secret
from ..services.reminder_service import ReminderService
from config.settings import AppConfig


router = APIRouter(prefix="/cron", tags=["cron"])


@router.get(
    "/document-reminders",
    response_model=ReminderRunResponse,
    summary="Send document reminders",
    description="Triggered once a day by the hosting cron job. Requires 'Authorization: Bearer <CRON_SECRET>'.",
    responses={
        200: {"description": "Reminder run completed, possibly with failed sends"},
        401: {"description": "Missing or wrong scheduler secret", "model": ErrorResponse},
        500: {"description": "Upcoming bookings could not be fetched", "model": ErrorResponse}
    }
)
async def run_document_reminders(
    authorization: Optional[str] = Header(None),
    config: AppConfig = Depends(get_app_config),
    reminder_service: ReminderService = Depends(get_reminder_service)
):
    logger = get_logger()
    try:
        verify_cron_secret(authorization, config.reminders.cron_secret)
    except AuthorizationError:
        logger.error("Unauthorized access attempt to reminder job")
        raise

    logger.info("Starting document reminders process")
    try:
        result = await reminder_service.process_document_reminders()
    except UpstreamError as e:
        logger.error("Error running document reminder scheduler", error=e.message)
        raise UpstreamError("Failed to process document reminders", status=e.status,
                            details={"error": e.message}) from e
    logger.info("Document reminders completed", **result.to_dict())

    return {
        "success": True,
        "message": "Document reminders processed successfully",
        "data": result.to_dict(),
    }
