"""
Booking lookup and document presence endpoints.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from ..models import BookingResponse, DocumentStatusResponse, DocumentStatus, ErrorResponse
from ..dependencies import get_booking_service
from ..services.booking_service import BookingService


router = APIRouter(tags=["bookings"])


@router.get(
    "/booking",
    response_model=BookingResponse,
    summary="Get booking information",
    description="Fetch a single booking from the booking store",
    responses={
        200: {"description": "Booking retrieved successfully"},
        400: {"description": "Missing booking ID", "model": ErrorResponse},
        500: {"description": "Booking store error", "model": ErrorResponse}
    }
)
async def get_booking(
    booking_id: Optional[str] = Query(None, alias="id", description="Booking ID"),
    booking_service: BookingService = Depends(get_booking_service)
):
    """
    Get a booking's check-in/out dates, guest and status.

    Raises:
        ClientInputError: if the id is missing
        UpstreamError: if the booking store fails
    """
    data = await booking_service.get_booking(booking_id or "")
    return {
        "success": True,
        "message": "Booking retrieved",
        "data": data if isinstance(data, dict) else {"booking": data},
    }


@router.get(
    "/admin/check-documents",
    response_model=DocumentStatusResponse,
    summary="Check whether documents were uploaded",
    description="Best-effort check; answers false when the booking store cannot be asked",
    responses={
        200: {"description": "Document status retrieved"},
        400: {"description": "Missing booking ID", "model": ErrorResponse}
    }
)
async def check_documents(
    booking_id: Optional[str] = Query(None, alias="bookingId", description="Booking ID"),
    booking_service: BookingService = Depends(get_booking_service)
):
    presence = await booking_service.check_documents(booking_id or "")
    message = ("Documents found for this booking" if presence.has_documents
               else "No documents found for this booking")
    return {
        "success": True,
        "message": message,
        "data": DocumentStatus(booking_id=booking_id, has_documents=presence.has_documents),
    }
