"""
Guest document upload endpoint.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from ..models import UploadResponse, ErrorResponse
from ..dependencies import get_logger, get_upload_service
from ..errors import DocumentRelayError
from ..services.upload_service import UploadService, UploadSubmission
from ...utils.models import IncomingFile


router = APIRouter(tags=["uploads"])


async def _incoming_file(upload: UploadFile) -> IncomingFile:
    size = upload.size
    content = None
    if size is None:
        content = await upload.read()
        size = len(content)
    return IncomingFile(
        filename=upload.filename or "document",
        content_type=upload.content_type or "application/octet-stream",
        size=size,
        content=content,
        source=upload,
    )


def _text(value) -> Optional[str]:
    return value if isinstance(value, str) else None


@router.post(
    "/upload",
    response_model=UploadResponse,
    summary="Upload travel documents",
    description=(
        "Multipart form: bookingId (secure reference), guestName, email, travelers (JSON), "
        "files, and fileMetadata[<index>] (JSON) per file."
    ),
    responses={
        200: {"description": "Files processed"},
        400: {"description": "Invalid submission", "model": ErrorResponse},
        500: {"description": "Internal server error", "model": ErrorResponse}
    }
)
async def upload_documents(
    request: Request,
    upload_service: UploadService = Depends(get_upload_service)
):
    """Validate the submission, store it with the booking and email the administrator."""
    form = await request.form()
    try:
        files = [await _incoming_file(f) for f in form.getlist("files") if isinstance(f, UploadFile)]
        submission = UploadSubmission(
            booking_reference=_text(form.get("bookingId")),
            guest_name=_text(form.get("guestName")),
            guest_email=_text(form.get("email")),
            travelers_json=_text(form.get("travelers")),
            files=files,
            metadata_fields=[(k, v) for k, v in form.multi_items() if k.startswith("fileMetadata[")],
        )
        outcome = await upload_service.process_upload(submission)
    except DocumentRelayError:
        raise
    except Exception as e:
        get_logger().error("Upload error", error=str(e), exc_info=True)
        raise DocumentRelayError("Failed to upload files") from e
    finally:
        await form.close()

    return {
        "success": True,
        "message": "Files uploaded successfully",
        "data": outcome.to_dict(),
    }
