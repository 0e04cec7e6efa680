"""
Validation of guest document submissions.

Checks run in a fixed order and the first violated rule is reported:
reference format, guest name, presence of files, total size, then each
file's type and size. Nothing here touches the network.
"""
import json
import re
from typing import Optional, Dict, Any, List, Iterable, Tuple

from ..api.errors import ClientInputError
from ..utils.models import (
    SecureBookingReference, IncomingFile, FileMetadata, Traveler, UploadedDocument
)
from ..utils.logger import get_logger

MB = 1024 * 1024
MAX_TOTAL_SIZE = 25 * MB
MAX_FILE_SIZE = 10 * MB
ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "application/pdf")

# real booking id, then one or two 8-digit tokens
REFERENCE_PATTERN = re.compile(r"^(\d+?)(\d{8})(\d{8})?$", re.ASCII)
METADATA_KEY_PATTERN = re.compile(r"^fileMetadata\[(\d+)\]$", re.ASCII)

logger = get_logger("document_validator")


def parse_secure_reference(raw: Optional[str]) -> SecureBookingReference:
    """
    Split a secure booking reference into the booking id and its tokens.

    Raises:
        ClientInputError: if the reference is missing or malformed
    """
    if not raw:
        raise ClientInputError("Missing booking ID")
    match = REFERENCE_PATTERN.fullmatch(raw)
    if not match:
        raise ClientInputError("Invalid booking ID format")
    return SecureBookingReference(
        raw=raw,
        booking_id=match.group(1),
        first_token=match.group(2),
        second_token=match.group(3),
    )


def require_guest_name(guest_name: Optional[str]) -> str:
    if not guest_name or not guest_name.strip():
        raise ClientInputError("Missing guest name")
    return guest_name.strip()


def check_files_present(files: List[IncomingFile]):
    if not files:
        raise ClientInputError("No files provided")


def check_total_size(files: List[IncomingFile]) -> int:
    total = sum(f.size for f in files)
    if total > MAX_TOTAL_SIZE:
        total_mb = total / MB
        raise ClientInputError(
            f"Total file size ({total_mb:.2f}MB) exceeds 25MB limit. "
            "Please reduce file sizes or upload fewer files.",
            details={"total_size": total, "total_mb": round(total_mb, 2), "limit_mb": 25},
        )
    return total


def check_file(file: IncomingFile):
    """Reject a single file with a disallowed type or over the per-file limit."""
    if file.content_type not in ALLOWED_CONTENT_TYPES:
        raise ClientInputError(
            f"File type {file.content_type} is not supported. "
            "Please upload JPG, JPEG, PNG, or PDF files only.",
            details={"filename": file.filename, "type": file.content_type},
        )
    if file.size > MAX_FILE_SIZE:
        raise ClientInputError(
            f"File size exceeds 10MB limit ({file.filename}: {file.size / MB:.2f}MB)",
            details={"filename": file.filename, "size": file.size, "limit_mb": 10},
        )


def validate_files(files: List[IncomingFile]) -> int:
    """Run the file rules in order; returns the total size in bytes."""
    check_files_present(files)
    total = check_total_size(files)
    for f in files:
        check_file(f)
    return total


def parse_travelers(travelers_json: Optional[str]) -> List[Traveler]:
    if not travelers_json:
        return []
    try:
        data = json.loads(travelers_json)
    except json.JSONDecodeError as e:
        raise ClientInputError("Invalid travelers data", details={"error": str(e)})
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ClientInputError("Invalid travelers data", details={"error": "expected a list of objects"})
    return [Traveler.from_dict(item) for item in data]


def parse_metadata_entries(form_items: Iterable[Tuple[str, Any]]) -> List[FileMetadata]:
    """
    Collect fileMetadata[<index>] form fields, sorted by index.

    Keys that do not follow the fileMetadata[<n>] shape are ignored.
    """
    entries = []
    for key, value in form_items:
        match = METADATA_KEY_PATTERN.match(key)
        if not match:
            continue
        index = int(match.group(1))
        try:
            data = json.loads(value)
        except (TypeError, json.JSONDecodeError) as e:
            raise ClientInputError(f"Invalid metadata for file {index}", details={"error": str(e)})
        if not isinstance(data, dict):
            raise ClientInputError(f"Invalid metadata for file {index}")
        entries.append(FileMetadata.from_dict(index, data))
    entries.sort(key=lambda m: m.file_index)
    return entries


def pair_files_with_metadata(
    files: List[IncomingFile],
    metadata: List[FileMetadata]
) -> List[Tuple[IncomingFile, FileMetadata]]:
    """
    Pair each file with the metadata entry whose index is the file's position.

    A file without an entry gets FileMetadata.fallback(): traveler "Unknown",
    a passport and an empty document number. When an index is declared twice
    the first entry after sorting wins.
    """
    by_index: Dict[int, FileMetadata] = {}
    for entry in metadata:
        by_index.setdefault(entry.file_index, entry)

    pairs = []
    for position, f in enumerate(files):
        entry = by_index.get(position)
        if entry is None:
            logger.debug("No metadata for file, using fallback", position=position, filename=f.filename)
            entry = FileMetadata.fallback(position)
        pairs.append((f, entry))
    return pairs


def build_documents(pairs: List[Tuple[IncomingFile, FileMetadata]]) -> List[UploadedDocument]:
    return [
        UploadedDocument(
            original_name=f.filename,
            content=f.content if f.content is not None else b"",
            content_type=f.content_type,
            size=f.size,
            traveler_name=meta.traveler_name,
            document_type=meta.document_type,
            document_number=meta.document_number,
        )
        for f, meta in pairs
    ]
