"""
Document upload storage.

Files land in UPLOAD_DIR/<user_id>/<timestamp>-<name> and are served back
under /files/. Only JPEG, PNG and PDF up to MAX_UPLOAD_BYTES are accepted,
and the file's own signature has to agree with the declared content type.
"""

import logging
import re
import time
from pathlib import Path
from typing import Any, Dict, Optional

import filetype
from fastapi import UploadFile
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InternalError, ValidationError
from app.shared.models.audit import AuditAction, AuditResource
from app.shared.repository import commit_or_raise
from app.shared.services.audit import record_audit

logger = logging.getLogger(__name__)

FILES_URL_PREFIX = "/files"
UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
UPLOAD_CHUNK_BYTES = 1024 * 1024


def sanitize_filename(filename: Optional[str]) -> str:
    """Strip directories and anything outside [A-Za-z0-9._-] from an uploaded name."""
    name = Path(filename or "").name
    name = UNSAFE_FILENAME_CHARS.sub("_", name).strip("._")
    return name or "document"


def _too_large() -> ValidationError:
    limit_mb = settings.MAX_UPLOAD_BYTES // (1024 * 1024)
    message = f"File size too large. Maximum {limit_mb}MB allowed."
    return ValidationError(message, errors=[{"field": "file", "message": message}])


async def read_upload(file: UploadFile, chunk_size: int = UPLOAD_CHUNK_BYTES) -> bytes:
    """
    Read an uploaded file in chunks.

    Stops with a ValidationError as soon as more than MAX_UPLOAD_BYTES have
    been read, so an oversized body is never held in memory in full.
    """
    limit = settings.MAX_UPLOAD_BYTES
    buffer = bytearray()
    while True:
        chunk = await file.read(min(chunk_size, limit + 1 - len(buffer)))
        if not chunk:
            return bytes(buffer)
        buffer.extend(chunk)
        if len(buffer) > limit:
            logger.warning(f"Rejected upload {file.filename!r}: over {limit} bytes")
            raise _too_large()


def validate_upload(content_type: Optional[str], content: bytes) -> None:
    errors = []
    if content_type not in settings.ALLOWED_UPLOAD_TYPES:
        errors.append({"field": "file", "message": "Invalid file type. Only JPG, PNG, and PDF are allowed."})
    elif content and filetype.guess_mime(content) != content_type:
        errors.append({"field": "file", "message": "File content does not match its declared type."})
    if not content:
        errors.append({"field": "file", "message": "File is empty."})
    elif len(content) > settings.MAX_UPLOAD_BYTES:
        errors.append(_too_large().errors[0])

    if errors:
        raise ValidationError("; ".join(e["message"] for e in errors), errors=errors)


def store_document(
    db: Session,
    user_id: int,
    filename: Optional[str],
    content_type: Optional[str],
    content: bytes,
) -> Dict[str, Any]:
    """Validate and write an uploaded document; returns its public description."""
    validate_upload(content_type, content)

    safe_name = sanitize_filename(filename)
    file_name = f"{user_id}/{int(time.time() * 1000)}-{safe_name}"
    destination = Path(settings.UPLOAD_DIR) / file_name

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(content)
    except OSError as e:
        logger.error(f"Failed to store upload for user {user_id}: {e}", exc_info=True)
        raise InternalError("Failed to upload file")

    record_audit(
        db, AuditAction.FILE_UPLOAD, AuditResource.DOCUMENT,
        user_id=user_id,
        description=f"Uploaded {safe_name}",
        details={"file_name": file_name, "size": len(content), "type": content_type},
    )
    try:
        commit_or_raise(db, "audit log")
    except InternalError:
        # No audit row, so the file goes too
        destination.unlink(missing_ok=True)
        raise

    logger.info(f"Stored {len(content)} byte upload {file_name}")
    return {
        "success": True,
        "file_name": file_name,
        "url": f"{FILES_URL_PREFIX}/{file_name}",
        "size": len(content),
        "type": content_type,
        "original_name": filename,
    }
