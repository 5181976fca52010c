"""
Upload API routes.
Death certificates and asset documents are uploaded here first; the
returned URL is then stored on the asset or vault request.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.database import get_db
from app.modules.uploads.services import read_upload, store_document
from app.modules.users.models import User
from app.shared.schemas import CamelModel

router = APIRouter()


class UploadResponse(CamelModel):
    success: bool = True
    file_name: str
    url: str
    size: int
    type: Optional[str] = None
    original_name: Optional[str] = None


@router.post("", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Upload a document (JPG, PNG or PDF, max 10MB)."""
    content = await read_upload(file)
    return store_document(db, user.id, file.filename, file.content_type, content)
