from fastapi import APIRouter, Depends, status

from clipvault.dependencies import get_upload_service
from clipvault.middleware import get_caller_id
from clipvault.models import (
    UploadFinalize,
    UploadFinalized,
    UploadLimits,
    UploadRequest,
    UploadUrlResponse,
)
from clipvault.services import UploadService

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.get("/limits", response_model=UploadLimits)
async def get_upload_limits(uploads: UploadService = Depends(get_upload_service)):
    return uploads.get_upload_limits()


@router.post("/request", response_model=UploadUrlResponse)
async def request_upload(
    upload_data: UploadRequest,
    user_id: str = Depends(get_caller_id),
    uploads: UploadService = Depends(get_upload_service),
):
    """
    Generate a presigned URL for direct upload to the bucket.
    The clip is only catalogued once /uploads/finalize is called.
    """
    return await uploads.request_upload(user_id, upload_data)


@router.post("/finalize", response_model=UploadFinalized, status_code=status.HTTP_201_CREATED)
async def finalize_upload(
    upload_data: UploadFinalize,
    user_id: str = Depends(get_caller_id),
    uploads: UploadService = Depends(get_upload_service),
):
    """Catalogue an uploaded clip."""
    return await uploads.finalize_upload(user_id, upload_data)
