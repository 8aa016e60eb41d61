from pydantic import BaseModel, Field
from typing import Optional


class UploadRequest(BaseModel):
    content_type: str
    ext: str = "mp4"
    size_bytes: int = Field(ge=0)


class UploadUrlResponse(BaseModel):
    object_key: str
    put_url: str


class UploadFinalize(BaseModel):
    """Sent once the bytes are in the bucket."""
    object_key: str
    bytes: int = Field(ge=0)
    duration_ms: Optional[float] = None  # Frontend can provide these after reading video
    width: Optional[int] = None
    height: Optional[int] = None


class UploadFinalized(BaseModel):
    clip_id: str


class UploadLimits(BaseModel):
    max_file_size_bytes: int
    max_file_size_mb: int
    allowed_mime_types: list[str]
