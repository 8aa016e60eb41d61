from pydantic import BaseModel, Field, model_validator
from typing import Optional
from enum import Enum


class Angle(str, Enum):
    FRONT = "front"
    SIDE = "side"
    FORTY_FIVE = "45"


class Apparatus(str, Enum):
    FLOOR = "floor"
    RINGS = "rings"
    BAR = "bar"
    PARALLETTES = "parallettes"


class ClipInDB(BaseModel):
    """A catalogued clip as stored. ``created_at`` is epoch milliseconds."""
    id: str = Field(alias="_id")
    user_id: str
    object_key: str
    created_at: int
    bytes: int
    duration_ms: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    tags: list[str] = []
    angle: Optional[Angle] = None
    apparatus: Optional[Apparatus] = None
    favorite: bool = False
    session_id: Optional[str] = None

    class Config:
        populate_by_name = True


class ClipResponse(BaseModel):
    id: str
    object_key: str
    created_at: int
    bytes: int
    duration_ms: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    tags: list[str] = []
    angle: Optional[Angle] = None
    apparatus: Optional[Apparatus] = None
    favorite: bool = False
    session_id: Optional[str] = None


class ClipMetaUpdate(BaseModel):
    """Metadata fields an owner may change. Omitted fields are left alone."""
    tags: Optional[list[str]] = None
    angle: Optional[Angle] = None
    apparatus: Optional[Apparatus] = None
    favorite: Optional[bool] = None
    session_id: Optional[str] = None  # explicit null clears the session

    @model_validator(mode="after")
    def reject_null_values(self):
        for name in ("tags", "angle", "apparatus", "favorite"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class DateRange(BaseModel):
    """Inclusive bounds on ``created_at`` (epoch ms)."""
    start: int
    end: int


class ClipFilters(BaseModel):
    """Listing filters. Every supplied field must match; absent fields match anything."""
    tags: Optional[list[str]] = None  # clip matches if it has ANY of these tags
    angle: Optional[Angle] = None  # exact camera angle
    apparatus: Optional[Apparatus] = None  # exact apparatus
    favorite: Optional[bool] = None  # favorite flag equals this value
    session_id: Optional[str] = None  # clip belongs to this session
    date_range: Optional[DateRange] = None  # applied while scanning the store


class PaginationOpts(BaseModel):
    num_items: int = Field(default=20, ge=1)
    cursor: Optional[str] = None


class ClipPage(BaseModel):
    page: list[ClipResponse]
    is_done: bool
    continue_cursor: Optional[str] = None


class SearchPage(BaseModel):
    results: list[ClipResponse]
    cursor: Optional[str] = None
    is_done: bool


class PlaybackUrlRequest(BaseModel):
    object_key: str


class PlaybackUrlResponse(BaseModel):
    get_url: str


def clip_to_response(clip: ClipInDB) -> ClipResponse:
    """Strip storage-only fields (owner) from a clip record."""
    return ClipResponse(**clip.model_dump(exclude={"user_id"}))
