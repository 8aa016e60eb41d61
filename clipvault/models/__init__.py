from .clip import (
    Angle,
    Apparatus,
    ClipInDB,
    ClipResponse,
    ClipMetaUpdate,
    DateRange,
    ClipFilters,
    PaginationOpts,
    ClipPage,
    SearchPage,
    PlaybackUrlRequest,
    PlaybackUrlResponse,
    clip_to_response,
)
from .session import (
    SessionInDB,
    SessionCreate,
    SessionRename,
    SessionResponse,
    SessionCreated,
)
from .upload import (
    UploadRequest,
    UploadUrlResponse,
    UploadFinalize,
    UploadFinalized,
    UploadLimits,
)
