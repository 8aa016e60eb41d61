from .clips import router as clips_router
from .sessions import router as sessions_router
from .uploads import router as uploads_router
