from fastapi import Request

from clipvault.catalog import ClipCatalog
from clipvault.services import UploadService


def get_catalog(request: Request) -> ClipCatalog:
    state = request.app.state
    return ClipCatalog(
        state.store,
        state.s3,
        default_search_limit=state.settings.default_search_limit,
    )


def get_upload_service(request: Request) -> UploadService:
    state = request.app.state
    return UploadService(state.store, state.s3, state.settings)
