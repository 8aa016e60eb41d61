from fastapi import APIRouter, Depends, status

from clipvault.catalog import ClipCatalog
from clipvault.dependencies import get_catalog
from clipvault.middleware import get_caller_id
from clipvault.models import SessionCreate, SessionCreated, SessionRename, SessionResponse

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionCreated, status_code=status.HTTP_201_CREATED)
async def create_session(
    session_data: SessionCreate,
    user_id: str = Depends(get_caller_id),
    catalog: ClipCatalog = Depends(get_catalog),
):
    session_id = await catalog.create_session(user_id, session_data.name)
    return SessionCreated(session_id=session_id)


@router.get("", response_model=list[SessionResponse])
async def list_sessions(
    user_id: str = Depends(get_caller_id),
    catalog: ClipCatalog = Depends(get_catalog),
):
    """List the caller's sessions, newest first."""
    return await catalog.list_sessions(user_id)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    user_id: str = Depends(get_caller_id),
    catalog: ClipCatalog = Depends(get_catalog),
):
    return await catalog.get_session(user_id, session_id)


@router.patch("/{session_id}", response_model=SessionResponse)
async def rename_session(
    session_id: str,
    session_data: SessionRename,
    user_id: str = Depends(get_caller_id),
    catalog: ClipCatalog = Depends(get_catalog),
):
    return await catalog.rename_session(user_id, session_id, session_data.name)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    user_id: str = Depends(get_caller_id),
    catalog: ClipCatalog = Depends(get_catalog),
):
    """Delete a session. Its clips are kept and still reference it."""
    await catalog.delete_session(user_id, session_id)
