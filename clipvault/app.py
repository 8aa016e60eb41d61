from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional

from clipvault.config import Settings, get_settings
from clipvault.database import connect_store, close_store
from clipvault.errors import NotFoundOrDenied, StorageUnavailable, ValidationFailure
from clipvault.middleware import CallerIdentity
from clipvault.routers import clips_router, sessions_router, uploads_router
from clipvault.services import S3Service
from clipvault.store import ClipStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    opened_here = app.state.store is None
    if opened_here:
        app.state.store = await connect_store(app.state.settings)
    yield
    # Shutdown
    if opened_here:
        await close_store()
        app.state.store = None


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ClipStore] = None,
    s3: Optional[S3Service] = None,
) -> FastAPI:
    """Build the API.

    The caller identity policy is resolved here, once; a production
    settings object with the development identity enabled is refused.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="ClipVault API",
        description="Catalog, filter and search training clips",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.identity = CallerIdentity.from_settings(settings)
    app.state.store = store
    app.state.s3 = s3 or S3Service(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.frontend_url.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFoundOrDenied)
    async def not_found_handler(request: Request, exc: NotFoundOrDenied):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

    @app.exception_handler(ValidationFailure)
    async def validation_handler(request: Request, exc: ValidationFailure):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})

    @app.exception_handler(StorageUnavailable)
    async def storage_handler(request: Request, exc: StorageUnavailable):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": exc.message}
        )

    # Include routers
    app.include_router(clips_router)
    app.include_router(sessions_router)
    app.include_router(uploads_router)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "ok", "message": "ClipVault API"}

    @app.get("/health")
    async def health():
        """Detailed health check."""
        store_ok = app.state.store is not None and await app.state.store.ping()
        return {
            "status": "healthy" if store_ok else "degraded",
            "database": "connected" if store_ok else "disconnected",
        }

    return app
