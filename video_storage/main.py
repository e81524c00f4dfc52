"""
FastAPI application entry point.

Serves signed playback URLs for videos uploaded with the CLI. Using an
application factory (create_app) so tests can build an app with their own
dependency overrides.

For local development:
    uvicorn video_storage.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.routes import health, videos
from .config.settings import get_settings
from .core.upload.models import Provider

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration problems at startup rather than on first request."""
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level_number)

    logger.info(
        "Video storage API starting",
        extra={"version": __version__, "mock_mode": settings.storage_mock_mode}
    )

    for provider in Provider:
        missing = settings.missing_fields(provider, require_bucket=True)
        if missing:
            logger.warning(
                "Signed URLs unavailable for provider",
                extra={"provider": provider.value, "missing_fields": missing}
            )

    yield

    logger.info("Video storage API shutting down")


def create_app() -> FastAPI:
    """Application factory."""
    app = FastAPI(
        title="Video Storage API",
        version=__version__,
        description="Issue time-limited signed URLs for private video playback.",
        lifespan=lifespan,
    )

    settings = get_settings()

    # Browsers play the signed URL directly, the API itself is read-only
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/health", tags=["Health"])
    app.include_router(videos.router, prefix="/api/v1/videos", tags=["Videos"])

    return app


app = create_app()
