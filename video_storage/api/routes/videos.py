"""
Signed URL endpoints for private video playback.

A frontend asks for a URL, gets a short-lived link, and streams the video
straight from the bucket. The API never proxies video bytes.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, Field

from ...core.upload.models import UnsupportedProviderError
from ...infrastructure.storage.client import ConfigurationError, StorageError
from ...infrastructure.storage.factories import create_video_url_generator
from ...infrastructure.storage.signed_urls import MAX_EXPIRES_IN
from ..dependencies import SettingsDep, StoreFactoryDep

logger = logging.getLogger(__name__)

router = APIRouter()


class SignedUrlResponse(BaseModel):
    """A signed playback URL."""
    key: str = Field(description="Object key of the video")
    url: str = Field(description="Time-limited GET URL")
    expires_in: int = Field(description="Lifetime of the URL in seconds")


@router.get(
    "/signed-url",
    response_model=SignedUrlResponse,
    summary="Issue a signed playback URL",
    responses={
        400: {"description": "Unsupported provider or invalid key"},
        502: {"description": "Storage backend failed to sign"},
        503: {"description": "Storage credentials not configured"},
    },
)
async def get_signed_url(
    settings: SettingsDep,
    store_factory: StoreFactoryDep,
    key: str = Query(min_length=1, description="Object key, e.g. videos/intro.mp4"),
    provider: str = Query(default="r2", description="Storage provider (r2 or s3)"),
    expires_in: Optional[int] = Query(
        default=None,
        ge=1,
        le=MAX_EXPIRES_IN,
        description="Lifetime in seconds. Defaults to SIGNED_URL_EXPIRES_IN.",
    ),
) -> SignedUrlResponse:
    try:
        generator = create_video_url_generator(
            provider,
            settings,
            store_factory=store_factory,
        )
        url = await generator(key, expires_in=expires_in)
    except UnsupportedProviderError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ConfigurationError as e:
        logger.error(
            "Signed URL requested without storage configuration",
            extra={"missing": e.missing}
        )
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return SignedUrlResponse(
        key=key,
        url=url,
        expires_in=generator.expires_in if expires_in is None else expires_in,
    )
