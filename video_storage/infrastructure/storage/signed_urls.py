"""
Signed playback URLs for private videos.

A generator is bound to one store and a default lifetime. Each call signs a
GET for one key; a per-call lifetime applies to that call only.

Presigned URLs enable:
- Direct client playback without streaming through our server
- Time-limited access to private buckets
- No bucket-side state (revocation means rotating the signing key)
"""

import logging
from typing import Optional

from .client import ObjectStore

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN = 3600

# SigV4 presigned URLs cannot outlive 7 days
MAX_EXPIRES_IN = 604800


def validate_expires_in(expires_in: int) -> int:
    """Check a lifetime is within what SigV4 accepts."""
    if isinstance(expires_in, bool) or not isinstance(expires_in, int):
        raise ValueError(f"expires_in must be an integer, got {expires_in!r}")
    if not 1 <= expires_in <= MAX_EXPIRES_IN:
        raise ValueError(
            f"expires_in must be between 1 and {MAX_EXPIRES_IN} seconds, got {expires_in}"
        )
    return expires_in


class VideoUrlGenerator:
    """
    Issues signed GET URLs for video keys.

    Usage:
        generator = VideoUrlGenerator(store, expires_in=3600)
        url = await generator("videos/intro.mp4")
        short_url = await generator("videos/intro.mp4", expires_in=60)
    """

    def __init__(
        self,
        store: ObjectStore,
        expires_in: int = DEFAULT_EXPIRES_IN,
    ) -> None:
        self._store = store
        self._expires_in = validate_expires_in(expires_in)

    @property
    def expires_in(self) -> int:
        """Default lifetime used when a call doesn't pass one."""
        return self._expires_in

    async def __call__(self, video_key: str, expires_in: Optional[int] = None) -> str:
        if not video_key or not video_key.strip():
            raise ValueError("Video key cannot be empty")

        lifetime = self._expires_in if expires_in is None else validate_expires_in(expires_in)
        url = await self._store.presigned_url(video_key, lifetime)

        logger.debug(
            "Issued signed URL",
            extra={"object_key": video_key, "expires_in": lifetime}
        )

        return url
