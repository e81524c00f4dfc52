"""
Object key and content type resolution.

Both are pure functions: the same inputs always give the same output and
nothing outside the arguments is read.
"""

import os
from pathlib import PurePath
from typing import Union

CONTENT_TYPES = {
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
    ".avi": "video/x-msvideo",
    ".mkv": "video/x-matroska",
    ".m4v": "video/x-m4v",
    ".ogv": "video/ogg",
}

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def normalize_path(relative_path: Union[str, PurePath]) -> str:
    """Render a relative path with forward slashes on every platform."""
    if isinstance(relative_path, PurePath):
        return relative_path.as_posix()
    return relative_path.replace("\\", "/")


def build_object_key(relative_path: Union[str, PurePath], prefix: str = "") -> str:
    """
    Map a path relative to the source directory onto an object key.

    The prefix is prepended verbatim. Pass "videos/" rather than "videos"
    if the key should look like a folder.

    Raises:
        ValueError: the path holds bytes that are not valid UTF-8, which
            os.fsdecode keeps as lone surrogates. Such names cannot be sent
            as object keys.
    """
    key = f"{prefix}{normalize_path(relative_path)}"
    try:
        key.encode("utf-8")
    except UnicodeEncodeError:
        raise ValueError(
            f"File name is not valid UTF-8 and cannot be used as an object key: {normalize_path(relative_path)!r}"
        ) from None
    return key


def content_type_for(name: Union[str, PurePath]) -> str:
    """
    Resolve a MIME type from an extension ("mp4", ".MP4") or a file name.

    Anything not in CONTENT_TYPES is sent as application/octet-stream.
    """
    value = str(name).lower()
    _, ext = os.path.splitext(value)
    if not ext:
        ext = value if value.startswith(".") else f".{value}"
    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)
