"""
Directory walking for video discovery.

The walk is a generator so large trees are never listed up front. Each call
to walk_video_files() starts a fresh traversal; nothing is cached between
calls.

Symlinked directories are not followed, so a cyclic link cannot make the
walk loop forever. Symlinks to regular files are treated like the files
they point to.
"""

import os
from pathlib import Path, PurePath
from typing import Iterator, Union

from .models import DiscoveredFile

VIDEO_EXTENSIONS = frozenset({"mp4", "webm", "mov", "avi", "mkv", "m4v", "ogv"})

# Pruned at any depth, never descended into
SKIPPED_DIRECTORIES = frozenset({"node_modules", ".git"})


def is_video_file(name: str) -> bool:
    """True if the file name carries a supported video extension."""
    _, ext = os.path.splitext(name)
    return ext.lower().lstrip(".") in VIDEO_EXTENSIONS


def walk_video_files(root: Union[str, os.PathLike]) -> Iterator[DiscoveredFile]:
    """
    Yield every video file beneath root, depth-first.

    Entries are sorted by name within each directory so the order is the
    same on every platform and every run.

    The root is checked when this function is called, not when the first
    item is requested, so a bad path fails before any upload work starts.

    Raises:
        FileNotFoundError: root does not exist
        NotADirectoryError: root is not a directory
        PermissionError: a directory cannot be listed (raised mid-walk)
    """
    root_path = Path(root)

    if not root_path.exists():
        raise FileNotFoundError(f"Source directory not found: {root_path}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Source path is not a directory: {root_path}")

    return _walk(root_path.resolve(), PurePath())


def _walk(directory: Path, relative: PurePath) -> Iterator[DiscoveredFile]:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            if entry.name in SKIPPED_DIRECTORIES:
                continue
            yield from _walk(Path(entry.path), relative / entry.name)
        elif entry.is_file() and is_video_file(entry.name):
            yield DiscoveredFile(
                absolute_path=Path(entry.path),
                relative_path=relative / entry.name,
            )
