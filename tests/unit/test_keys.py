"""
Unit tests for object key mapping and content type resolution.
"""

from pathlib import PurePath, PurePosixPath, PureWindowsPath

import pytest

from video_storage.core.upload.keys import (
    CONTENT_TYPES,
    DEFAULT_CONTENT_TYPE,
    build_object_key,
    content_type_for,
    normalize_path,
)


class TestBuildObjectKey:
    """Key = prefix + relative path with forward slashes."""

    def test_prefix_and_nested_path(self):
        assert build_object_key(PurePosixPath("sub/b.webm"), "videos/") == "videos/sub/b.webm"

    def test_no_prefix(self):
        assert build_object_key(PurePath("a.mp4")) == "a.mp4"

    def test_prefix_is_not_given_a_separator(self):
        """Callers who want a folder-style prefix pass the trailing slash."""
        assert build_object_key("a.mp4", "videos") == "videosa.mp4"

    def test_windows_paths_use_forward_slashes(self):
        path = PureWindowsPath("season1\\ep1\\intro.mkv")
        assert build_object_key(path, "shows/") == "shows/season1/ep1/intro.mkv"

    def test_backslashes_in_strings_are_normalized(self):
        assert build_object_key("sub\\b.webm", "v/") == "v/sub/b.webm"

    @pytest.mark.parametrize("relative,prefix", [
        (PurePosixPath("a.mp4"), ""),
        (PurePosixPath("x/y/z.mov"), "archive/2024/"),
        (PureWindowsPath("x\\y.ogv"), "p-"),
        ("dir/file.m4v", "videos/"),
    ])
    def test_key_equals_prefix_plus_normalized_path(self, relative, prefix):
        key = build_object_key(relative, prefix)

        assert key == prefix + normalize_path(relative)
        assert "\\" not in key
        # Same inputs, same key
        assert build_object_key(relative, prefix) == key

    def test_undecodable_file_name_is_rejected(self):
        """os.fsdecode keeps a stray 0xff byte as a lone surrogate."""
        with pytest.raises(ValueError, match="not valid UTF-8") as exc_info:
            build_object_key(PurePosixPath("sub/bad\udcff.mp4"), "videos/")

        assert "sub/bad" in str(exc_info.value)

    def test_non_ascii_names_are_kept(self):
        assert build_object_key("caf\u00e9/d\u00e9mo.mp4", "v/") == "v/caf\u00e9/d\u00e9mo.mp4"


class TestContentTypeFor:
    """MIME types come from a fixed table with an octet-stream fallback."""

    @pytest.mark.parametrize("ext,expected", [
        ("mp4", "video/mp4"),
        ("webm", "video/webm"),
        ("mov", "video/quicktime"),
        ("avi", "video/x-msvideo"),
        ("mkv", "video/x-matroska"),
        ("m4v", "video/x-m4v"),
        ("ogv", "video/ogg"),
    ])
    def test_known_extensions(self, ext, expected):
        assert content_type_for(ext) == expected
        assert content_type_for(f".{ext}") == expected

    def test_case_insensitive(self):
        assert content_type_for(".MOV") == "video/quicktime"

    def test_accepts_file_names_and_paths(self):
        assert content_type_for("Intro.MKV") == "video/x-matroska"
        assert content_type_for(PurePosixPath("a/b/c.webm")) == "video/webm"

    @pytest.mark.parametrize("value", ["txt", ".flv", "notes.txt", ""])
    def test_unknown_falls_back_to_octet_stream(self, value):
        assert content_type_for(value) == DEFAULT_CONTENT_TYPE == "application/octet-stream"

    def test_table_covers_every_walked_extension(self):
        from video_storage.core.upload.walker import VIDEO_EXTENSIONS

        assert {ext.lstrip(".") for ext in CONTENT_TYPES} == set(VIDEO_EXTENSIONS)
