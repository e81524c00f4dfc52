"""
Unit tests for the command-line interface.

Settings are passed straight into main() so the host environment never
decides which credentials are used.
"""

from pathlib import Path

import pytest

from video_storage.cli import main
from video_storage.config.settings import Settings


def make_file(root: Path, relative: str, size: int) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"v" * size)


@pytest.fixture
def source_tree(tmp_path):
    make_file(tmp_path, "a.mp4", 10)
    make_file(tmp_path, "sub/b.webm", 20)
    (tmp_path / "readme.txt").write_text("notes")
    return tmp_path


@pytest.fixture
def r2_settings():
    return Settings(
        _env_file=None,
        r2_account_id="acct123",
        r2_access_key_id="key",
        r2_secret_access_key="secret",
        r2_bucket_name="",
        r2_public_url=None,
    )


@pytest.fixture
def mock_settings():
    return Settings(
        _env_file=None,
        storage_mock_mode=True,
        r2_account_id="acct123",
        r2_public_url=None,
        signed_url_expires_in=3600,
    )


class TestUsage:
    """Bad arguments print usage on stdout and exit with 1."""

    @pytest.mark.parametrize("argv", [
        [],
        ["upload"],
        ["upload", "r2"],
        ["upload", "r2", "videos"],
        ["sign", "r2"],
        ["sign", "r2", "a.mp4", "--expires-in", "soon"],
    ])
    def test_missing_arguments(self, argv, capsys, mock_settings):
        with pytest.raises(SystemExit) as exc_info:
            main(argv, settings=mock_settings)

        out, _ = capsys.readouterr()
        assert exc_info.value.code == 1
        assert "usage:" in out


class TestUploadCommand:

    def test_dry_run_reports_plan(self, source_tree, r2_settings, capsys):
        code = main(
            ["upload", "r2", str(source_tree), "media", "--prefix=videos/", "--dry-run"],
            settings=r2_settings,
        )

        out, _ = capsys.readouterr()
        assert code == 0
        assert "Dry run" in out
        assert "a.mp4 -> videos/a.mp4" in out
        assert "sub/b.webm -> videos/sub/b.webm" in out
        assert "readme.txt" not in out
        assert "Would upload 2 files" in out
        assert "(30 bytes)" in out
        assert "https://media.acct123.r2.cloudflarestorage.com/videos/sub/b.webm" in out

    def test_upload_in_mock_mode(self, source_tree, mock_settings, capsys):
        code = main(["upload", "R2", str(source_tree), "media"], settings=mock_settings)

        out, _ = capsys.readouterr()
        assert code == 0
        assert "Uploaded 2 files" in out

    def test_unsupported_provider(self, source_tree, mock_settings, capsys):
        code = main(["upload", "gcs", str(source_tree), "media"], settings=mock_settings)

        _, err = capsys.readouterr()
        assert code == 1
        assert "Unsupported provider" in err

    def test_missing_credentials(self, source_tree, capsys):
        settings = Settings(
            _env_file=None,
            r2_account_id="acct123",
            r2_access_key_id="",
            r2_secret_access_key="secret",
        )

        code = main(["upload", "r2", str(source_tree), "media"], settings=settings)

        out, err = capsys.readouterr()
        assert code == 1
        assert "R2_ACCESS_KEY_ID" in err
        assert "a.mp4" not in out

    def test_missing_source_directory(self, tmp_path, mock_settings, capsys):
        code = main(["upload", "s3", str(tmp_path / "missing"), "media"], settings=mock_settings)

        _, err = capsys.readouterr()
        assert code == 1
        assert "Error: Source directory not found" in err

    def test_blank_bucket_is_a_configuration_error(self, source_tree, mock_settings, capsys):
        code = main(["upload", "r2", str(source_tree), "  "], settings=mock_settings)

        out, err = capsys.readouterr()
        assert code == 1
        assert "bucket_name" in err
        assert "a.mp4" not in out

    def test_urls_listed_once_per_key(self, source_tree, mock_settings, capsys):
        main(["upload", "r2", str(source_tree), "media", "--prefix=v/"], settings=mock_settings)

        out, _ = capsys.readouterr()
        urls = [line.strip() for line in out.split("URLs:")[1].strip().splitlines()]
        assert urls == [
            "v/a.mp4: https://media.acct123.r2.cloudflarestorage.com/v/a.mp4",
            "v/sub/b.webm: https://media.acct123.r2.cloudflarestorage.com/v/sub/b.webm",
        ]


class TestSignCommand:

    def test_prints_signed_url(self, mock_settings, capsys):
        code = main(["sign", "r2", "videos/a.mp4", "--expires-in=60"], settings=mock_settings)

        out, _ = capsys.readouterr()
        assert code == 0
        assert out.strip() == "mock://storage/videos/a.mp4?expires_in=60"

    def test_default_expiry_from_settings(self, mock_settings, capsys):
        main(["sign", "s3", "videos/a.mp4"], settings=mock_settings)

        out, _ = capsys.readouterr()
        assert out.strip().endswith("expires_in=3600")

    def test_missing_bucket_variable(self, r2_settings, capsys):
        code = main(["sign", "r2", "videos/a.mp4"], settings=r2_settings)

        _, err = capsys.readouterr()
        assert code == 1
        assert "R2_BUCKET_NAME" in err

    def test_invalid_expiry(self, mock_settings, capsys):
        code = main(["sign", "r2", "a.mp4", "--expires-in", "0"], settings=mock_settings)

        _, err = capsys.readouterr()
        assert code == 1
        assert "expires_in" in err
