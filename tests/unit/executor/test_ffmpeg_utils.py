"""Tests for executor/ffmpeg_utils.py."""

from pathlib import Path

from video_enhancer.executor.ffmpeg_utils import (
    TEMP_PREFIX,
    cleanup_temp_file,
    create_temp_output,
    move_into_place,
    validate_output,
)


class TestCreateTempOutput:
    """Tests for create_temp_output."""

    def test_sibling_of_output(self, tmp_path: Path) -> None:
        """The temp file sits next to the output and keeps its extension."""
        temp = create_temp_output(tmp_path / "out.mp4")
        assert temp == tmp_path / f"{TEMP_PREFIX}out.mp4"
        assert temp.suffix == ".mp4"

    def test_custom_dir(self, tmp_path: Path) -> None:
        """A temp directory can be given."""
        temp_dir = tmp_path / "scratch"
        temp = create_temp_output(Path("/videos/out.webm"), temp_dir=temp_dir)
        assert temp == temp_dir / f"{TEMP_PREFIX}out.webm"


class TestValidateOutput:
    """Tests for validate_output."""

    def test_missing(self, tmp_path: Path) -> None:
        """A missing file is invalid."""
        is_valid, error = validate_output(tmp_path / "out.mp4")
        assert not is_valid
        assert "does not exist" in (error or "")

    def test_empty(self, tmp_path: Path) -> None:
        """An empty file is invalid."""
        path = tmp_path / "out.mp4"
        path.touch()
        is_valid, error = validate_output(path)
        assert not is_valid
        assert "empty" in (error or "")

    def test_valid(self, tmp_path: Path) -> None:
        """A non-empty file is valid."""
        path = tmp_path / "out.mp4"
        path.write_bytes(b"data")
        assert validate_output(path) == (True, None)


class TestMoveIntoPlace:
    """Tests for move_into_place."""

    def test_replaces_existing_output(self, tmp_path: Path) -> None:
        """An older output is replaced."""
        temp = tmp_path / ".ve_temp_out.mp4"
        temp.write_bytes(b"new")
        output = tmp_path / "out.mp4"
        output.write_bytes(b"old")

        move_into_place(temp, output)

        assert output.read_bytes() == b"new"
        assert not temp.exists()

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """Missing output directories are created."""
        temp = tmp_path / ".ve_temp_out.mp4"
        temp.write_bytes(b"new")
        output = tmp_path / "nested" / "dir" / "out.mp4"

        move_into_place(temp, output)

        assert output.read_bytes() == b"new"


class TestCleanupTempFile:
    """Tests for cleanup_temp_file."""

    def test_removes_file(self, tmp_path: Path) -> None:
        """An existing temp file is removed."""
        path = tmp_path / ".ve_temp_out.mp4"
        path.write_bytes(b"partial")
        cleanup_temp_file(path)
        assert not path.exists()

    def test_missing_file_is_ignored(self, tmp_path: Path) -> None:
        """A missing temp file is not an error."""
        cleanup_temp_file(tmp_path / "nothing.mp4")
