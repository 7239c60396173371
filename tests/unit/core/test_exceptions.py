"""Tests for core/exceptions.py."""

from pathlib import Path

from video_enhancer.core.exceptions import (
    InputNotFoundError,
    InvalidEncodeParameter,
    ProbeError,
    ProcessExecutionError,
    ProcessSpawnError,
    UnsupportedContainerForCopy,
    ValidationError,
    VideoEnhancerError,
)


class TestMessages:
    """Errors carry their context in the message."""

    def test_validation_error(self) -> None:
        """ValidationError names the field, value and expected domain."""
        error = ValidationError("brightness", 150, "an integer between 0 and 100")
        assert error.field == "brightness"
        assert error.value == 150
        assert "brightness" in str(error)
        assert "150" in str(error)
        assert "between 0 and 100" in str(error)

    def test_invalid_encode_parameter(self) -> None:
        """InvalidEncodeParameter names the parameter."""
        error = InvalidEncodeParameter("crf", 60, "an integer between 0 and 51")
        assert str(error).startswith("Invalid encode parameter crf: 60")

    def test_unsupported_container(self) -> None:
        """UnsupportedContainerForCopy mentions codec and container."""
        error = UnsupportedContainerForCopy("video", "vp9", "mp4")
        assert "vp9" in str(error)
        assert ".mp4" in str(error)

    def test_process_spawn_error_with_path(self) -> None:
        """ProcessSpawnError includes the tried path."""
        error = ProcessSpawnError("ffmpeg", "not found", Path("/opt/ffmpeg"))
        assert str(error) == "Cannot run ffmpeg at /opt/ffmpeg: not found"

    def test_process_execution_error_includes_tail(self) -> None:
        """ProcessExecutionError appends the stderr tail."""
        error = ProcessExecutionError(1, "Invalid argument\n")
        assert error.returncode == 1
        assert str(error) == "ffmpeg exited with code 1: Invalid argument"


class TestHierarchy:
    """Tests for the exception hierarchy."""

    def test_all_derive_from_base(self) -> None:
        """Every error is a VideoEnhancerError."""
        for error_type in (
            ValidationError,
            InvalidEncodeParameter,
            UnsupportedContainerForCopy,
            ProbeError,
            ProcessSpawnError,
            ProcessExecutionError,
        ):
            assert issubclass(error_type, VideoEnhancerError)

    def test_input_not_found_is_probe_error(self) -> None:
        """A missing input is a kind of probe failure."""
        assert issubclass(InputNotFoundError, ProbeError)
