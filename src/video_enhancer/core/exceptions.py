"""Exception hierarchy for video-enhancer.

Every error carries enough context (field, offending value, expected domain)
for the CLI to render a precise message. Only UnsupportedContainerForCopy is
recovered from locally; everything else propagates to the caller.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class VideoEnhancerError(Exception):
    """Base class for all video-enhancer errors."""

    pass


class ValidationError(VideoEnhancerError):
    """Raised when user input is out of range or malformed.

    Raised at the boundary, before any planning takes place.
    """

    def __init__(self, field: str, value: Any, expected: str) -> None:
        """Initialize the error.

        Args:
            field: Name of the offending input field (e.g., "brightness").
            value: The rejected value.
            expected: Human-readable description of the accepted domain.
        """
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"Invalid {field}: {value!r} (expected {expected})")


class InvalidEncodeParameter(VideoEnhancerError):
    """Raised when rate control, preset or thread count is outside its domain."""

    def __init__(self, field: str, value: Any, expected: str) -> None:
        """Initialize the error.

        Args:
            field: Encode parameter name ("crf", "preset" or "threads").
            value: The rejected value.
            expected: Human-readable description of the accepted domain.
        """
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(
            f"Invalid encode parameter {field}: {value!r} (expected {expected})"
        )


class UnsupportedContainerForCopy(VideoEnhancerError):
    """Raised when a stream cannot be copied into the destination container.

    Recoverable: callers log a warning and re-encode the stream instead.
    """

    def __init__(self, stream: str, codec: str, container: str) -> None:
        """Initialize the error.

        Args:
            stream: Stream kind ("video" or "audio").
            codec: Codec of the source stream (as reported by ffprobe).
            container: Destination container extension (e.g., "mp4").
        """
        self.stream = stream
        self.codec = codec
        self.container = container
        super().__init__(
            f"{stream} codec '{codec}' cannot be stream-copied into "
            f".{container}; the {stream} stream will be re-encoded"
        )


class ProbeError(VideoEnhancerError):
    """Raised when the input cannot be read or is not a recognized media file."""

    pass


class InputNotFoundError(ProbeError):
    """Raised when the input file does not exist."""

    pass


class ProcessSpawnError(VideoEnhancerError):
    """Raised when an external binary is missing or cannot be started."""

    def __init__(self, tool: str, detail: str, path: Path | None = None) -> None:
        """Initialize the error.

        Args:
            tool: Tool name ("ffmpeg" or "ffprobe").
            detail: Why the tool could not be used.
            path: The path that was tried, if any.
        """
        self.tool = tool
        self.path = path
        location = f" at {path}" if path is not None else ""
        super().__init__(f"Cannot run {tool}{location}: {detail}")


class ProcessExecutionError(VideoEnhancerError):
    """Raised when the external transcoder exits with a non-zero status."""

    def __init__(self, returncode: int, stderr_tail: str = "") -> None:
        """Initialize the error.

        Args:
            returncode: Process exit status.
            stderr_tail: Last lines written to stderr, for diagnosis.
        """
        self.returncode = returncode
        self.stderr_tail = stderr_tail
        message = f"ffmpeg exited with code {returncode}"
        if stderr_tail:
            message += f": {stderr_tail.strip()}"
        super().__init__(message)


class ConfigError(VideoEnhancerError):
    """Raised when the configuration file or environment is invalid."""

    pass
