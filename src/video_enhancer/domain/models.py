"""Domain models for video-enhancer.

These models represent the user's request and the probed facts about the
input file, independent of the CLI and of ffmpeg's syntax.
"""

from __future__ import annotations

from dataclasses import dataclass

# Control value meaning "no change" for every 0-100 adjustment
IDENTITY_CONTROL_VALUE = 50

# Speed factor meaning "unchanged"
IDENTITY_SPEED = 1.0

CONTROL_MIN = 0
CONTROL_MAX = 100

ADJUSTMENT_FIELDS: tuple[str, ...] = (
    "brightness",
    "contrast",
    "saturation",
    "sharpen",
    "denoise",
)


@dataclass(frozen=True)
class AdjustmentRequest:
    """Requested color/detail adjustments.

    Each control is an integer in [0, 100] with 50 meaning "no change".
    Values are validated at the boundary (see video_enhancer.options)
    before an AdjustmentRequest is constructed.
    """

    brightness: int = IDENTITY_CONTROL_VALUE
    contrast: int = IDENTITY_CONTROL_VALUE
    saturation: int = IDENTITY_CONTROL_VALUE
    sharpen: int = IDENTITY_CONTROL_VALUE
    denoise: int = IDENTITY_CONTROL_VALUE

    scale_height: int | None = None
    """Output height in pixels (even), or None to keep the source height."""

    @property
    def is_identity(self) -> bool:
        """True if no adjustment at all was requested."""
        return self.scale_height is None and all(
            getattr(self, name) == IDENTITY_CONTROL_VALUE
            for name in ADJUSTMENT_FIELDS
        )


@dataclass(frozen=True)
class StreamCodecInfo:
    """Codec snapshot of an input file, as reported by the prober."""

    video_codec: str | None
    """Codec of the first video stream, or None if the file has no video."""

    audio_codec: str | None
    """Codec of the first audio stream, or None if the file has no audio."""

    container_format: str | None = None
    duration_seconds: float | None = None

    @property
    def has_video(self) -> bool:
        """True if the input has a video stream."""
        return self.video_codec is not None

    @property
    def has_audio(self) -> bool:
        """True if the input has an audio stream."""
        return self.audio_codec is not None
