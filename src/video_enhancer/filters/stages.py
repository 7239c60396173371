"""Filter stages and filter graph specification.

A filter graph is an ordered tuple of stages per stream. Each stage is a
frozen dataclass that knows how to render itself in ffmpeg filter syntax.
A control at its identity point has no stage at all.

Video stage order is fixed: denoise, sharpen, color, scale, timestamp.
The only audio stage is tempo.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

# atempo accepts factors in [0.5, 2.0] on every ffmpeg release; larger
# changes are expressed as a chain whose product is the requested tempo.
ATEMPO_MIN = 0.5
ATEMPO_MAX = 2.0
_ATEMPO_EPSILON = 1e-6


@dataclass(frozen=True)
class DenoiseStage:
    """hqdn3d spatial/temporal denoise."""

    name: ClassVar[str] = "denoise"

    spatial: float
    temporal: float

    def to_filter(self) -> str:
        s = f"{self.spatial:.3f}"
        t = f"{self.temporal:.3f}"
        return f"hqdn3d={s}:{s}:{t}:{t}"


@dataclass(frozen=True)
class SharpenStage:
    """unsharp mask on luma with a 7x7 matrix."""

    name: ClassVar[str] = "sharpen"

    amount: float

    def to_filter(self) -> str:
        return f"unsharp=luma_msize_x=7:luma_msize_y=7:luma_amount={self.amount:.3f}"


@dataclass(frozen=True)
class ColorStage:
    """Combined eq stage for brightness, contrast and saturation.

    Controls left at identity keep eq's neutral value inside the stage.
    """

    name: ClassVar[str] = "color"

    brightness: float = 0.0
    contrast: float = 1.0
    saturation: float = 1.0

    def to_filter(self) -> str:
        return (
            f"eq=contrast={self.contrast:.6f}"
            f":saturation={self.saturation:.6f}"
            f":brightness={self.brightness:.6f}"
        )


@dataclass(frozen=True)
class ScaleStage:
    """Downscale to a fixed height, width derived to keep aspect ratio."""

    name: ClassVar[str] = "scale"

    height: int

    def to_filter(self) -> str:
        return f"scale=-2:{self.height}"


@dataclass(frozen=True)
class TimestampStage:
    """Video presentation timestamp scaling for a speed change."""

    name: ClassVar[str] = "speed"

    speed: float

    @property
    def pts_factor(self) -> float:
        """Multiplier applied to every video timestamp (1 / speed)."""
        return 1.0 / self.speed

    def to_filter(self) -> str:
        return f"setpts=PTS/{self.speed!r}"


@dataclass(frozen=True)
class TempoStage:
    """Audio tempo scaling for a speed change (pitch preserved)."""

    name: ClassVar[str] = "speed"

    tempo: float

    def atempo_factors(self) -> tuple[float, ...]:
        """Split the tempo into atempo factors each within [0.5, 2.0].

        The product of the returned factors equals the tempo.
        """
        factors: list[float] = []
        remaining = self.tempo
        while remaining > ATEMPO_MAX + _ATEMPO_EPSILON:
            factors.append(ATEMPO_MAX)
            remaining /= ATEMPO_MAX
        while remaining < ATEMPO_MIN - _ATEMPO_EPSILON:
            factors.append(ATEMPO_MIN)
            remaining /= ATEMPO_MIN
        if not factors or abs(remaining - 1.0) > _ATEMPO_EPSILON:
            factors.append(remaining)
        return tuple(factors)

    def to_filter(self) -> str:
        parts = []
        for factor in self.atempo_factors():
            if factor in (ATEMPO_MIN, ATEMPO_MAX):
                parts.append(f"atempo={factor:.1f}")
            else:
                parts.append(f"atempo={factor:.6f}")
        return ",".join(parts)


VideoStage = DenoiseStage | SharpenStage | ColorStage | ScaleStage | TimestampStage
AudioStage = TempoStage

VIDEO_STAGE_ORDER: tuple[type, ...] = (
    DenoiseStage,
    SharpenStage,
    ColorStage,
    ScaleStage,
    TimestampStage,
)


@dataclass(frozen=True)
class FilterGraphSpec:
    """Ordered filter stages for the video and audio paths.

    Built once per invocation and never mutated. An empty tuple for a stream
    means "nothing to apply" and is what makes stream copy possible.
    """

    video: tuple[VideoStage, ...] = ()
    audio: tuple[AudioStage, ...] = ()

    def __post_init__(self) -> None:
        """Enforce the fixed stage order."""
        positions = [VIDEO_STAGE_ORDER.index(type(stage)) for stage in self.video]
        if positions != sorted(set(positions)):
            names = ", ".join(stage.name for stage in self.video)
            raise ValueError(f"Video stages out of order or repeated: {names}")
        if any(not isinstance(stage, TempoStage) for stage in self.audio):
            raise ValueError("Audio graph only supports tempo stages")
        if len(self.audio) > 1:
            raise ValueError("Audio graph holds at most one tempo stage")

    @property
    def is_empty(self) -> bool:
        """True if neither stream has any stage."""
        return not self.video and not self.audio

    @property
    def video_stage_names(self) -> tuple[str, ...]:
        """Names of the video stages, in order."""
        return tuple(stage.name for stage in self.video)

    def video_filter(self) -> str | None:
        """Render the video graph (-vf argument), or None if empty."""
        if not self.video:
            return None
        return ",".join(stage.to_filter() for stage in self.video)

    def audio_filter(self) -> str | None:
        """Render the audio graph (-af argument), or None if empty."""
        if not self.audio:
            return None
        return ",".join(stage.to_filter() for stage in self.audio)
