"""Plan data types.

StreamMode is a small tagged union: a stream is either copied (Copy) or
re-encoded with a filter graph (Encode). Copy carries no stages, so a
"copy with filters" state cannot be constructed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from video_enhancer.domain.enums import DecisionReason
from video_enhancer.domain.models import StreamCodecInfo
from video_enhancer.filters.stages import AudioStage, FilterGraphSpec, VideoStage


@dataclass(frozen=True)
class Copy:
    """Pass the stream through without decoding."""

    @property
    def is_copy(self) -> bool:
        return True


@dataclass(frozen=True)
class Encode:
    """Re-encode the stream, applying the given stages first."""

    stages: tuple[VideoStage, ...] | tuple[AudioStage, ...] = ()
    reasons: tuple[DecisionReason, ...] = ()

    @property
    def is_copy(self) -> bool:
        return False


StreamMode = Copy | Encode


@dataclass(frozen=True)
class StreamDecisions:
    """Independent copy/encode decisions for both streams."""

    video: StreamMode
    audio: StreamMode
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class EncodeParameters:
    """Validated global encode parameters."""

    crf: int
    """Rate control value (lower = higher quality)."""

    preset: str
    """Encoder effort label (e.g., "slow")."""

    threads: int = 0
    """Thread count hint; 0 lets the encoder decide."""


@dataclass(frozen=True)
class EncodePlan:
    """Resolved decision for one invocation.

    Handed unchanged from planning to the invocation layer.
    """

    video: StreamMode
    audio: StreamMode
    parameters: EncodeParameters
    graph: FilterGraphSpec = field(default_factory=FilterGraphSpec)
    speed: float = 1.0
    codec_info: StreamCodecInfo | None = None
    container: str | None = None
    warnings: tuple[str, ...] = ()

    @property
    def is_pure_copy(self) -> bool:
        """True if both streams are copied."""
        return isinstance(self.video, Copy) and isinstance(self.audio, Copy)

    @property
    def needs_encode(self) -> bool:
        """True if at least one stream is re-encoded."""
        return not self.is_pure_copy


@dataclass(frozen=True)
class InvocationPlan:
    """Complete, ordered transcoder invocation."""

    tool_path: Path
    input_path: Path
    output_path: Path
    args: tuple[str, ...]
    """Arguments between the input and the output path."""

    pre_input_args: tuple[str, ...] = ()
    """Global flags placed before -i."""

    video: StreamMode = field(default_factory=Copy)
    """Video decision the args were rendered from."""

    audio: StreamMode = field(default_factory=Copy)
    """Audio decision the args were rendered from."""

    warnings: tuple[str, ...] = ()

    def to_command(self, destination: Path | None = None) -> list[str]:
        """Render the full argv.

        Args:
            destination: Output path to write to (defaults to output_path).
                The executor passes a temporary sibling path here.

        Returns:
            Command line as a list of strings.
        """
        target = destination if destination is not None else self.output_path
        return [
            str(self.tool_path),
            *self.pre_input_args,
            "-i",
            str(self.input_path),
            *self.args,
            str(target),
        ]
