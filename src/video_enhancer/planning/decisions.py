"""Copy-versus-encode decision logic.

Each stream is decided independently: it is copied only when it has no
filter stages and its codec may live in the destination container.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from video_enhancer.core.codecs import is_codec_compatible, normalize_container
from video_enhancer.core.exceptions import UnsupportedContainerForCopy
from video_enhancer.domain.enums import DecisionReason, StreamKind
from video_enhancer.domain.models import StreamCodecInfo
from video_enhancer.filters.stages import FilterGraphSpec, TempoStage, TimestampStage

from .types import Copy, Encode, StreamDecisions, StreamMode

logger = logging.getLogger(__name__)


def ensure_copy_compatible(kind: StreamKind, codec: str, container: str) -> None:
    """Check that a stream may be copied into a container.

    Args:
        kind: Stream kind.
        codec: Source codec name.
        container: Destination container extension.

    Raises:
        UnsupportedContainerForCopy: If the codec is not allowed in the container.
    """
    container_key = normalize_container(container)
    if not is_codec_compatible(codec, container_key, kind.value):
        raise UnsupportedContainerForCopy(kind.value, codec, container_key)


def _stage_reasons(stages: Sequence[object]) -> tuple[DecisionReason, ...]:
    reasons: list[DecisionReason] = []
    if any(not isinstance(s, TimestampStage | TempoStage) for s in stages):
        reasons.append(DecisionReason.FILTERS_REQUESTED)
    if any(isinstance(s, TimestampStage | TempoStage) for s in stages):
        reasons.append(DecisionReason.SPEED_CHANGE)
    return tuple(reasons)


def decide_stream_mode(
    kind: StreamKind,
    stages: tuple,
    codec: str | None,
    container: str,
) -> tuple[StreamMode, str | None]:
    """Decide copy or encode for one stream.

    Args:
        kind: Stream kind.
        stages: Filter stages requested for this stream.
        codec: Source codec, or None if the input has no such stream.
        container: Destination container extension.

    Returns:
        Tuple of (mode, warning). warning is set when an otherwise
        copyable stream had to be re-encoded for the container.
    """
    if codec is None:
        # No such stream: nothing to copy or encode, never forces Encode
        if stages:
            logger.debug(
                "Ignoring %s stages: input has no %s stream", kind.value, kind.value
            )
        return Copy(), None

    if stages:
        return Encode(stages=stages, reasons=_stage_reasons(stages)), None

    try:
        ensure_copy_compatible(kind, codec, container)
    except UnsupportedContainerForCopy as e:
        logger.warning(
            "%s",
            e,
            extra={"stream": kind.value, "codec": codec, "container": e.container},
        )
        return Encode(reasons=(DecisionReason.CONTAINER_INCOMPATIBLE,)), str(e)

    return Copy(), None


def decide_streams(
    graph: FilterGraphSpec,
    codec_info: StreamCodecInfo,
    container: str,
) -> StreamDecisions:
    """Decide copy or encode for the video and the audio stream.

    Args:
        graph: Composed filter graph.
        codec_info: Probed codecs of the input.
        container: Destination container extension (e.g., "mp4").

    Returns:
        StreamDecisions with one mode per stream and any fallback warnings.
    """
    video, video_warning = decide_stream_mode(
        StreamKind.VIDEO, graph.video, codec_info.video_codec, container
    )
    audio, audio_warning = decide_stream_mode(
        StreamKind.AUDIO, graph.audio, codec_info.audio_codec, container
    )
    warnings = tuple(w for w in (video_warning, audio_warning) if w)

    logger.debug(
        "Stream decisions: video=%s audio=%s",
        type(video).__name__,
        type(audio).__name__,
    )
    return StreamDecisions(video=video, audio=audio, warnings=warnings)
