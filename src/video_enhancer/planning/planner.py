"""Plan assembly and ffmpeg invocation building.

create_encode_plan() runs the whole decision pipeline for one input:
controls are mapped, composed into a filter graph, each stream is decided
Copy or Encode, and the encode parameters are resolved. build_invocation()
turns the resulting EncodePlan into a concrete ffmpeg argument list.
"""

from __future__ import annotations

import logging
from pathlib import Path

from video_enhancer.core.codecs import (
    get_audio_encoder,
    get_video_encoder,
    normalize_container,
)
from video_enhancer.core.exceptions import UnsupportedContainerForCopy
from video_enhancer.domain.enums import DecisionReason, StreamKind
from video_enhancer.domain.models import (
    IDENTITY_SPEED,
    AdjustmentRequest,
    StreamCodecInfo,
)
from video_enhancer.filters.graph import build_filter_graph

from .decisions import decide_streams, ensure_copy_compatible
from .encode_params import (
    DEFAULT_CRF,
    DEFAULT_PRESET,
    DEFAULT_THREADS,
    resolve_encode_parameters,
)
from .types import (
    Copy,
    Encode,
    EncodeParameters,
    EncodePlan,
    InvocationPlan,
    StreamMode,
)

logger = logging.getLogger(__name__)

# Pixel format for libx264 output (broadest player support)
X264_PIX_FMT = "yuv420p"


def create_encode_plan(
    request: AdjustmentRequest,
    speed: float,
    codec_info: StreamCodecInfo,
    container: str,
    crf: int = DEFAULT_CRF,
    preset: str = DEFAULT_PRESET,
    threads: int = DEFAULT_THREADS,
) -> EncodePlan:
    """Decide how to process one input file.

    Encode parameters are resolved first, so an invalid value fails before
    any probing result is acted upon, even when both streams end up copied.

    Args:
        request: Validated adjustment request.
        speed: Playback speed factor (> 0).
        codec_info: Probed codecs of the input.
        container: Destination container extension (e.g., "mp4").
        crf: Rate control value.
        preset: Encoder preset.
        threads: Thread count hint (0 = encoder decides).

    Returns:
        EncodePlan ready for build_invocation().

    Raises:
        InvalidEncodeParameter: If crf, preset or threads is invalid.
        ValidationError: If speed is not a positive finite number.
    """
    parameters = resolve_encode_parameters(crf, preset, threads)
    graph = build_filter_graph(request, speed)
    container_key = normalize_container(container)
    decisions = decide_streams(graph, codec_info, container_key)

    plan = EncodePlan(
        video=decisions.video,
        audio=decisions.audio,
        parameters=parameters,
        graph=graph,
        speed=speed,
        codec_info=codec_info,
        container=container_key,
        warnings=decisions.warnings,
    )
    logger.info(
        "Plan: video=%s audio=%s",
        _mode_label(plan.video),
        _mode_label(plan.audio),
        extra={
            "video_mode": _mode_label(plan.video),
            "audio_mode": _mode_label(plan.audio),
            "video_filter": graph.video_filter(),
            "audio_filter": graph.audio_filter(),
            "container": container_key,
        },
    )
    return plan


def _mode_label(mode: StreamMode) -> str:
    return "copy" if isinstance(mode, Copy) else "encode"


def _recheck_copy(
    kind: StreamKind,
    mode: StreamMode,
    codec: str | None,
    container: str,
    warnings: list[str],
) -> StreamMode:
    """Force Encode for a Copy stream the container cannot hold."""
    if not isinstance(mode, Copy) or codec is None:
        return mode
    try:
        ensure_copy_compatible(kind, codec, container)
    except UnsupportedContainerForCopy as e:
        logger.warning(
            "%s",
            e,
            extra={"stream": kind.value, "codec": codec, "container": e.container},
        )
        warnings.append(str(e))
        return Encode(reasons=(DecisionReason.CONTAINER_INCOMPATIBLE,))
    return mode


def build_map_args() -> list[str]:
    """Select the streams the decisions were made for.

    ffmpeg would otherwise pick streams on its own (highest resolution,
    most audio channels), which may not be the first video and audio
    stream the input was probed for. "V" skips attached pictures, and the
    trailing "?" tolerates inputs without that stream.
    """
    return ["-map", "0:V:0?", "-map", "0:a:0?"]


def build_video_args(
    mode: StreamMode, parameters: EncodeParameters, container: str
) -> list[str]:
    """Build the video stream arguments.

    Args:
        mode: Decision for the video stream.
        parameters: Resolved encode parameters.
        container: Destination container extension.

    Returns:
        List of ffmpeg arguments for the video stream.
    """
    args: list[str] = []

    if isinstance(mode, Copy):
        args.extend(["-c:v", "copy"])
        if parameters.threads > 0:
            args.extend(["-threads", str(parameters.threads)])
        return args

    if mode.stages:
        args.extend(["-vf", ",".join(stage.to_filter() for stage in mode.stages)])

    encoder = get_video_encoder(container).encoder
    args.extend(["-c:v", encoder])
    if encoder == "libvpx-vp9":
        # Constant quality mode needs a zero target bitrate
        args.extend(["-crf", str(parameters.crf), "-b:v", "0"])
    else:
        args.extend(
            [
                "-crf",
                str(parameters.crf),
                "-preset",
                parameters.preset,
                "-pix_fmt",
                X264_PIX_FMT,
            ]
        )
    args.extend(["-threads", str(parameters.threads)])
    return args


def build_audio_args(mode: StreamMode, container: str) -> list[str]:
    """Build the audio stream arguments.

    Args:
        mode: Decision for the audio stream.
        container: Destination container extension.

    Returns:
        List of ffmpeg arguments for the audio stream.
    """
    if isinstance(mode, Copy):
        return ["-c:a", "copy"]

    args: list[str] = []
    if mode.stages:
        args.extend(["-af", ",".join(stage.to_filter() for stage in mode.stages)])

    choice = get_audio_encoder(container)
    args.extend(["-c:a", choice.encoder])
    if choice.bitrate:
        args.extend(["-b:a", choice.bitrate])
    return args


def build_invocation(
    plan: EncodePlan,
    input_path: Path,
    output_path: Path,
    ffmpeg_path: Path,
    verbose: bool = False,
) -> InvocationPlan:
    """Build the ffmpeg invocation for a plan.

    The destination container is taken from output_path. Copy decisions are
    checked again against it, since the caller may write to a container
    other than the one the plan was made for.

    Args:
        plan: Plan from create_encode_plan().
        input_path: Source file.
        output_path: Final destination file.
        ffmpeg_path: Resolved ffmpeg binary.
        verbose: Keep ffmpeg's own log output instead of errors only.

    Returns:
        InvocationPlan with the ordered argument list.
    """
    container = normalize_container(output_path.suffix or plan.container or "")
    codec_info = plan.codec_info
    warnings = list(plan.warnings)

    video = _recheck_copy(
        StreamKind.VIDEO,
        plan.video,
        codec_info.video_codec if codec_info else None,
        container,
        warnings,
    )
    audio = _recheck_copy(
        StreamKind.AUDIO,
        plan.audio,
        codec_info.audio_codec if codec_info else None,
        container,
        warnings,
    )

    pre_input = ["-y", "-hide_banner"]
    if not verbose:
        pre_input.extend(["-loglevel", "error", "-stats"])

    args = build_map_args()
    args.extend(build_video_args(video, plan.parameters, container))
    args.extend(build_audio_args(audio, container))
    args.extend(["-stats_period", "1"])

    invocation = InvocationPlan(
        tool_path=ffmpeg_path,
        input_path=input_path,
        output_path=output_path,
        args=tuple(args),
        pre_input_args=tuple(pre_input),
        video=video,
        audio=audio,
        warnings=tuple(warnings),
    )
    logger.debug(
        "FFmpeg command: %s",
        " ".join(invocation.to_command()),
        extra={"command": invocation.to_command()},
    )
    return invocation


def expected_output_duration(
    duration_seconds: float | None, speed: float = IDENTITY_SPEED
) -> float | None:
    """Duration of the output after the speed change, or None if unknown."""
    if duration_seconds is None or duration_seconds <= 0:
        return None
    return duration_seconds / speed
